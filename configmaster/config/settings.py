"""
Application Settings and Configuration
"""
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from decouple import config
from pydantic import AliasChoices, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

# Namespace prefix of the application properties
APP_PREFIX = "app"

# Read from the working directory when no file is named explicitly
DEFAULT_PROPERTIES_FILE = "application.properties"


class ConfigurationError(Exception):
    """Application configuration could not be loaded"""


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = config("ENVIRONMENT", default="development")
    DEBUG: bool = config("DEBUG", default=False, cast=bool)

    # Server
    HOST: str = config("HOST", default="127.0.0.1")
    PORT: int = config("PORT", default=8080, cast=int)

    # Logging
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_TO_FILE: bool = config("LOG_TO_FILE", default=False, cast=bool)
    LOG_DIRECTORY: str = config("LOG_DIRECTORY", default="logs")

    # Application properties file; empty means the optional default file
    CONFIG_FILE: str = config("CONFIG_FILE", default="")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def _app_key(field_name: str) -> AliasChoices:
    # app.name in files and overrides, APP_NAME in the environment
    return AliasChoices(f"{APP_PREFIX}.{field_name}", f"{APP_PREFIX}_{field_name}")


# key=value or key: value; the value keeps everything after the separator
_PROPERTY_LINE = re.compile(r"^\s*([^=:\s]+)\s*[=:]\s*(.*)$")


class PropertiesFileSettingsSource(PydanticBaseSettingsSource):
    """
    Reads ``app.*`` keys from a properties file

    Values are taken literally: quotes and ``#`` inside a value are kept.
    Lines starting with ``#`` or ``!`` are comments. Keys are matched
    case-insensitively, and lines that are not key/value pairs are skipped.
    """

    def __init__(self, settings_cls: Type[BaseSettings], properties_file: Any,
                 encoding: Optional[str] = None):
        super().__init__(settings_cls)
        self.properties_file = properties_file
        self.encoding = encoding or "utf-8"
        self.properties = self._read_properties()

    def _read_properties(self) -> Dict[str, str]:
        if not self.properties_file:
            return {}
        path = Path(self.properties_file)
        if not path.is_file():
            return {}

        properties = {}
        with path.open(encoding=self.encoding) as fh:
            for line in fh:
                line = line.rstrip("\r\n")
                if line.lstrip().startswith(("#", "!")):
                    continue
                match = _PROPERTY_LINE.match(line)
                if match:
                    properties[match.group(1).lower()] = match.group(2)
        return properties

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        key = f"{APP_PREFIX}.{field_name}"
        return self.properties.get(key), key, False

    def __call__(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                data[key] = value
        return data


class AppProperties(BaseSettings):
    """
    Application properties bound from the ``app`` namespace

    Sources, highest precedence first:
    - keyword arguments using the dotted key (``app.name``)
    - environment variables (``APP_NAME`` or ``app.name``)
    - a properties file of ``app.name=value`` lines

    Absent keys bind as empty strings. Instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_file=DEFAULT_PROPERTIES_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    name: str = Field(default="", validation_alias=_app_key("name"))
    description: str = Field(default="", validation_alias=_app_key("description"))
    version: str = Field(default="", validation_alias=_app_key("version"))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # The file named by _env_file is read as a properties file, not dotenv
        properties_settings = PropertiesFileSettingsSource(
            settings_cls,
            getattr(dotenv_settings, "env_file", None),
            settings_cls.model_config.get("env_file_encoding"),
        )
        return init_settings, env_settings, properties_settings

    def summary(self) -> str:
        """Human-readable one-line summary served by the info endpoint"""
        return f"App Name: {self.name}, Description: {self.description}, Version: {self.version}"


def _namespaced_overrides(overrides: Mapping[str, str]) -> Dict[str, str]:
    """Validate override keys against the ``app`` namespace"""
    values = {}
    for key, value in overrides.items():
        normalized = key.strip().lower()
        namespace, _, field_name = normalized.partition(".")
        if namespace != APP_PREFIX or field_name not in AppProperties.model_fields:
            raise ConfigurationError(f"Unknown application property: {key}")
        values[f"{APP_PREFIX}.{field_name}"] = value
    return values


def load_app_properties(properties_file: Optional[str] = None,
                        overrides: Optional[Mapping[str, str]] = None) -> AppProperties:
    """
    Bind the application properties once at startup

    Args:
        properties_file: Properties file to read. When omitted the default
            ``application.properties`` is read if it exists.
        overrides: Values keyed by dotted name that beat every other source

    Returns:
        Frozen AppProperties

    Raises:
        ConfigurationError: Named file missing, unknown override key, or
            unreadable source
    """
    if properties_file:
        path = Path(properties_file)
        if not path.is_file():
            raise ConfigurationError(f"Properties file not found: {properties_file}")
    else:
        path = Path(DEFAULT_PROPERTIES_FILE)

    values = _namespaced_overrides(overrides or {})

    try:
        return AppProperties(_env_file=path, **values)
    except (ValidationError, SettingsError, OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to load application properties from {path}: {e}") from e
