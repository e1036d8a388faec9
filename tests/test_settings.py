"""Tests for binding application properties."""

import pytest
from pydantic import ValidationError

from configmaster.config.settings import (
    AppProperties,
    ConfigurationError,
    Settings,
    load_app_properties,
)
from configmaster.main import create_app


def test_all_keys_absent_bind_as_empty_strings():
    properties = load_app_properties()
    assert (properties.name, properties.description, properties.version) == ("", "", "")


def test_environment_variables_bind(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Widget")
    monkeypatch.setenv("APP_VERSION", "3.1")

    properties = load_app_properties()
    assert properties.name == "Widget"
    assert properties.description == ""
    assert properties.version == "3.1"


def test_explicit_properties_file(tmp_path):
    path = tmp_path / "custom.properties"
    path.write_text(
        "# service identity\n"
        "app.name=Gadget\n"
        "app.description=Reads a named file\n"
        "server.port=9000\n"
    )

    properties = load_app_properties(str(path))
    assert properties.name == "Gadget"
    assert properties.description == "Reads a named file"
    assert properties.version == ""


def test_properties_file_values_are_literal(tmp_path):
    path = tmp_path / "literal.properties"
    path.write_text(
        "! legacy comment\n"
        "   # indented comment\n"
        "app.name=Shop #1\n"
        'app.description="Quoted"\n'
        "APP.VERSION : 1.0 # beta\n"
        "not a property line\n"
    )

    properties = load_app_properties(str(path))
    assert properties.name == "Shop #1"
    assert properties.description == '"Quoted"'
    assert properties.version == "1.0 # beta"
    assert properties.summary() == 'App Name: Shop #1, Description: "Quoted", Version: 1.0 # beta'


def test_invalid_utf8_properties_file_fails_fast(tmp_path):
    path = tmp_path / "broken.properties"
    path.write_bytes(b"app.name=\xff\xfe\n")

    with pytest.raises(ConfigurationError, match="Failed to load application properties"):
        load_app_properties(str(path))


def test_environment_beats_properties_file(tmp_path, monkeypatch):
    path = tmp_path / "app.properties"
    path.write_text("app.name=FromFile\napp.version=1.0\n")
    monkeypatch.setenv("APP_NAME", "FromEnv")

    properties = load_app_properties(str(path))
    assert properties.name == "FromEnv"
    assert properties.version == "1.0"


def test_overrides_beat_environment(monkeypatch):
    monkeypatch.setenv("APP_NAME", "FromEnv")

    properties = load_app_properties(overrides={"app.name": "FromCli", "APP.Version": "9"})
    assert properties.name == "FromCli"
    assert properties.version == "9"


def test_missing_explicit_file_fails_fast(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_app_properties(str(tmp_path / "missing.properties"))


def test_directory_as_properties_file_fails_fast(tmp_path):
    with pytest.raises(ConfigurationError):
        load_app_properties(str(tmp_path))


@pytest.mark.parametrize("key", ["name", "server.port", "app.colour"])
def test_unknown_override_keys_are_rejected(key):
    with pytest.raises(ConfigurationError, match="Unknown application property"):
        load_app_properties(overrides={key: "x"})


def test_properties_are_frozen():
    properties = load_app_properties(overrides={"app.name": "Widget"})
    with pytest.raises(ValidationError):
        properties.name = "Changed"
    assert properties.name == "Widget"


def test_summary_format():
    properties = AppProperties(**{"app.name": "A", "app.description": "B", "app.version": "C"})
    assert properties.summary() == "App Name: A, Description: B, Version: C"


def test_create_app_fails_at_startup_on_missing_file(settings):
    broken = settings.model_copy(update={"CONFIG_FILE": "does-not-exist.properties"})
    with pytest.raises(ConfigurationError):
        create_app(settings=broken)


def test_server_settings_accept_explicit_values():
    settings = Settings(ENVIRONMENT="staging", PORT=9001, DEBUG=True)
    assert settings.ENVIRONMENT == "staging"
    assert settings.PORT == 9001
    assert settings.DEBUG is True
