"""
Logging System for ConfigMaster
Environment-aware configuration of the service's named loggers
"""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from configmaster.utils.log_filters import create_filters
from configmaster.utils.log_formatters import get_formatter, ContextualLoggerAdapter

LOGGER_NAMESPACE = "configmaster"


class LoggingConfig:
    """
    Centralized logging configuration with environment awareness
    """

    def __init__(self, environment: str = "production", level: Optional[str] = None,
                 log_to_file: bool = False, log_directory: Union[str, Path] = "logs"):
        self.environment = environment
        self.is_production = environment == "production"
        self.log_to_file = log_to_file
        self.log_directory = Path(log_directory)

        # Default log levels by environment
        self.default_levels = {
            'development': logging.DEBUG,
            'staging': logging.INFO,
            'production': logging.INFO
        }
        self.level = self._resolve_level(level)

        # Logger configurations
        self.logger_configs = {
            'api': {'file': 'api.log'},
            'config': {'file': 'config.log'},
        }

        if self.log_to_file:
            self.log_directory.mkdir(parents=True, exist_ok=True)
        self._configured_loggers = set()

    def _resolve_level(self, level: Optional[str]) -> int:
        if level:
            resolved = logging.getLevelName(level.upper())
            if isinstance(resolved, int):
                return resolved
        return self.default_levels.get(self.environment, logging.INFO)

    def get_logger(self, name: str, **context) -> Union[logging.Logger, ContextualLoggerAdapter]:
        """
        Get a configured logger

        Args:
            name: Logger name (e.g., 'api', 'config')
            **context: Additional context to add to all log messages

        Returns:
            Configured logger, wrapped in an adapter when context is given
        """
        logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")

        if name not in self._configured_loggers:
            self._configure_logger(logger, name)
            self._configured_loggers.add(name)

        if context:
            return ContextualLoggerAdapter(logger, context)

        return logger

    def _configure_logger(self, logger: logging.Logger, name: str):
        """Configure a specific logger with handlers, filters, and formatters"""

        # Drop handlers left over from a previous configuration
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

        logger.setLevel(self.level)
        logger.addHandler(self._create_console_handler())

        if self.log_to_file:
            file_handler = self._create_file_handler(name)
            if file_handler:
                logger.addHandler(file_handler)

        logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.level)
        handler.setFormatter(get_formatter(self.environment))

        for filter_obj in create_filters(self.environment):
            handler.addFilter(filter_obj)

        return handler

    def _create_file_handler(self, logger_name: str) -> Optional[logging.handlers.RotatingFileHandler]:
        """Create rotating file handler for persistent logging"""
        config = self.logger_configs.get(logger_name, {})
        filepath = self.log_directory / config.get('file', f'{logger_name}.log')

        try:
            handler = logging.handlers.RotatingFileHandler(
                filepath,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        except OSError as e:
            # Console logging keeps working without the file
            sys.stderr.write(f"Failed to create file handler for {logger_name}: {e}\n")
            return None

        handler.setLevel(self.level)
        # Files are always machine-readable
        handler.setFormatter(get_formatter('production'))

        for filter_obj in create_filters(self.environment):
            handler.addFilter(filter_obj)

        return handler


# Global logging configuration instance
_logging_config: Optional[LoggingConfig] = None


def initialize_logging(environment: str = "production", level: Optional[str] = None,
                       log_to_file: bool = False, log_directory: Union[str, Path] = "logs") -> LoggingConfig:
    """
    Initialize the global logging configuration

    Calling it again replaces the handlers of every logger handed out
    afterwards.

    Args:
        environment: Current environment (development, staging, production)
        level: Log level name; falls back to the environment default
        log_to_file: Also write rotating log files
        log_directory: Directory for log files
    """
    global _logging_config
    _logging_config = LoggingConfig(environment, level, log_to_file, log_directory)

    # Minimal handler for third-party loggers in development
    root_logger = logging.getLogger()
    if environment == 'development' and not root_logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(get_formatter(environment))
        root_logger.addHandler(console_handler)

    return _logging_config


def get_logger(name: str, **context) -> Union[logging.Logger, ContextualLoggerAdapter]:
    """
    Get a configured logger

    Example:
        logger = get_logger('api', correlation_id=correlation_id)
        logger.info("Request handled")
    """
    if _logging_config is None:
        # Auto-initialize with safe defaults
        initialize_logging()

    return _logging_config.get_logger(name, **context)


def get_api_logger(**context):
    """Get HTTP API logger"""
    return get_logger('api', **context)


def get_config_logger(**context):
    """Get configuration logger"""
    return get_logger('config', **context)
