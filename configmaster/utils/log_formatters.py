"""
Log Formatters for Different Environments
Human-readable output for development, JSON for production
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, Tuple

# Attributes every LogRecord carries; anything else arrived through ``extra``
STANDARD_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'message', 'exc_info',
    'exc_text', 'stack_info', 'taskName'
}


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development environment
    """

    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, include_colors: bool = True):
        super().__init__()
        self.include_colors = include_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, '') if self.include_colors else ''
        reset = self.COLORS['RESET'] if self.include_colors else ''

        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S.%f')[:-3]

        message = f"{color}{timestamp} | {record.levelname:<8} | {record.name:<20} | {record.getMessage()}{reset}"

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            message += f"\n{color}Exception Details:\n{exc_text}{reset}"

        extra = get_extra_data(record)
        if extra:
            message += f"\n{color}Context: {safe_json_dumps(extra)}{reset}"

        return message


class ProductionFormatter(logging.Formatter):
    """
    JSON formatter for production environment
    Machine-readable format suitable for log aggregation services
    """

    def __init__(self, include_traceback: bool = False):
        super().__init__()
        self.include_traceback = include_traceback

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info) if self.include_traceback else '[REDACTED]'
            }

        extra = get_extra_data(record, exclude={'correlation_id'})
        if extra:
            log_entry['extra'] = extra

        # Correlation ID ties request and response records together
        if hasattr(record, 'correlation_id'):
            log_entry['correlation_id'] = record.correlation_id

        return safe_json_dumps(log_entry, compact=True)


class StagingFormatter(logging.Formatter):
    """
    Hybrid formatter for staging environment
    Readable output, JSON for errors
    """

    def __init__(self):
        super().__init__()
        self.dev_formatter = DevelopmentFormatter(include_colors=False)
        self.prod_formatter = ProductionFormatter(include_traceback=True)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.ERROR:
            return self.prod_formatter.format(record)
        return self.dev_formatter.format(record)


def get_extra_data(record: logging.LogRecord, exclude=frozenset()) -> Dict[str, Any]:
    """Extract the ``extra`` fields attached to a log record"""
    return {
        key: value for key, value in record.__dict__.items()
        if key not in STANDARD_ATTRS and key not in exclude and not key.startswith('_')
    }


def safe_json_dumps(data: Dict[str, Any], compact: bool = False) -> str:
    """
    Serialize log data to JSON without ever raising
    """
    separators = (',', ':') if compact else None
    try:
        return json.dumps(data, default=str, separators=separators)
    except (TypeError, ValueError) as e:
        return json.dumps({
            'error': 'Failed to serialize log data',
            'error_type': type(e).__name__,
            'message': str(data.get('message', 'Unknown message'))
        }, separators=separators)


def get_formatter(environment: str) -> logging.Formatter:
    """
    Get appropriate formatter based on environment

    Args:
        environment: Current environment (development, staging, production)

    Returns:
        Configured logging formatter
    """
    if environment == 'development':
        return DevelopmentFormatter(include_colors=True)
    elif environment == 'staging':
        return StagingFormatter()
    # Unknown environments get the production formatter
    return ProductionFormatter(include_traceback=False)


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds contextual information to all log records
    """

    def __init__(self, logger: logging.Logger, extra: Dict[str, Any]):
        super().__init__(logger, extra)

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        extra = dict(kwargs.get('extra') or {})
        extra.update(self.extra)
        kwargs['extra'] = extra
        return msg, kwargs

    def with_context(self, **context) -> 'ContextualLoggerAdapter':
        """
        Create a new adapter with additional context
        """
        return ContextualLoggerAdapter(self.logger, {**self.extra, **context})
