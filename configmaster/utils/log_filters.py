"""
Logging Filters
Keeps file paths short and protects log sinks from flooding
"""
import logging
import re
import time
from typing import Dict, List


class PathSanitizingFilter(logging.Filter):
    """
    Filter that strips host-specific directory information from
    record paths and, in production, from formatted stack traces
    """

    def __init__(self, environment: str = "production"):
        super().__init__()
        self.environment = environment
        self.is_production = environment == "production"

        # Sensitive path patterns to redact
        self.sensitive_paths = [
            re.compile(r'/home/[^/]+'),  # User home directories
            re.compile(r'/Users/[^/]+'),  # macOS home directories
            re.compile(r'C:\\Users\\[^\\]+'),  # Windows user directories
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        if self.is_production and getattr(record, 'exc_text', None):
            record.exc_text = self._sanitize_stack_trace(record.exc_text)

        if hasattr(record, 'pathname'):
            record.pathname = self._sanitize_path(record.pathname)

        return True

    def _sanitize_stack_trace(self, exc_text: str) -> str:
        sanitized = exc_text
        for pattern in self.sensitive_paths:
            sanitized = pattern.sub('[PATH_REDACTED]', sanitized)
        return sanitized

    def _sanitize_path(self, path: str) -> str:
        """Keep only the filename and its immediate parent directory"""
        parts = path.replace('\\', '/').split('/')
        if len(parts) > 2:
            return f".../{'/'.join(parts[-2:])}"
        return path


class RateLimitFilter(logging.Filter):
    """
    Rate limiting filter to prevent log flooding
    """

    def __init__(self, max_logs_per_minute: int = 100):
        super().__init__()
        self.max_logs_per_minute = max_logs_per_minute
        self.log_counts: Dict[str, int] = {}
        self.last_reset = 0

    def filter(self, record: logging.LogRecord) -> bool:
        current_minute = int(time.time() / 60)

        if current_minute != self.last_reset:
            self.log_counts.clear()
            self.last_reset = current_minute

        # Count logs by logger name and level
        key = f"{record.name}:{record.levelname}"
        self.log_counts[key] = self.log_counts.get(key, 0) + 1

        if self.log_counts[key] <= self.max_logs_per_minute:
            return True

        # First record over the limit becomes the notice
        if self.log_counts[key] == self.max_logs_per_minute + 1:
            record.msg = f"Rate limit reached for {key} - suppressing further logs this minute"
            record.args = ()
            return True

        return False


def create_filters(environment: str = "production") -> List[logging.Filter]:
    """
    Create the filters attached to every handler

    Args:
        environment: Current environment (development, staging, production)

    Returns:
        List of configured logging filters
    """
    filters: List[logging.Filter] = [PathSanitizingFilter(environment)]

    if environment == "production":
        filters.append(RateLimitFilter(max_logs_per_minute=200))

    return filters
