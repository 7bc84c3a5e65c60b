"""Shared dependencies: structured logger and error hierarchy."""

import json
import logging
from typing import Any

from blog_search.config import get_settings

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        data.update(
            {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}
        )
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    settings = get_settings()
    logger = logging.getLogger("blog_search")
    logger.setLevel(getattr(logging, settings.log_level.upper()))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


logger = setup_logging()


class BlogSearchError(Exception):
    """Base exception for blog search operations."""

    pass


class LoadError(BlogSearchError):
    """Raised when the corpus source is missing or malformed."""

    pass


class IndexBuildError(BlogSearchError):
    """Raised when the search index cannot be built from post sources."""

    pass
