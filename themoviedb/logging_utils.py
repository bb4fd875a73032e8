"""Logging setup and API key redaction."""

import logging
from pathlib import Path
from typing import Optional

from .config import LoggingSettings

REDACTED = "[API_KEY]"


def redact(text: str, api_key: Optional[str]) -> str:
    """Replace every occurrence of the API key in ``text``."""
    if not api_key or not text:
        return text
    return text.replace(api_key, REDACTED)


class ApiKeyRedactingFilter(logging.Filter):
    """Strips the API key from log messages, since request URLs embed it."""

    def __init__(self, api_key: str):
        super().__init__()
        self.api_key = api_key

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if self.api_key in message:
            record.msg = redact(message, self.api_key)
            record.args = None
        return True


def setup_logging(settings: Optional[LoggingSettings] = None, api_key: Optional[str] = None) -> None:
    """
    Configure root logging from the ``logging`` section of the client config.

    When ``api_key`` is given every handler redacts it from formatted messages.
    """
    settings = settings or LoggingSettings()

    handlers = [logging.StreamHandler()]
    if settings.file:
        log_file = Path(settings.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    if api_key:
        for handler in handlers:
            handler.addFilter(ApiKeyRedactingFilter(api_key))

    logging.basicConfig(
        level=getattr(logging, settings.level),
        format=settings.format,
        handlers=handlers,
    )
