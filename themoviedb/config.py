"""
Client configuration.

Settings are resolved from, in increasing order of precedence, a YAML file,
``TMDB_*`` environment variables and explicit keyword overrides. The
resulting ClientConfig is frozen; use ``with_proxy`` or ``with_timeouts`` to
derive a modified copy.
"""

import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .urls import DEFAULT_BASE_URL, DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_VARS = {
    "api_key": "TMDB_API_KEY",
    "base_url": "TMDB_BASE_URL",
    "default_language": "TMDB_LANGUAGE",
}

PROXY_ENV_VARS = {
    "host": "TMDB_PROXY_HOST",
    "port": "TMDB_PROXY_PORT",
    "username": "TMDB_PROXY_USERNAME",
    "password": "TMDB_PROXY_PASSWORD",
}


class ProxySettings(BaseModel):
    """Upstream HTTP proxy."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1)
    port: Optional[int] = Field(None, ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[str] = None

    def as_url(self) -> str:
        credentials = ""
        if self.username:
            credentials = quote(self.username, safe="")
            if self.password:
                credentials += ":" + quote(self.password, safe="")
            credentials += "@"
        port = f":{self.port}" if self.port else ""
        return f"http://{credentials}{self.host}{port}"

    def as_requests_proxies(self) -> Dict[str, str]:
        url = self.as_url()
        return {"http": url, "https": url}


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file: Optional[str] = None

    @field_validator("level")
    def validate_level(cls, v):
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v


class ClientConfig(BaseModel):
    """Settings shared by every request a client makes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(..., min_length=1, description="TMDb API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="API root, ending with a slash")
    default_language: str = Field(DEFAULT_LANGUAGE, description="Language used when none is given")
    connect_timeout: float = Field(25.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(90.0, gt=0, description="Read timeout in seconds")
    proxy: Optional[ProxySettings] = None
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("api_key")
    def validate_api_key(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("API key cannot be blank")
        return v

    @field_validator("base_url")
    def normalize_base_url(cls, v):
        return v if v.endswith("/") else v + "/"

    @property
    def timeouts(self) -> tuple:
        """(connect, read) pair as accepted by requests."""
        return (self.connect_timeout, self.read_timeout)

    def with_proxy(
        self,
        host: str,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> "ClientConfig":
        proxy = ProxySettings(host=host, port=port, username=username, password=password)
        return self.model_copy(update={"proxy": proxy})

    def with_timeouts(self, connect_timeout: float, read_timeout: float) -> "ClientConfig":
        return ClientConfig(**{**self.model_dump(), "connect_timeout": connect_timeout, "read_timeout": read_timeout})


def _load_yaml(config_path: str) -> Dict[str, Any]:
    """Load the ``tmdb`` section (or the whole mapping) from a YAML file."""
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Configuration file not found: {config_path}, using defaults")
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing configuration: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping")
    section = data.get("tmdb", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'tmdb' section in {config_path} must be a mapping")

    settings = dict(section)
    if "logging" in data and "logging" not in settings:
        settings["logging"] = data["logging"]
    return settings


def _load_env() -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for field, env_var in ENV_VARS.items():
        value = os.getenv(env_var)
        if value:
            settings[field] = value

    proxy = {field: os.getenv(env_var) for field, env_var in PROXY_ENV_VARS.items() if os.getenv(env_var)}
    if proxy.get("host"):
        settings["proxy"] = proxy
    return settings


def load_config(config_path: Optional[str] = None, **overrides: Any) -> ClientConfig:
    """
    Resolve a ClientConfig from file, environment and overrides.

    Args:
        config_path: Optional YAML file with a ``tmdb`` section
        **overrides: Explicit settings; None values are ignored

    Returns:
        Frozen client configuration

    Raises:
        ConfigurationError: If the file is invalid or no API key is available
    """
    settings: Dict[str, Any] = {}
    if config_path:
        settings.update(_load_yaml(config_path))
    settings.update(_load_env())
    settings.update({key: value for key, value in overrides.items() if value is not None})

    if not settings.get("api_key"):
        raise ConfigurationError(
            "TMDb API key required. Set TMDB_API_KEY environment variable or pass api_key parameter."
        )

    try:
        return ClientConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
