"""
Process configuration for genflow.

Configuration is loaded once at start-up into explicit objects that are
passed to the generation client and the HTTP server. Nothing here is stored
in module-level state.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from genflow.errors import ConfigurationError

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 60.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3400


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


class GenerationConfig(BaseModel):
    """
    Settings for the generation backend.

    Created once at start-up and handed to the client constructor.
    """
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False, min_length=1)
    model: str = DEFAULT_MODEL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls) -> GenerationConfig:
        """
        Create a generation config from environment variables.

        Environment variables:
            GEMINI_API_KEY: API credential (required)
            GENFLOW_MODEL: Model name (default: 'gemini-2.5-flash')
            GENFLOW_TIMEOUT: Per-call timeout in seconds (default: 60)

        Raises:
            ConfigurationError: If the API key is absent or a value is malformed
        """
        api_key = os.getenv("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable is required")

        timeout = _float_env("GENFLOW_TIMEOUT", DEFAULT_TIMEOUT)
        if timeout <= 0:
            raise ConfigurationError("GENFLOW_TIMEOUT must be greater than zero")

        return cls(
            api_key=api_key,
            model=os.getenv("GENFLOW_MODEL") or DEFAULT_MODEL,
            timeout_seconds=timeout,
        )


class ServerConfig(BaseModel):
    """Listener address for the HTTP adapter."""
    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_env(cls) -> ServerConfig:
        """
        Create a server config from GENFLOW_HOST and GENFLOW_PORT.

        Raises:
            ConfigurationError: If the port is not a valid integer
        """
        port = _int_env("GENFLOW_PORT", DEFAULT_PORT)
        if not 1 <= port <= 65535:
            raise ConfigurationError(f"GENFLOW_PORT out of range: {port}")
        return cls(host=os.getenv("GENFLOW_HOST") or DEFAULT_HOST, port=port)
