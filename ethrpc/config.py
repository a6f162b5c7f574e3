# =============================================================================
# ethrpc/config.py  -  Client configuration
# =============================================================================
#
# Recognized environment variables (a .env file is loaded by main.py):
#
#   VALIDATION_CLOUD_API_KEY     required, no default
#   VALIDATION_CLOUD_BASE_URL    default https://mainnet.ethereum.validationcloud.io/v1
#   VALIDATION_CLOUD_TIMEOUT_MS  default 30000
#
# A missing API key is fatal: ClientConfig refuses to be built without one.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ethrpc.errors import ConfigError

DEFAULT_BASE_URL = "https://mainnet.ethereum.validationcloud.io/v1"
DEFAULT_TIMEOUT_MS = 30000

API_KEY_ENV = "VALIDATION_CLOUD_API_KEY"
BASE_URL_ENV = "VALIDATION_CLOUD_BASE_URL"
TIMEOUT_ENV = "VALIDATION_CLOUD_TIMEOUT_MS"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the Validation Cloud endpoint."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("API key is required")
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout must be a positive number of ms, got {self.timeout_ms}")

    @property
    def endpoint(self) -> str:
        """The POST target: <base_url>/<api_key>."""
        return f"{self.base_url.rstrip('/')}/{self.api_key}"

    @property
    def redacted_endpoint(self) -> str:
        """The endpoint with the API key masked, for logs."""
        return f"{self.base_url.rstrip('/')}/[HIDDEN]"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from environment variables.

    Args:
        environ: Mapping to read from; defaults to os.environ.

    Raises:
        ConfigError: If the API key is missing or the timeout is not a
            positive integer.
    """
    env = os.environ if environ is None else environ

    api_key = env.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigError(f"{API_KEY_ENV} environment variable is required")

    base_url = env.get(BASE_URL_ENV, "").strip() or DEFAULT_BASE_URL

    raw_timeout = env.get(TIMEOUT_ENV, "").strip()
    if raw_timeout:
        try:
            timeout_ms = int(raw_timeout)
        except ValueError:
            raise ConfigError(f"{TIMEOUT_ENV} must be an integer, got {raw_timeout!r}") from None
    else:
        timeout_ms = DEFAULT_TIMEOUT_MS

    return ClientConfig(api_key=api_key, base_url=base_url, timeout_ms=timeout_ms)
