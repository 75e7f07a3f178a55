"""Client configuration: API key, endpoint, timeout and retry policy.

Values come from an optional YAML file (top-level ``polygon:`` section or a
flat mapping) and are overridden by environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..utils.error_handling import ConfigurationError

logger = logging.getLogger("polygon_options.config")

DEFAULT_BASE_URL = "https://api.polygon.io"
DEFAULT_CONFIG_PATH = Path("polygon.yaml")
API_KEY_ENV = "POLYGON_API_KEY"
BASE_URL_ENV = "POLYGON_BASE_URL"


class PolygonConfig:
    """Settings for PolygonHttpClient."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retry_attempts: int = 3,
        retry_backoff: float = 2.0,
    ):
        """Initialize client configuration.

        Args:
            api_key: Polygon.io API key (sent as a Bearer token)
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            max_retry_attempts: Attempts per request for transient failures (>= 1)
            retry_backoff: Backoff factor; wait before retry N is retry_backoff ** N seconds
        """
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")
        if max_retry_attempts < 1:
            raise ConfigurationError(
                f"max_retry_attempts must be at least 1, got {max_retry_attempts}"
            )
        if retry_backoff < 0:
            raise ConfigurationError(f"retry_backoff cannot be negative, got {retry_backoff}")

        self.api_key = api_key or ""
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retry_attempts = max_retry_attempts
        self.retry_backoff = retry_backoff

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "PolygonConfig":
        """Create PolygonConfig from dictionary (e.g., from YAML).

        Args:
            config: Dictionary with client parameters

        Returns:
            PolygonConfig instance
        """
        return cls(
            api_key=config.get('api_key', ""),
            base_url=config.get('base_url', DEFAULT_BASE_URL),
            timeout=float(config.get('timeout', 30.0)),
            max_retry_attempts=int(config.get('max_retry_attempts', 3)),
            retry_backoff=float(config.get('retry_backoff', 2.0)),
        )

    def require_api_key(self) -> str:
        """Return the API key, raising ConfigurationError if it is blank."""
        if not self.api_key.strip():
            raise ConfigurationError(
                f"Polygon API key is not configured. Set {API_KEY_ENV} or api_key in the config file."
            )
        return self.api_key

    def __repr__(self) -> str:
        masked = "***" if self.api_key else "''"
        return (f"PolygonConfig(api_key={masked}, base_url={self.base_url!r}, "
                f"timeout={self.timeout}, max_retry_attempts={self.max_retry_attempts}, "
                f"retry_backoff={self.retry_backoff})")


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug("Config file %s not found, using defaults", path)
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: Optional[str | Path] = None) -> PolygonConfig:
    """Load configuration from YAML and the environment.

    Environment variables POLYGON_API_KEY and POLYGON_BASE_URL take
    precedence over the file.

    Args:
        path: YAML file path (default: ./polygon.yaml; missing file is fine)

    Returns:
        PolygonConfig instance
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    raw = _load_yaml(config_path)
    section = raw.get('polygon', raw)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'polygon' section in {config_path} must be a mapping")

    settings = dict(section)
    env_key = os.getenv(API_KEY_ENV)
    if env_key and env_key.strip():
        settings['api_key'] = env_key.strip()
    env_url = os.getenv(BASE_URL_ENV)
    if env_url and env_url.strip():
        settings['base_url'] = env_url.strip()

    return PolygonConfig.from_dict(settings)
