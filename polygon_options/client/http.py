"""HTTP transport for the Polygon.io REST API."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

import requests

from .config import PolygonConfig
from ..utils.error_handling import (
    PolygonApiError,
    PolygonHttpError,
    is_transient_error,
    retry_with_backoff,
)

logger = logging.getLogger("polygon_options.http")


def _encode_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset params and render values the way the API expects."""
    encoded: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, Enum):
            encoded[key] = value.value
        else:
            encoded[key] = value
    return encoded


class PolygonHttpClient:
    """Thin GET-only client with bearer auth, error mapping and retries."""

    def __init__(self, config: PolygonConfig, session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            config: PolygonConfig with key, base URL, timeout and retry policy
            session: Optional pre-built session (tests pass a fake)
        """
        self.config = config
        self.session = session or requests.Session()
        self._get_with_retry = retry_with_backoff(
            max_retries=config.max_retry_attempts,
            backoff_factor=config.retry_backoff,
            exceptions=(PolygonApiError, PolygonHttpError),
            should_retry=is_transient_error,
        )(self._get_once)

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET base_url + path and return the decoded JSON body.

        Args:
            path: Endpoint path starting with '/'
            params: Query parameters; None values are omitted

        Returns:
            JSON response as dictionary

        Raises:
            ConfigurationError: If no API key is configured
            PolygonApiError: On a non-2xx response (after retries for 429/5xx)
            PolygonHttpError: On timeouts or connection failures (after retries)
        """
        api_key = self.config.require_api_key()
        return self._get_with_retry(path, _encode_params(params), api_key)

    def _get_once(self, path: str, params: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        headers = {
            'Authorization': f'Bearer {api_key}',
            'Accept': 'application/json',
        }
        logger.debug("GET %s params=%s", path, params)

        try:
            response = self.session.get(
                url, headers=headers, params=params, timeout=self.config.timeout
            )
        except requests.Timeout as e:
            raise PolygonHttpError.from_timeout(e) from e
        except requests.RequestException as e:
            raise PolygonHttpError.from_request_exception(e) from e

        if response.status_code >= 400:
            logger.debug("GET %s failed with status %d", path, response.status_code)
            raise PolygonApiError(
                status_code=response.status_code,
                request_url=path,
                response_content=response.text,
                reason=response.reason,
            )

        try:
            return response.json()
        except ValueError as e:
            raise PolygonHttpError(f"Response from {path} is not valid JSON: {e}") from e

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "PolygonHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
