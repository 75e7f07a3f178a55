"""Polygon.io options REST client: config, transport, service and helpers."""

from polygon_options.client.config import PolygonConfig, load_config
from polygon_options.client.http import PolygonHttpClient
from polygon_options.client.options_service import OptionsService
from polygon_options.client.validators import validate_request

__all__ = [
    'PolygonConfig',
    'load_config',
    'PolygonHttpClient',
    'OptionsService',
    'validate_request',
]
