"""Unit tests for client configuration loading."""

import pytest

from polygon_options.client.config import (
    API_KEY_ENV,
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    PolygonConfig,
    load_config,
)
from polygon_options.utils.error_handling import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(BASE_URL_ENV, raising=False)


class TestPolygonConfig:
    """Test suite for PolygonConfig."""

    def test_defaults(self):
        """Test default values."""
        config = PolygonConfig()

        assert config.api_key == ""
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0
        assert config.max_retry_attempts == 3
        assert config.retry_backoff == 2.0

    def test_from_dict(self):
        """Test creating config from dictionary."""
        config = PolygonConfig.from_dict({
            'api_key': 'k',
            'base_url': 'https://example.test/',
            'timeout': 5,
            'max_retry_attempts': 1,
        })

        assert config.api_key == 'k'
        assert config.base_url == 'https://example.test'
        assert config.timeout == 5.0
        assert config.max_retry_attempts == 1

    @pytest.mark.parametrize("kwargs", [
        {'timeout': 0},
        {'max_retry_attempts': 0},
        {'retry_backoff': -1},
    ])
    def test_invalid_values(self, kwargs):
        """Test out-of-range settings are rejected."""
        with pytest.raises(ConfigurationError):
            PolygonConfig(**kwargs)

    def test_require_api_key(self):
        """Test missing key raises, present key is returned."""
        with pytest.raises(ConfigurationError, match=API_KEY_ENV):
            PolygonConfig(api_key="  ").require_api_key()
        assert PolygonConfig(api_key="secret").require_api_key() == "secret"

    def test_repr_masks_key(self):
        """Test the API key never appears in repr."""
        assert "secret" not in repr(PolygonConfig(api_key="secret"))


class TestLoadConfig:
    """Test suite for YAML + environment loading."""

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file is not an error."""
        config = load_config(tmp_path / "nope.yaml")
        assert config.base_url == DEFAULT_BASE_URL
        assert config.api_key == ""

    def test_polygon_section(self, tmp_path):
        """Test settings under a polygon: section."""
        path = tmp_path / "polygon.yaml"
        path.write_text("polygon:\n  api_key: from-file\n  timeout: 10\n")

        config = load_config(path)

        assert config.api_key == "from-file"
        assert config.timeout == 10.0

    def test_flat_mapping(self, tmp_path):
        """Test settings at the top level."""
        path = tmp_path / "polygon.yaml"
        path.write_text("api_key: flat\nmax_retry_attempts: 5\n")

        config = load_config(path)

        assert config.api_key == "flat"
        assert config.max_retry_attempts == 5

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables win over the file."""
        path = tmp_path / "polygon.yaml"
        path.write_text("polygon:\n  api_key: from-file\n")
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        monkeypatch.setenv(BASE_URL_ENV, "https://proxy.test")

        config = load_config(path)

        assert config.api_key == "from-env"
        assert config.base_url == "https://proxy.test"

    def test_non_mapping_file(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "polygon.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(path)
