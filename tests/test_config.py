"""
Tests for server configuration.
"""

from pathlib import Path

import pytest

from chuk_mcp_rankings.config import RankingsConfig
from chuk_mcp_rankings.constants import MINIMUM_LIST_SIZE, StorageBackend


class TestRankingsConfig:
    """Tests for RankingsConfig."""

    def test_defaults(self) -> None:
        """Defaults: YAML storage, no catalog, minimum of 10."""
        config = RankingsConfig.load(environ={})
        assert config.api_url is None
        assert config.storage == StorageBackend.YAML
        assert config.minimum_list_size == MINIMUM_LIST_SIZE
        assert config.rankings_dir.name == "rankings"

    def test_environment(self) -> None:
        """RANKINGS_* variables are read and coerced."""
        config = RankingsConfig.load(
            environ={
                "RANKINGS_API_URL": "http://localhost:8080/",
                "RANKINGS_STORAGE": "http",
                "RANKINGS_TIMEOUT": "2.5",
                "RANKINGS_DIR": "/tmp/lists",
            }
        )
        assert config.api_url == "http://localhost:8080"
        assert config.storage == StorageBackend.HTTP
        assert config.timeout == 2.5
        assert config.rankings_dir == Path("/tmp/lists")

    def test_yaml_file(self, temp_dir: Path) -> None:
        """Config file values apply, environment wins over them."""
        path = temp_dir / "rankings.yaml"
        path.write_text("storage: http\napi_url: http://a.test\nsearch_limit: 5\n")

        config = RankingsConfig.load(path, environ={"RANKINGS_API_URL": "http://b.test"})

        assert config.storage == StorageBackend.HTTP
        assert config.search_limit == 5
        assert config.api_url == "http://b.test"

    def test_config_from_env_path(self, temp_dir: Path) -> None:
        """RANKINGS_CONFIG points at the file."""
        path = temp_dir / "rankings.yaml"
        path.write_text("search_limit: 3\n")
        config = RankingsConfig.load(environ={"RANKINGS_CONFIG": str(path)})
        assert config.search_limit == 3
        assert RankingsConfig.from_yaml(path).search_limit == 3

    def test_overrides_win(self) -> None:
        """Explicit overrides beat the environment; None is ignored."""
        config = RankingsConfig.load(
            environ={"RANKINGS_STORAGE": "http"},
            storage="yaml",
            api_url=None,
        )
        assert config.storage == StorageBackend.YAML
        assert config.api_url is None

    def test_empty_api_url(self) -> None:
        """Empty API URL means not configured."""
        assert RankingsConfig(api_url="").api_url is None

    @pytest.mark.parametrize(
        "data",
        [
            {"api_url": "ftp://x"},
            {"storage": "sqlite"},
            {"timeout": 0},
            {"search_limit": 0},
        ],
    )
    def test_invalid(self, data: dict) -> None:
        """Invalid values are rejected."""
        with pytest.raises(ValueError):
            RankingsConfig(**data)

    def test_non_mapping_file(self, temp_dir: Path) -> None:
        """A YAML list is not a config."""
        path = temp_dir / "bad.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            RankingsConfig.from_yaml(path)
