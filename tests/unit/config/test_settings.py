"""Unit tests for Settings layering."""

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from trustlink.config import get_settings, reload_settings
from trustlink.config.models.api import APIConfig
from trustlink.config.settings import Settings, config_dir, environment, toml_files


class TestDefaults:
    def test_code_defaults(self) -> None:
        settings = Settings()

        assert settings.storage.backend == "inmemory"
        assert settings.events.exchange == "trustlink.events"
        assert settings.connections.verify_recipient is True
        assert settings.connections.max_cas_attempts == 5
        assert settings.feed.default_limit == 20
        assert settings.feed.max_limit == 100
        assert settings.gateway.timeout_seconds == 60.0

    def test_invalid_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(storage={"backend": "firestore"})


class TestLayering:
    """TOML files under environment variables."""

    def test_toml_then_env(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        env_override,
    ) -> None:
        mock_toml_files({
            "default.toml": "[connections]\nverify_recipient = false\nmax_cas_attempts = 3",
        })

        with env_override({
            "TRUSTLINK_CONFIG_DIR": str(test_config_dir),
            "TRUSTLINK_CONNECTIONS__MAX_CAS_ATTEMPTS": "7",
        }):
            settings = get_settings()

        assert settings.connections.verify_recipient is False
        assert settings.connections.max_cas_attempts == 7

    def test_cached_until_reload(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        env_override,
    ) -> None:
        mock_toml_files({"default.toml": 'app_name = "first"'})
        with env_override({"TRUSTLINK_CONFIG_DIR": str(test_config_dir)}):
            assert get_settings().app_name == "first"
            mock_toml_files({"default.toml": 'app_name = "second"'})
            assert get_settings().app_name == "first"
            assert reload_settings().app_name == "second"


class TestConfigFiles:
    """Discovery and deep merge of default.toml and the environment file."""

    def test_default_environment(self) -> None:
        assert environment() == "development"

    def test_config_dir_override(self, test_config_dir: Path, env_override) -> None:
        with env_override({"TRUSTLINK_CONFIG_DIR": str(test_config_dir)}):
            assert config_dir() == test_config_dir
            assert toml_files() == [
                test_config_dir / "default.toml",
                test_config_dir / "development.toml",
            ]

    def test_missing_config_dir_raises(self, tmp_path: Path, env_override) -> None:
        with env_override({"TRUSTLINK_CONFIG_DIR": str(tmp_path / "missing")}):
            with pytest.raises(FileNotFoundError):
                Settings()

    def test_environment_file_merged_over_default(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        env_override,
    ) -> None:
        mock_toml_files({
            "default.toml": '[storage]\nbackend = "inmemory"\nkey_prefix = "tl"',
            "production.toml": '[storage]\nbackend = "redis"',
        })

        with env_override({
            "TRUSTLINK_CONFIG_DIR": str(test_config_dir),
            "TRUSTLINK_ENV": "production",
        }):
            settings = Settings()

        assert settings.storage.backend == "redis"
        assert settings.storage.key_prefix == "tl"

    def test_missing_environment_file_ignored(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        env_override,
    ) -> None:
        mock_toml_files({"default.toml": "debug = true"})

        with env_override({
            "TRUSTLINK_CONFIG_DIR": str(test_config_dir),
            "TRUSTLINK_ENV": "staging",
        }):
            assert Settings().debug is True

    def test_empty_directory_uses_code_defaults(self) -> None:
        assert Settings().auth.provider == "jwt"

    def test_constructor_arguments_win(
        self,
        test_config_dir: Path,
        mock_toml_files: Callable[[dict[str, str]], None],
        env_override,
    ) -> None:
        mock_toml_files({"default.toml": '[auth]\nprovider = "jwt"\nalgorithms = ["RS256"]'})

        with env_override({"TRUSTLINK_CONFIG_DIR": str(test_config_dir)}):
            settings = Settings(auth={"provider": "static"})

        assert settings.auth.provider == "static"
        assert settings.auth.algorithms == ["RS256"]


class TestAPIConfig:
    def test_comma_separated_services(self) -> None:
        config = APIConfig(services="connections, feed")
        assert config.services == ["connections", "feed"]

    def test_unknown_service_rejected(self) -> None:
        with pytest.raises(ValidationError):
            APIConfig(services=["messages"])
