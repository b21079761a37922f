"""Tests for ConfigService."""

import logging
from pathlib import Path

import pytest

from exitboard.config import Settings
from exitboard.models import ExitboardConfig
from exitboard.services import ConfigService


@pytest.fixture
def service(tmp_path: Path) -> ConfigService:
    return ConfigService(tmp_path)


def write_config(root: Path, content: str) -> None:
    (root / "exitboard.yml").write_text(content)


class TestConfigLoading:
    """Tests for reading exitboard.yml."""

    def test_missing_file_uses_defaults(self, service: ConfigService):
        assert service.get_config() == ExitboardConfig.default()
        assert not service.has_config_error

    def test_custom_columns(self, service: ConfigService, tmp_path: Path):
        write_config(
            tmp_path,
            "task_root: deal\n"
            "board:\n"
            "  name: Acme Exit\n"
            "  columns:\n"
            "    - id: prep\n      name: Preparation\n"
            "    - id: marketing\n      name: Marketing\n      limit: 2\n      color: '#3b82f6'\n",
        )

        board = service.get_board_config()

        assert board.name == "Acme Exit"
        assert board.column_ids == ["prep", "marketing"]
        assert board.get_column("marketing").limit == 2
        assert service.task_root == tmp_path / "deal"

    def test_config_cached_until_reload(self, service: ConfigService, tmp_path: Path):
        assert service.get_config().task_root == ".tasks"
        write_config(tmp_path, "task_root: other\n")
        assert service.get_config().task_root == ".tasks"

        service.reload()
        assert service.get_config().task_root == "other"


class TestConfigErrors:
    """Invalid files fall back to defaults and record the error."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("", "empty"),
            ("- just\n- a list\n", "mapping"),
            ("board: [unclosed\n", "Invalid YAML"),
            ("provider: s3\n", "Invalid exitboard.yml"),
            ("board:\n  columns: []\n", "Invalid exitboard.yml"),
        ],
    )
    def test_fallback(self, service: ConfigService, tmp_path: Path, content, message, caplog):
        write_config(tmp_path, content)

        with caplog.at_level(logging.WARNING, logger="exitboard"):
            config = service.get_config()

        assert config == ExitboardConfig.default()
        assert service.has_config_error
        assert message in service.config_error
        assert message in caplog.text

    def test_reload_clears_error(self, service: ConfigService, tmp_path: Path):
        write_config(tmp_path, "")
        service.get_config()
        service.reload()
        assert not service.has_config_error


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXITBOARD_ROLLBACK_ON_FAILURE", raising=False)
        settings = Settings()
        assert settings.rollback_on_failure is True
        assert settings.verbose == 0

    def test_env_prefix(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("EXITBOARD_PROJECT_ROOT", str(tmp_path))
        monkeypatch.setenv("EXITBOARD_ROLLBACK_ON_FAILURE", "false")
        monkeypatch.setenv("EXITBOARD_API_KEY", "k")

        settings = Settings()

        assert settings.project_root == tmp_path
        assert settings.rollback_on_failure is False
        assert settings.api_key == "k"
