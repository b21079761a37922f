"""Configuration service for loading exitboard.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardConfig, ExitboardConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching application configuration."""

    CONFIG_FILE = "exitboard.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Directory containing exitboard.yml
        """
        self.project_root = project_root
        self._config: ExitboardConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.project_root / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    @property
    def task_root(self) -> Path:
        """Tasks directory resolved against the project root."""
        return self.project_root / self.get_config().task_root

    def get_config(self) -> ExitboardConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_board_config(self) -> BoardConfig:
        """Convenience method to get board configuration."""
        return self.get_config().board

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> ExitboardConfig:
        """Load configuration from file or return default."""
        self._config_error = None

        if not self.config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return ExitboardConfig.default()

        try:
            with self.config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")
        except OSError as e:
            return self._fallback(f"Error reading {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")
        if not isinstance(data, dict):
            return self._fallback(f"{self.CONFIG_FILE} must contain a mapping")

        try:
            config = ExitboardConfig(**data)
        except ValidationError as e:
            return self._fallback(f"Invalid {self.CONFIG_FILE}: {e}")

        logger.info("Loaded %s with %d columns", self.CONFIG_FILE, len(config.board.columns))
        return config

    def _fallback(self, message: str) -> ExitboardConfig:
        self._config_error = message
        logger.warning(message)
        return ExitboardConfig.default()
