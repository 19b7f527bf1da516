"""Configuration management for catalogsnap projects."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CatalogConfig(BaseModel):
    """Configuration stored in .catalogsnap/config.toml."""

    model_config = ConfigDict(
        extra="allow"
    )  # Allow additional fields for extensibility

    metadata_path: Optional[str] = Field(
        default=None, description="Catalog document used when no path is given"
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")
    error_limit: int = Field(
        default=1, ge=1, description="Number of decode errors the CLI reports"
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class Config:
    """Manages catalogsnap project configuration."""

    def __init__(self, project_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            project_dir: Path to project directory. If None, uses CATALOGSNAP_PROJECT_DIR env var or current directory.
        """
        if project_dir is None:
            env_dir = os.environ.get("CATALOGSNAP_PROJECT_DIR")
            if env_dir:
                project_dir = Path(env_dir)

        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config_dir = self.project_dir / ".catalogsnap"
        self.config_path = self.config_dir / "config.toml"
        self._config: Optional[CatalogConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> CatalogConfig:
        """Load configuration from disk, with environment variable overrides."""
        if not self.exists:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)

        self._config = CatalogConfig(**data)
        return self._config

    def load_or_default(self) -> CatalogConfig:
        """Load configuration, falling back to defaults when no file exists."""
        if self.exists:
            return self.load()
        data: Dict[str, Any] = {}
        self._apply_env_overrides(data)
        self._config = CatalogConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_path := os.environ.get("CATALOGSNAP_METADATA_PATH"):
            data["metadata_path"] = env_path

        if env_level := os.environ.get("CATALOGSNAP_LOG_LEVEL"):
            data["log_level"] = env_level

    def resolve_metadata_path(self, config: CatalogConfig) -> Optional[Path]:
        """Resolve the configured catalog document relative to the project dir."""
        if not config.metadata_path:
            return None
        path = Path(config.metadata_path)
        return path if path.is_absolute() else self.project_dir / path

    def save(self, config: Optional[CatalogConfig] = None) -> None:
        """Save configuration to disk.

        Args:
            config: Configuration to save. If None, saves current config.
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        self.config_dir.mkdir(parents=True, exist_ok=True)

        # TOML has no null, so unset values are left out
        config_dict = self._config.model_dump(exclude_none=True)

        with open(self.config_path, "w") as f:
            toml.dump(config_dict, f)

    def init_project(self, metadata_path: Optional[str] = None) -> CatalogConfig:
        """Initialize a new project with default configuration.

        Raises:
            FileExistsError: If the project is already initialized
        """
        if self.exists:
            raise FileExistsError(f"Config file already exists at {self.config_path}")

        config = CatalogConfig(metadata_path=metadata_path)
        self.save(config)
        return config
