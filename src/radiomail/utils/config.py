"""Configuration manager for persistent settings stored as JSON."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .errors import FileSystemError, InvalidConfigError
from .logging import get_logger
from .paths import CONFIG_PATH, FORMS_DIR, MAILBOX_DIR, OUTBOX_DIR

logger = get_logger(__name__)


class IdentityConfig(BaseModel):
    """Pydantic model for the station identity."""

    mycall: str = "N0CALL"


class ComposeConfig(BaseModel):
    """Pydantic model for composition settings."""

    editor: str = ""  # falls back to $VISUAL, $EDITOR, vi
    forms_dir: str = str(FORMS_DIR)
    mailbox_dir: str = str(MAILBOX_DIR)
    outbox_dir: str = str(OUTBOX_DIR)


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    console_level: str = "WARNING"
    file_level: str = "DEBUG"
    max_file_size: int = 1_048_576 # 1 MB
    backup_count: int = 3


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "0.1.0"
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    compose: ComposeConfig = Field(default_factory=ComposeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages persistent application configuration."""

    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        if not ConfigManager._initialized:
            self.path = config_path or CONFIG_PATH
            self.config = self._load_or_create_config()
            logger.info(f"Configuration loaded from {self.path}")
            ConfigManager._initialized = True

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the loaded configuration (for testing purposes)."""
        cls._instance = None
        cls._initialized = False

    def _load_or_create_config(self) -> AppConfig:
        """Load configuration from file or create default if not present."""

        from pydantic import ValidationError

        if not self.path.exists():
            logger.info("No config file found, creating default configuration.")
            config = AppConfig()
            self._save_config(config)
            return config

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = AppConfig(**data)
            logger.debug("Configuration successfully loaded and validated.")
            return config

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file: {e}")
            raise InvalidConfigError(f"Configuration file is not valid JSON: {str(e)}") from e
        except ValidationError as e:
            logger.error(f"Failed to validate config file: {e}")
            raise InvalidConfigError(f"Configuration data does not match expected schema: {str(e)}") from e
        except OSError as e:
            raise FileSystemError(f"Failed to read configuration file: {self.path}") from e

    def _save_config(self, config: Optional[AppConfig] = None):
        """Save the current configuration to file."""

        config = config or self.config

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    config.model_dump(),
                    f,
                    indent=2,
                    ensure_ascii=False
                )
            logger.debug("Configuration successfully saved.")
        except OSError as e:
            raise FileSystemError(f"Failed to write configuration file: {str(e)}") from e

    def get_identity(self) -> str:
        """Return the configured station callsign."""
        return self.config.identity.mycall
