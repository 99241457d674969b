"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass

from finscan.utils.exceptions import ConfigError

CONFIG_ENV_VAR = "FINSCAN_CONFIG"
PLACEHOLDER_API_KEY = "your-gemini-api-key-here"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str = "FinScan"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_file_size_mb: int = 10
    log_backup_count: int = 30

    # LLM
    llm_model_name: str = "gemini-2.5-flash-lite"
    llm_api_key_env: str = "GEMINI_API_KEY"

    # Extraction
    max_upload_bytes: int = 5 * 1024 * 1024
    min_text_length: int = 1
    tesseract_lang: str = "eng"

    # Paths
    temp_dir: Optional[str] = None

    @property
    def gemini_api_key(self) -> Optional[str]:
        """API key from the configured environment variable."""
        return os.getenv(self.llm_api_key_env)

    def validate(self) -> tuple[bool, str]:
        """Validate configuration values."""
        if self.max_upload_bytes < 1:
            return False, "Upload size ceiling must be positive"

        if self.min_text_length < 1:
            return False, "Minimum text length must be at least 1"

        if not self.llm_model_name:
            return False, "LLM model name is required"

        return True, "Configuration is valid"

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "AppSettings":
        """Build settings from a parsed YAML mapping; absent keys keep defaults."""
        defaults = cls()
        app = config.get("app") or {}
        logging_cfg = config.get("logging") or {}
        llm = config.get("llm") or {}
        extraction = config.get("extraction") or {}
        paths = config.get("paths") or {}

        return cls(
            app_name=app.get("name", defaults.app_name),
            app_version=str(app.get("version", defaults.app_version)),
            log_level=logging_cfg.get("level", defaults.log_level),
            log_file=logging_cfg.get("log_file", defaults.log_file),
            log_max_file_size_mb=logging_cfg.get("max_file_size_mb", defaults.log_max_file_size_mb),
            log_backup_count=logging_cfg.get("backup_count", defaults.log_backup_count),
            llm_model_name=llm.get("model_name", defaults.llm_model_name),
            llm_api_key_env=llm.get("api_key_env", defaults.llm_api_key_env),
            max_upload_bytes=extraction.get("max_upload_bytes", defaults.max_upload_bytes),
            min_text_length=extraction.get("min_text_length", defaults.min_text_length),
            tesseract_lang=extraction.get("tesseract_lang", defaults.tesseract_lang),
            temp_dir=paths.get("temp_dir", defaults.temp_dir),
        )

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv(CONFIG_ENV_VAR)
            if env_path:
                config_path = Path(env_path)
            else:
                # Project root, next to pyproject.toml
                default_path = Path(__file__).parent.parent.parent.parent / "config.yaml"
                if not default_path.exists():
                    return cls()
                config_path = default_path

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration root must be a mapping: {config_path}")

        return cls.from_dict(config)


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings


def set_settings(settings: AppSettings) -> None:
    """Replace the global settings instance (CLI --config, tests)."""
    global _settings
    _settings = settings
