"""Configuration settings for the channel sync service."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from video_sync.core.constants import (
    DEFAULT_STATE_FILE,
    DEFAULT_SYNC_INTERVAL,
    YOUTUBE_API_BASE_URL,
    YOUTUBE_MAX_PAGE_SIZE,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and config.yaml."""

    model_config = SettingsConfigDict(  # type: ignore[assignment]
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars not defined in model
    )

    # YouTube Data API
    youtube_api_key: str = ""
    youtube_channel_id: str = ""
    youtube_api_base_url: str = YOUTUBE_API_BASE_URL
    youtube_api_timeout: int = 30
    youtube_api_page_size: int = YOUTUBE_MAX_PAGE_SIZE

    # Sync
    sync_state_file: str = DEFAULT_STATE_FILE
    sync_interval_seconds: int = DEFAULT_SYNC_INTERVAL
    sync_notify_on_first_run: bool = False

    # Owner notifications (email is skipped when smtp_host is empty)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_pass: str = ""
    notify_email_to: str = ""  # Defaults to smtp_user
    notify_from_name: str = "Video Sync"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Read API
    api_host: str = "0.0.0.0"
    api_port: int = 4000

    # Convenience properties
    @property
    def state_file(self) -> Path:
        """Get state file as Path."""
        return Path(self.sync_state_file)

    @property
    def sync_configured(self) -> bool:
        """True when both the API key and the channel id are set."""
        return bool(self.youtube_api_key and self.youtube_channel_id)

    @property
    def email_configured(self) -> bool:
        """True when SMTP delivery of owner notifications is possible."""
        return bool(self.smtp_host and (self.notify_email_to or self.smtp_user))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_yaml_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to ./config.yaml or ./config.yml

    Returns:
        Dictionary with configuration values
    """
    if config_path is None:
        for path in (Path("config.yaml"), Path("config.yml")):
            if path.exists():
                config_path = path
                break

    if config_path is None or not Path(config_path).exists():
        return {}

    try:
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config file %s: %s", config_path, e)
        return {}


def apply_yaml_config(settings: Settings, config: dict[str, Any]) -> Settings:
    """
    Apply YAML configuration to settings object.

    Environment variables take precedence over YAML config: a YAML value is
    only used while the setting still holds its default.

    Args:
        settings: Settings object to update
        config: Configuration dictionary from YAML

    Returns:
        Updated Settings object
    """
    defaults = Settings.model_fields

    def _apply(field: str, value: Any) -> None:
        if getattr(settings, field) == defaults[field].default:
            setattr(settings, field, value)

    # YouTube API
    if "youtube_api" in config:
        yt = config["youtube_api"] or {}
        if "key" in yt:
            _apply("youtube_api_key", str(yt["key"]))
        if "channel_id" in yt:
            _apply("youtube_channel_id", str(yt["channel_id"]))
        if "base_url" in yt:
            _apply("youtube_api_base_url", str(yt["base_url"]))
        if "timeout" in yt:
            _apply("youtube_api_timeout", int(yt["timeout"]))
        if "page_size" in yt:
            _apply("youtube_api_page_size", int(yt["page_size"]))

    # Sync
    if "sync" in config:
        sync = config["sync"] or {}
        if "state_file" in sync:
            _apply("sync_state_file", str(sync["state_file"]))
        if "interval_seconds" in sync:
            _apply("sync_interval_seconds", int(sync["interval_seconds"]))
        if "notify_on_first_run" in sync:
            _apply("sync_notify_on_first_run", bool(sync["notify_on_first_run"]))

    # SMTP
    if "smtp" in config:
        smtp = config["smtp"] or {}
        if "host" in smtp:
            _apply("smtp_host", str(smtp["host"]))
        if "port" in smtp:
            _apply("smtp_port", int(smtp["port"]))
        if "user" in smtp:
            _apply("smtp_user", str(smtp["user"]))
        if "to" in smtp:
            _apply("notify_email_to", str(smtp["to"]))
        if "from_name" in smtp:
            _apply("notify_from_name", str(smtp["from_name"]))

    # Logging
    if "logging" in config:
        log_cfg = config["logging"] or {}
        if "level" in log_cfg:
            _apply("log_level", str(log_cfg["level"]))
        if "file" in log_cfg:
            _apply("log_file", log_cfg["file"])

    return settings


def get_settings_with_yaml(config_path: Path | str | None = None) -> Settings:
    """
    Get settings with YAML configuration applied.

    Priority: Environment Variables > YAML Config > Defaults

    Args:
        config_path: Optional path to config file

    Returns:
        Settings object with YAML configuration applied
    """
    settings = get_settings()
    config = load_yaml_config(config_path)
    return apply_yaml_config(settings, config)
