"""Tests for settings and YAML overlay."""

from video_sync.core.config import Settings, apply_yaml_config, load_yaml_config
from video_sync.core.constants import DEFAULT_SYNC_INTERVAL


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
        monkeypatch.delenv("YOUTUBE_CHANNEL_ID", raising=False)
        monkeypatch.delenv("SMTP_HOST", raising=False)
        settings = Settings(_env_file=None)

        assert settings.sync_interval_seconds == DEFAULT_SYNC_INTERVAL == 300
        assert settings.sync_notify_on_first_run is False
        assert settings.youtube_api_page_size == 50
        assert settings.sync_configured is False
        assert settings.email_configured is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("YOUTUBE_API_KEY", "key")
        monkeypatch.setenv("YOUTUBE_CHANNEL_ID", "UC123")
        monkeypatch.setenv("SYNC_INTERVAL_SECONDS", "60")
        monkeypatch.setenv("SYNC_NOTIFY_ON_FIRST_RUN", "true")
        monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SMTP_USER", "owner@example.com")

        settings = Settings(_env_file=None)

        assert settings.sync_configured is True
        assert settings.sync_interval_seconds == 60
        assert settings.sync_notify_on_first_run is True
        assert settings.email_configured is True


class TestYamlConfig:
    """Test config.yaml loading and priority."""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_yaml_config(tmp_path / "nope.yaml") == {}

    def test_invalid_yaml_is_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sync: [unclosed", encoding="utf-8")
        assert load_yaml_config(path) == {}

    def test_yaml_fills_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SYNC_INTERVAL_SECONDS", raising=False)
        monkeypatch.delenv("SYNC_STATE_FILE", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(
            "sync:\n"
            "  state_file: /srv/data/posts.json\n"
            "  interval_seconds: 120\n"
            "  notify_on_first_run: true\n"
            "youtube_api:\n"
            "  timeout: 10\n",
            encoding="utf-8",
        )

        settings = apply_yaml_config(Settings(_env_file=None), load_yaml_config(path))

        assert settings.sync_state_file == "/srv/data/posts.json"
        assert settings.sync_interval_seconds == 120
        assert settings.sync_notify_on_first_run is True
        assert settings.youtube_api_timeout == 10

    def test_environment_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("SYNC_INTERVAL_SECONDS", "45")
        settings = apply_yaml_config(Settings(_env_file=None), {"sync": {"interval_seconds": 900}})
        assert settings.sync_interval_seconds == 45
