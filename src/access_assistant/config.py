"""Runtime configuration for the accessibility voice assistant."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="ACCESS_ASSISTANT_", env_file=".env", extra="ignore")

    app_name: str = "access-assistant"
    log_level: str = "INFO"
    settings_path: str = Field(
        default="~/.access_assistant/settings.json",
        description="JSON file holding the persisted accessibility settings.",
    )
    recognition_language: str = "en-US"
    phrase_time_limit: float = 5.0
    listen_timeout: float | None = 5.0
    restart_delay_seconds: float = Field(default=0.3, ge=0.0)
    resume_delay_seconds: float = Field(default=0.1, ge=0.0)
    min_unmatched_length: int = Field(default=3, ge=0)
    voice_enabled: bool = True
    max_speech_chars: int = Field(default=500, gt=0)
    tts_voice_id: str | None = None
    tts_rate: int | None = None
    tts_volume: float | None = None


settings = Settings()
