from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Supabase
    supabase_url: str = ""
    supabase_key: str = Field(
        default="",
        validation_alias=AliasChoices("SUPABASE_KEY", "SUPABASE_SERVICE_ROLE_KEY"),
    )

    # Telegram (operator alerts)
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""

    # Scheduler
    scheduler_timezone: str = "UTC"
    artist_trending_interval_hours: int = 6
    show_trending_interval_hours: int = 6
    show_counts_interval_hours: int = 6
    status_transition_interval_hours: int = 4

    # Alerts
    alert_window_seconds: int = 3600

    # App
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"


settings = Settings()
