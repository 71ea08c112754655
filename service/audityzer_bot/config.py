from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Telegram
    telegram_bot_token: str
    telegram_webhook_url: str
    telegram_api_base_url: str = "https://api.telegram.org"
    telegram_webhook_secret: str = ""  # Optional: for webhook verification
    telegram_request_timeout: float = 10.0

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
