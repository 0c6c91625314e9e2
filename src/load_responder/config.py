from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    log_level: str = "INFO"

    lookup_enabled: bool = True
    quotefactory_username: str = ""
    quotefactory_password: str = ""
    quotefactory_base_url: str = "https://app.quotefactory.com"
    quotefactory_search_path: str = "/api/shipment/search"
    lookup_timeout_seconds: float = 5.0

    api_retry_max_attempts: int = 2
    api_retry_base_delay_seconds: float = 0.5
    api_retry_max_delay_seconds: float = 4.0

    reply_signature: str = "Balto Booking"
    default_subject: str = "Load Inquiry"

    alert_webhook_url: str = ""

    @property
    def lookup_configured(self) -> bool:
        return self.lookup_enabled and bool(self.quotefactory_username and self.quotefactory_password)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
