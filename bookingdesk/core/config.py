from pathlib import Path

from pydantic_settings import BaseSettings

from bookingdesk.core.types import Language


class Settings(BaseSettings):
    api_endpoint: str = "localhost:8000"
    api_endpoint_ssl: bool = False
    api_timeout_seconds: float = 10.0

    tenant_subdomain: str = "demo"
    auth_token: str | None = None

    poll_interval_ms: int = 30_000
    booking_poll_interval_ms: int = 30_000
    page_limit: int = 10
    language: Language = "en"
    export_dir: Path = Path("exports")

    server_bind: str = "0.0.0.0"
    server_port: int | None = 8000
    server_debug: bool = False

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
