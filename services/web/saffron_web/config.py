from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SAFFRON_WEB_", env_file=".env", extra="ignore")

    # REST gateway, including the /api prefix
    api_base_url: str = "http://localhost:8080/api"
    request_timeout: float = 10.0

    # Public origin used for share links
    site_url: str = "http://localhost:8080"

    # Durable store location; in-memory when unset
    storage_path: Optional[str] = None

    # Realtime recipe events (Redis pub/sub). Disabled when unset.
    realtime_url: Optional[str] = None
    realtime_channel: str = "saffron:recipes"


settings = ClientSettings()
