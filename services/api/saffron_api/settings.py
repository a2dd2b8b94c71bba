from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./saffron.db"
    redis_url: str = "redis://localhost:6379/0"

    # HTTP server (PORT is the only flag the process honours)
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Pre-built client bundle served with SPA fallback
    client_dist_dir: str = "services/web/dist"

    # Admin auth
    secret_key: str = "change-me"
    token_ttl_minutes: int = 60 * 12

    # Bootstrap admin, created at start-up when no admin account exists
    admin_username: Optional[str] = None
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    # Dev helpers (POST /api/dev/seed)
    enable_dev_routes: bool = True

    # Realtime
    recipe_events_channel: str = "saffron:recipes"

    # Rate limits (slowapi syntax)
    login_rate_limit: str = "20/minute"
    contact_rate_limit: str = "10/minute"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]


settings = Settings()
