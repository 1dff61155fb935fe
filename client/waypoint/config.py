from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Backend
    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 30.0

    # Credentials
    credential_backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"
    credential_token_key: str = "auth_token"

    # Widgets
    widget_default_icon: str = "🤖"
    addon_bundle_size: int = 3

    # Seat upgrade display pricing (presentation only)
    upgrade_price_divisor: int = 20
    upgrade_fallback_price: int = 3200

    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None

    # Sandbox backend
    sandbox_secret_key: str = "sandbox-secret-change-me"
    sandbox_algorithm: str = "HS256"
    sandbox_token_expire_minutes: int = 1440  # 24 hours

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
