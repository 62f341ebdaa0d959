from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PTCG Vault"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/ptcgvault"

    # Signs bearer tokens; override in every deployed environment
    secret_key: str = "secret"
    token_max_age_seconds: int = 7 * 24 * 60 * 60

    cors_origins: list[str] = ["*"]

    # slowapi limit string, counted per client IP
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True


settings = Settings()
