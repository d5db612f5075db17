from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    VERSION: str = "0.1.0"
    DATABASE_URL: str = "sqlite:///./acts.db"
    LOG_LEVEL: str = "INFO"
    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    # API authentication (if unset, all requests pass, local dev)
    ACTS_API_KEY: str | None = None
    # CORS origins (comma-separated string for env var support)
    CORS_ORIGINS: str = "http://localhost:4200"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"
    # When true, a duty assignment for a person with an open duty is rejected
    # instead of closing the open duty the day before the new start date.
    REJECT_ACTIVE_DUTY_ASSIGNMENT: bool = False
    SEED_DATA: str = "config/seed.yaml"


settings = Settings()
