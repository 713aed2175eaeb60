from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "UTC"

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data"
    USERS_FILE: str | None = None

    CANCEL_LEAD_HOURS: int = 2
    PAGE_SIZE: int = 20

    TASK_RUNNER_MAX_WORKERS: int = 4
    JOB_MAX_ATTEMPTS: int = 3

    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_FROM_EMAIL: str | None = None
    SMTP_USE_TLS: bool = True


settings = Settings()
