# superchat/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    PROJECT_NAME: str = "Super Chat API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Messaging backend with phone/OTP auth, groups and admin settings"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_TOKEN_EXPIRE_DAYS: int = 30
    ADMIN_TOKEN_EXPIRE_MINUTES: int = 720

    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    DB_TIMEOUT_SECONDS: float = 5.0

    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    SMS_PROVIDER: str = "console"
    SMS_SENDER_ID: str = "SUPERCHAT"

    # bootstrap admin, created at startup when all three are set
    ADMIN_USERNAME: str | None = None
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    @property
    def is_dev(self) -> bool:
        return self.ENVIRONMENT.lower() in ("dev", "development", "local")
