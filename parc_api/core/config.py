from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_ENV: str = "development"  # development | production

    # Database
    DATABASE_URL: str = "sqlite:///./parc_info.db"
    # DB bootstrap (dev only)
    AUTO_DB_BOOTSTRAP: bool = False

    # Session cookie
    SESSION_SECRET: str = "parc-info-dev-secret"
    SESSION_TTL_SECONDS: int = 7 * 24 * 60 * 60
    SESSION_COOKIE_NAME: str = "parc_sid"
    SESSION_COOKIE_SECURE: bool | None = None
    SESSION_COOKIE_SAMESITE: str | None = None  # lax | strict | none
    SESSION_COOKIE_DOMAIN: str | None = None
    SESSION_COOKIE_HTTPONLY: bool = True

    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173"
    PORT: int = 3000
    LOG_LEVEL: str | None = None

    # Seed admin, created only when both are set
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    IMPORT_MAX_BYTES: int = 5 * 1024 * 1024

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        if self.SESSION_COOKIE_SECURE is not None:
            return self.SESSION_COOKIE_SECURE
        return self.is_production

    @property
    def cookie_samesite(self) -> str:
        if self.SESSION_COOKIE_SAMESITE:
            return self.SESSION_COOKIE_SAMESITE.lower()
        return "none" if self.is_production else "lax"

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.is_production else "DEBUG"

    @property
    def allow_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
