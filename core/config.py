from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///word_inventory.db"
    SECRET_KEY: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_LOCATIONS: str = "cookies"
    AUTH_COOKIE_NAME: str = "access_token"
    AUTH_COOKIE_DOMAIN: str | None = None
    AUTH_COOKIE_SECURE: bool = False
    AUTH_COOKIE_SAMESITE: str = "lax"
    AUTH_COOKIE_CSRF_PROTECT: bool = True
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GENERATION_TEMPERATURE: float = 0.3
    GENERATION_MAX_OUTPUT_TOKENS: int = 3000
    GENERATION_TIMEOUT_SECONDS: float = 30.0

    CREATE_TABLES_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    @property
    def token_locations(self) -> list[str]:
        return [item.strip() for item in self.TOKEN_LOCATIONS.split(",") if item.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.CORS_ORIGINS.split(",") if item.strip()]


settings = Settings()
