from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    DATABASE_URL: str = "sqlite:///./connectin.db"
    STORAGE_BACKEND: str = "sql"  # 'sql' | 'memory'

    # Password hashing / sessions
    BCRYPT_ROUNDS: int = 8
    SESSION_TTL_MINUTES: int = 1440

    # Google Gemini API
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # OAuth providers
    GITHUB_CLIENT_ID: str = ""
    GITHUB_CLIENT_SECRET: str = ""
    LINKEDIN_CLIENT_ID: str = ""
    LINKEDIN_CLIENT_SECRET: str = ""
    LINKEDIN_REDIRECT_URI: str = "http://localhost:5173/auth/linkedin/callback"
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # Application
    APP_NAME: str = "ConnectIn"
    API_PREFIX: str = ""
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://127.0.0.1:5173"
    )


settings = Settings()
