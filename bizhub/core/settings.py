from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase configuration
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    JWT_SECRET: str | None = None

    # Application URLs
    APP_BASE_URL: str = "http://localhost:8001"  # Default for development
    FRONTEND_URL: str | None = None
    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    RBAC_TRACE: bool = False  # Log every permission decision at DEBUG

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def supabase_key(self) -> str | None:
        """Key used by the API's own client; the service role bypasses RLS."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_KEY


settings = Settings()
