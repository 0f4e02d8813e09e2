from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=True)

    PROJECT_NAME: str = "Feedback360"
    API_PREFIX: str = "/api"

    DATABASE_URL: str = "sqlite:///./feedback360.db"

    # auth
    SECRET_KEY: str = "dev-only-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # comma separated, e.g. "http://localhost:5200,https://feedback.example.com"
    BACKEND_CORS_ORIGINS: str = "http://localhost:5200"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.BACKEND_CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
