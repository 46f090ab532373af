from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://pontua:pontua@db:5432/pontua"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    DB_POOL_PRE_PING: bool = True

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://consultoria.example.com,https://portal.example.com"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
