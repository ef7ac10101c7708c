from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./health_index.db"
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    allowed_origins: str = "http://localhost:3001"
    log_level: str = "INFO"

    seed_on_startup: bool = True
    health_data_use_mock: bool = True
    health_data_mock_delay_seconds: float = 0.5
    resolver_fuzzy_threshold: int = 85


settings = Settings()
