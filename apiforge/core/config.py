from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "apiforge"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    database_url: str = "sqlite:///./apiforge.db"
    redis_url: str = "redis://localhost:6379/0"

    default_owner: str = "demo@backendio.com"
    exports_dir: str = "/data/exports"

settings = Settings()
