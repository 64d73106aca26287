from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    # Listening endpoint
    HOST: str = "0.0.0.0"
    PORT: int = 8765

    ENVIRONMENT: str = "development"

    # Seconds uvicorn waits for open sessions after a shutdown signal
    SHUTDOWN_TIMEOUT_SECONDS: int = 5

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    # Paths to exclude from access logs (e.g., /metrics, /health)
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]


app_settings = Settings()
