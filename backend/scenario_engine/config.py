from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    MC_DEFAULT_ITERATIONS: int = 1000
    MC_MAX_ITERATIONS: int = 100_000
    MC_WORKERS: int = 1
    MC_TIMEOUT_SECONDS: float = 30.0
    FORECAST_TIMEOUT_SECONDS: float = 30.0
    FORECAST_DEFAULT_MODEL: str = "arima_model"
    FORECAST_DEFAULT_PERIODS: int = 6
    STRICT_VARIABLE_RANGES: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
