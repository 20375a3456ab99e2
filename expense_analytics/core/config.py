from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "ExpenseAnalytics"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Forecasting
    FORECAST_HISTORY_MONTHS: int = Field(default=12, ge=1)
    FORECAST_DEFAULT_MONTHS: int = Field(default=3, ge=1)
    TREND_NOISE_THRESHOLD: float = Field(default=0.01, ge=0)
    FULL_CONFIDENCE_MONTHS: int = Field(default=6, ge=1)
    LOW_CONFIDENCE: float = Field(default=0.1, ge=0, le=1)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
