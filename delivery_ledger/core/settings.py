from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database - supports both SQLite (dev) and PostgreSQL (prod)
    DATABASE_URL: str = "sqlite:///./delivery_ledger.db"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    # Payment rates, re-read for every quote
    PAY_PER_ORDER: float = 50.0  # currency per completed order
    PAY_PER_KILOMETER: float = 10.0  # currency per km on completed routes
    PAY_PER_HOUR: float = 20.0  # currency per online hour

    # Dashboard
    TOP_DRIVERS_LIMIT: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
