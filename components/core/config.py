from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database settings
    DB_URL: Optional[str] = None  # Optional full DB URL
    DB_PATH: str = "finance_tracker.db"

    # API settings
    API_VERSION: str = "v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Aggregation settings
    CURRENCY_SYMBOL: str = "$"
    TOP_CATEGORY_LIMIT: int = 8
    TREND_MONTHS: int = 6
    RECENT_TRANSACTIONS_LIMIT: int = 5
    BUDGET_WARNING_THRESHOLD: float = 80.0
    SEED_DEFAULT_CATEGORIES: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def async_db_url(self) -> str:
        """Get asynchronous database URL."""
        if self.DB_URL:
            return self.DB_URL
        return f"sqlite+aiosqlite:///{self.DB_PATH}"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()
