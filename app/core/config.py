# app/core/config.py

from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )
    
    # App Configuration
    APP_NAME: str = "Expense Tracker API"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    
    # Database Configuration
    DATABASE_URL: str
    
    # JWT / Security Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080
    
    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:3000"
    
    # Defaults for a user's settings row when it is first created
    DEFAULT_MONTHLY_BUDGET: float = 50000.0
    DEFAULT_CURRENCY: str = "₹"
    DEFAULT_START_OF_WEEK: int = 1  # Monday
    
    # Optional: Environment
    ENVIRONMENT: str = "development"
    
    @field_validator("DEFAULT_START_OF_WEEK")
    @classmethod
    def check_start_of_week(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError("DEFAULT_START_OF_WEEK must be between 0 (Sunday) and 6 (Saturday)")
        return v
    
    @property
    def is_sqlite(self) -> bool:
        """SQLite engines use a static/null pool and reject pool sizing options"""
        return self.DATABASE_URL.startswith("sqlite")

# Create a global settings instance
settings = Settings()
