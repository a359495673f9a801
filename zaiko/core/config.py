from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Zaiko"
    APP_PORT: int = 8080
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Auth
    SECRET_KEY: str = "zaiko-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    
    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_PATH: str = "./zaiko.db"
    SEED_DEFAULT_DATA: bool = True
    
    # Stock
    LOW_STOCK_THRESHOLD: int = 10
    RECENT_TRANSACTIONS_LIMIT: int = 10
    MOVEMENT_MAX_ATTEMPTS: int = 3
    
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATABASE_PATH}"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
