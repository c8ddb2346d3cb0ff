from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Database (snapshot source)
    DATABASE_URL: str = "sqlite:///./medstock.db"
    
    # Application
    APP_NAME: str = "MedStock Pharmacy Dashboard"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]  # Restrict in production
    
    # Presentation
    CURRENCY: str = "PKR"
    DEFAULT_TIME_RANGE: str = "30days"
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
