"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./event_logistics.db")
    
    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")
    
    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    BOOKING_REF_PREFIX: str = "BK"
    
    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]
    
    # Rate limiting (guest lookups)
    RATE_LIMIT_PER_MINUTE: int = 30
    # Only honour X-Forwarded-For / X-Real-IP behind a trusted reverse proxy
    TRUST_PROXY_HEADERS: bool = False
    
    class Config:
        env_file = ".env"

settings = Settings()
