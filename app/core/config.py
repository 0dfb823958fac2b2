"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./event_checkin.db")

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-this-secret-key-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24 hours
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Root account created on first startup when no super admin exists
    ROOT_USERNAME: str | None = os.getenv("ROOT_USERNAME")
    ROOT_PASSWORD: str | None = os.getenv("ROOT_PASSWORD")
    ROOT_NAME: str = os.getenv("ROOT_NAME", "System Owner")

    # Subscriptions
    DEFAULT_EVENT_QUOTA: int = 5
    MIN_EVENT_QUOTA: int = 1
    MAX_EVENT_QUOTA: int = 100
    ENFORCE_EVENT_QUOTA: bool = os.getenv("ENFORCE_EVENT_QUOTA", "false").lower() in ("1", "true", "yes")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Rate limiting (login attempts per IP)
    RATE_LIMIT_PER_MINUTE: int = 30

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"

settings = Settings()
