"""
Configuration settings for the dealership API.
Uses Pydantic for type-safe configuration management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Dealership API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./dealership.db"
    database_echo: bool = False

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    cookie_name: str = "token"
    cookie_secure: bool = False
    bcrypt_rounds: int = 12
    password_min_length: int = 8

    # Seed data
    seed_demo_data: bool = True
    admin_email: str = "admin@dealership.com"
    admin_password: str = "ChangeMeAdmin2025!"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # API
    api_prefix: str = "/api"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
