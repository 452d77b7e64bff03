from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = True
    
    # Application
    app_name: str = "URL Shortener"
    app_version: str = "1.0.0"
    
    # Database
    database_url: str = "sqlite:///./url_shortener.db"
    
    # Short link settings
    base_url: str = "http://127.0.0.1:8000"
    slug_length: int = 8
    # None keeps retrying until a free slug is found
    max_slug_attempts: Optional[int] = None
    
    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: int = 2
    redirect_cache_ttl: int = 60 * 60 * 24  # 24 hours
    slug_marker_ttl: int = 60 * 60 * 24
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
