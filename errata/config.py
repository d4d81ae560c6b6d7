"""
Application configuration management.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Remote store (graph database query service)
    store_url: str = "http://localhost:6975"
    store_timeout_seconds: float = 10.0
    
    # Dataset
    snapshot_path: str = "data/errors.json"
    api_registry_path: Optional[str] = None  # Packaged apis.yaml when unset
    
    # Search
    page_size: int = 20
    
    # Application
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
