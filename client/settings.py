"""
Client Configuration
SDK settings; reads the same .env as the server but needs none of its secrets
"""

from pydantic_settings import BaseSettings
from functools import lru_cache

class ClientSettings(BaseSettings):
    """Where the API lives and where the token is kept"""

    API_BASE_URL: str = "http://localhost:8000/api"
    CLIENT_TOKEN_FILE: str = "~/.certtrack/token"
    CLIENT_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_client_settings() -> ClientSettings:
    """Get cached client settings instance"""
    return ClientSettings()

client_settings = get_client_settings()
