"""
CertTrack Configuration
Centralized settings management with environment variable support
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    """Application settings with validation"""

    # ============================================
    # APPLICATION CONFIG
    # ============================================
    APP_NAME: str = "CertTrack"
    ENVIRONMENT: str = "development"  # development, staging, production, test
    DEBUG: bool = False
    API_VERSION: str = "1.0.0"

    # ============================================
    # DATABASE
    # ============================================
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_TIMEOUT: int = 30

    # ============================================
    # SECURITY
    # ============================================
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    BCRYPT_ROUNDS: int = 12

    # Password requirements
    MIN_PASSWORD_LENGTH: int = 8
    REQUIRE_PASSWORD_UPPERCASE: bool = True
    REQUIRE_PASSWORD_LOWERCASE: bool = True
    REQUIRE_PASSWORD_DIGIT: bool = True
    REQUIRE_PASSWORD_SPECIAL: bool = False

    # Rate limiting (signin / signup)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 10
    RATE_LIMIT_PER_HOUR: int = 100

    # ============================================
    # CORS
    # ============================================
    FRONTEND_URL: str = "http://localhost:5173"
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # ============================================
    # MONITORING
    # ============================================
    SENTRY_DSN: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # ============================================
    # ANALYTICS
    # ============================================
    TOP_USERS_LIMIT: int = 5
    RECENT_CERTIFICATES_LIMIT: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def validate_config(self) -> bool:
        """Validate critical configuration"""
        required = [
            self.DATABASE_URL,
            self.JWT_SECRET,
        ]
        return all(required)

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

# Global settings instance
settings = get_settings()

# Validate on import
if not settings.validate_config():
    raise ValueError("Missing required configuration. Check your .env file.")
