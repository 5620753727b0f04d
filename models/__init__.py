"""
CertTrack Models Package
Import all models for easy access
"""

from .database import Base, engine, AsyncSessionLocal, init_db, get_db
from .user import Company, Role, User
from .certificate import Certificate, CertificateStatus

__all__ = [
    # Database
    "Base",
    "engine",
    "AsyncSessionLocal",
    "init_db",
    "get_db",
    # Tenant models
    "Company",
    "Role",
    "User",
    # Certificate models
    "Certificate",
    "CertificateStatus",
]
