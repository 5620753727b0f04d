"""
Security Module
Permissions, session context, credentials, rate limiting
"""

from .permissions import Permission, ALL_PERMISSIONS, DEFAULT_ROLES, parse_permissions
from .session import SessionContext

__all__ = [
    "Permission",
    "ALL_PERMISSIONS",
    "DEFAULT_ROLES",
    "parse_permissions",
    "SessionContext",
]
