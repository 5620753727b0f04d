"""
Session Context
Explicit identity object passed to every service call
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Union
from uuid import UUID

from .permissions import Permission, is_owner_role_name, parse_permissions


@dataclass(frozen=True)
class SessionContext:
    """
    Who is acting and what they may do.

    Admin policy: a session is admin iff its role grants `manage-users`.
    Role names are never consulted for admin checks.
    """

    user_id: UUID
    company_id: UUID
    email: str = ""
    full_name: Optional[str] = None
    role_id: Optional[UUID] = None
    role_name: Optional[str] = None
    company_name: Optional[str] = None
    permissions: FrozenSet[Permission] = field(default_factory=frozenset)

    def has_permission(self, permission: Union[Permission, str]) -> bool:
        try:
            return Permission(permission) in self.permissions
        except ValueError:
            return False

    @property
    def is_admin(self) -> bool:
        return Permission.MANAGE_USERS in self.permissions

    @property
    def is_owner(self) -> bool:
        return is_owner_role_name(self.role_name or "")

    @property
    def can_manage_all_certificates(self) -> bool:
        """Admins and `manage-certificates` holders see the whole company"""
        return self.is_admin or Permission.MANAGE_CERTIFICATES in self.permissions

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "SessionContext":
        """
        Build from the `/Auth/me` payload

        Args:
            profile: camelCase profile dict returned by the API

        Returns:
            SessionContext
        """
        company = profile.get("company") or {}
        role_id = profile.get("roleId")
        return cls(
            user_id=UUID(str(profile["id"])),
            company_id=UUID(str(profile.get("companyId") or company["id"])),
            email=profile.get("email", ""),
            full_name=profile.get("fullName"),
            role_id=UUID(str(role_id)) if role_id else None,
            role_name=profile.get("role"),
            company_name=company.get("companyName"),
            permissions=parse_permissions(profile.get("permissions") or []),
        )
