"""
Role Service
Company-scoped roles and their permission sets
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from loguru import logger

from security.permissions import (
    Permission,
    has_full_permissions,
    is_owner_role_name,
    validate_permissions,
)
from security.session import SessionContext
from services.gateway import BackendGateway
from services.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from utils.validators import sanitize_string


class RoleService:
    """
    Manage roles of the caller's company

    Invariants kept on every write:
    - the Owner role is immutable
    - at least one role carries the full permission set
    - at most one role is the default, and it never grants manage-users
    - a caller cannot grant permissions they do not hold
    - only admins may edit their own role
    """

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    async def list_roles(self, session: SessionContext) -> List[Any]:
        if not (session.is_admin or session.has_permission(Permission.MANAGE_ROLES)):
            raise AuthorizationError("You do not have permission to view roles")
        return await self.gateway.list_roles(session.company_id)

    async def get_role(self, role_id: UUID, company_id: UUID) -> Any:
        """Role by id, restricted to one company"""
        role = await self.gateway.get_role(role_id)
        if role is None or role.company_id != company_id:
            raise NotFoundError("Role not found")
        return role

    async def get_default_role(self, company_id: UUID) -> Optional[Any]:
        for role in await self.gateway.list_roles(company_id):
            if role.is_default:
                return role
        return None

    async def find_role_by_name(self, company_id: UUID, name: str) -> Optional[Any]:
        wanted = (name or "").strip().lower()
        for role in await self.gateway.list_roles(company_id):
            if role.name.lower() == wanted:
                return role
        return None

    async def owner_role_ids(self, company_id: UUID) -> List[UUID]:
        return [r.id for r in await self.gateway.list_roles(company_id) if is_owner_role_name(r.name)]

    async def create_role(self, data: Dict[str, Any], session: SessionContext) -> Any:
        """
        Create a company role

        Args:
            data: name, permissions, optional is_default
            session: Acting session (needs manage-roles)

        Returns:
            Created role
        """
        self._require_manage_roles(session)

        name = sanitize_string(data.get("name"), max_length=100)
        if not name:
            raise ValidationError("Role name is required")
        if is_owner_role_name(name):
            raise ValidationError("The Owner role is reserved")

        permissions = self._clean_permissions(data.get("permissions") or [])
        self._check_grantable(permissions, [], session)
        roles = await self.gateway.list_roles(session.company_id)
        if any(r.name.lower() == name.lower() for r in roles):
            raise ConflictError(f"A role named '{name}' already exists")

        is_default = bool(data.get("is_default"))
        self._check_default(is_default, permissions)
        if is_default:
            await self._clear_default(roles)

        role = await self.gateway.create_role({
            "company_id": session.company_id,
            "name": name,
            "permissions": permissions,
            "is_default": is_default,
        })
        logger.info(f"Role created: {role.name} in company {session.company_id}")
        return role

    async def update_role(self, role_id: UUID, data: Dict[str, Any], session: SessionContext) -> Any:
        self._require_manage_roles(session)
        role = await self.get_role(role_id, session.company_id)

        if is_owner_role_name(role.name):
            raise AuthorizationError("The Owner role cannot be modified")

        if role.id == session.role_id and not session.is_admin:
            logger.warning(f"User {session.user_id} attempted to edit their own role {role.id}")
            raise AuthorizationError("You cannot modify your own role")

        roles = await self.gateway.list_roles(session.company_id)
        patch: Dict[str, Any] = {}

        if "name" in data:
            name = sanitize_string(data.get("name"), max_length=100)
            if not name:
                raise ValidationError("Role name is required")
            if is_owner_role_name(name):
                raise ValidationError("The Owner role is reserved")
            if any(r.id != role.id and r.name.lower() == name.lower() for r in roles):
                raise ConflictError(f"A role named '{name}' already exists")
            patch["name"] = name

        if "permissions" in data:
            permissions = self._clean_permissions(data.get("permissions") or [])
            self._check_grantable(permissions, role.permissions, session)
            if has_full_permissions(role.permissions) and not has_full_permissions(permissions):
                others = [r for r in roles if r.id != role.id and has_full_permissions(r.permissions)]
                if not others:
                    raise ConflictError("A company must keep at least one role with full permissions")
            patch["permissions"] = permissions

        if "is_default" in data and data["is_default"] is not None:
            patch["is_default"] = bool(data["is_default"])

        self._check_default(
            patch.get("is_default", role.is_default),
            patch.get("permissions", role.permissions),
        )

        if patch.get("is_default") and not role.is_default:
            await self._clear_default([r for r in roles if r.id != role.id])

        if not patch:
            return role

        updated = await self.gateway.update_role(role.id, patch)
        logger.info(f"Role updated: {updated.name} in company {session.company_id}")
        return updated

    def _require_manage_roles(self, session: SessionContext) -> None:
        if not session.has_permission(Permission.MANAGE_ROLES):
            logger.warning(f"Denied role management for user {session.user_id}")
            raise AuthorizationError("You do not have permission to manage roles")

    def _check_grantable(self, permissions: List[str], current, session: SessionContext) -> None:
        added = set(permissions) - set(current or [])
        missing = sorted(p for p in added if not session.has_permission(p))
        if missing:
            logger.warning(f"User {session.user_id} tried to grant permissions they lack: {missing}")
            raise AuthorizationError(f"You cannot grant permissions you do not hold: {', '.join(missing)}")

    def _check_default(self, is_default: bool, permissions) -> None:
        if is_default and Permission.MANAGE_USERS.value in (permissions or []):
            raise ValidationError("The default role cannot grant manage-users")

    def _clean_permissions(self, values) -> List[str]:
        try:
            return validate_permissions(v.value if isinstance(v, Permission) else v for v in values)
        except ValueError as e:
            raise ValidationError(str(e))

    async def _clear_default(self, roles: List[Any]) -> None:
        for other in roles:
            if other.is_default:
                await self.gateway.update_role(other.id, {"is_default": False})
