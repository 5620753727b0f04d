"""
Employee Service
Admin management of company members and their role assignment
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from loguru import logger

from security.permissions import Permission, is_owner_role_name
from security.session import SessionContext
from security.tokens import hash_password
from services.gateway import BackendGateway
from services.role_service import RoleService
from services.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from utils.helpers import normalize_email
from utils.validators import validate_email, validate_password, sanitize_string, missing_fields


def _as_uuid(value: Any, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"{field} is not a valid id")


class EmployeeService:
    """
    Every operation is admin-only. The caller's own account and Owner
    accounts are outside the reach of these operations.
    """

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway
        self.roles = RoleService(gateway)

    async def list_employees(self, session: SessionContext) -> List[Any]:
        """Company members minus the caller and Owner accounts, filtered in the query"""
        self._require_admin(session, "view employees")
        owner_role_ids = await self.roles.owner_role_ids(session.company_id)
        return await self.gateway.list_users(
            session.company_id,
            exclude_user_id=session.user_id,
            exclude_role_ids=owner_role_ids,
        )

    async def get_employee(self, user_id: UUID, session: SessionContext) -> Any:
        user_id = _as_uuid(user_id, "user id")
        if user_id != session.user_id:
            self._require_admin(session, "view employees")
        return await self._get_scoped_user(user_id, session)

    async def create_employee(self, data: Dict[str, Any], session: SessionContext) -> Any:
        """
        Create an employee account

        Args:
            data: email, password, full_name, optional department and role_id / role (name)
            session: Acting admin session

        Returns:
            Created user
        """
        self._require_admin(session, "create employees")

        missing = missing_fields(data, ["email", "password", "full_name"])
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        email = normalize_email(data["email"])
        if not validate_email(email):
            raise ValidationError("Invalid email address")

        valid, error = validate_password(data["password"])
        if not valid:
            raise ValidationError(error)

        if await self.gateway.get_user_by_email(email):
            raise ConflictError("Email already registered")

        role = await self._resolve_role(data, session)

        user = await self.gateway.create_user({
            "email": email,
            "password_hash": hash_password(data["password"]),
            "full_name": sanitize_string(data["full_name"], max_length=255),
            "department": sanitize_string(data.get("department"), max_length=255) or None,
            "company_id": session.company_id,
            "role_id": role.id,
            "is_active": True,
        })
        logger.info(f"Employee created: {user.email} as {role.name} by {session.email or session.user_id}")
        return user

    async def update_employee(self, user_id: UUID, data: Dict[str, Any], session: SessionContext) -> Any:
        """Edit profile fields, optionally password and role"""
        self._require_admin(session, "update employees")
        target = await self._get_manageable_user(user_id, session)

        patch: Dict[str, Any] = {}

        if "full_name" in data:
            full_name = sanitize_string(data.get("full_name"), max_length=255)
            if not full_name:
                raise ValidationError("Full name is required")
            patch["full_name"] = full_name

        if "department" in data:
            patch["department"] = sanitize_string(data.get("department"), max_length=255) or None

        if data.get("email"):
            email = normalize_email(data["email"])
            if not validate_email(email):
                raise ValidationError("Invalid email address")
            if email != target.email:
                existing = await self.gateway.get_user_by_email(email)
                if existing and existing.id != target.id:
                    raise ConflictError("Email already registered")
                patch["email"] = email

        if data.get("password"):
            valid, error = validate_password(data["password"])
            if not valid:
                raise ValidationError(error)
            patch["password_hash"] = hash_password(data["password"])

        if data.get("role_id") or data.get("role"):
            role = await self._resolve_role(data, session)
            patch["role_id"] = role.id

        if not patch:
            return target

        updated = await self.gateway.update_user(target.id, patch)
        logger.info(f"Employee updated: {updated.email} by {session.email or session.user_id}")
        return updated

    async def update_role(self, user_id: UUID, new_role_id: UUID, session: SessionContext) -> Any:
        """Assign a role of the caller's company to a member"""
        self._require_admin(session, "change roles")
        target = await self._get_manageable_user(user_id, session)
        role = await self._resolve_role({"role_id": new_role_id}, session)

        updated = await self.gateway.update_user(target.id, {"role_id": role.id})
        logger.info(f"Role of {updated.email} set to {role.name} by {session.email or session.user_id}")
        return updated

    async def set_active(self, user_id: UUID, active: bool, session: SessionContext) -> Any:
        self._require_admin(session, "change account status")
        target = await self._get_manageable_user(user_id, session)

        updated = await self.gateway.update_user(target.id, {"is_active": bool(active)})
        logger.info(
            f"Employee {updated.email} {'activated' if active else 'deactivated'} by {session.email or session.user_id}"
        )
        return updated

    async def delete_user(self, user_id: UUID, session: SessionContext) -> None:
        """
        Hard-delete a member. Their certificates stay behind and show up
        with an unknown owner.
        """
        self._require_admin(session, "delete users")
        target = await self._get_manageable_user(user_id, session)

        await self.gateway.delete_user(target.id)
        logger.info(f"User deleted: {target.email} by {session.email or session.user_id}")

    def _require_admin(self, session: SessionContext, action: str) -> None:
        if not session.is_admin:
            logger.warning(f"Denied '{action}' for non-admin user {session.user_id}")
            raise AuthorizationError(f"You do not have permission to {action}")

    async def _get_scoped_user(self, user_id: UUID, session: SessionContext) -> Any:
        user = await self.gateway.get_user(user_id)
        if user is None or user.company_id != session.company_id:
            raise NotFoundError("Employee not found")
        return user

    async def _get_manageable_user(self, user_id: UUID, session: SessionContext) -> Any:
        user_id = _as_uuid(user_id, "user id")
        # checked before any backend call
        if user_id == session.user_id:
            logger.warning(f"User {session.user_id} attempted an admin action on their own account")
            raise AuthorizationError("You cannot perform this action on your own account")

        user = await self._get_scoped_user(user_id, session)
        if user.role_id is not None:
            role = await self.gateway.get_role(user.role_id)
            if role is not None and is_owner_role_name(role.name):
                raise AuthorizationError("Owner accounts cannot be modified")
        return user

    async def _resolve_role(self, data: Dict[str, Any], session: SessionContext) -> Any:
        role: Optional[Any] = None

        if data.get("role_id"):
            try:
                role = await self.roles.get_role(_as_uuid(data["role_id"], "role_id"), session.company_id)
            except NotFoundError:
                raise ValidationError("Role does not belong to your company")
        elif data.get("role"):
            role = await self.roles.find_role_by_name(session.company_id, data["role"])
            if role is None:
                raise ValidationError(f"Unknown role '{data['role']}'")
        else:
            role = await self.roles.get_default_role(session.company_id)
            if role is None:
                raise ValidationError("No default role is configured for this company")
            if Permission.MANAGE_USERS.value in (role.permissions or []):
                logger.warning(f"Default role {role.name} of company {session.company_id} grants manage-users")
                raise ValidationError("The default role cannot grant manage-users; pick a role explicitly")

        if is_owner_role_name(role.name):
            raise AuthorizationError("The Owner role cannot be assigned")
        return role
