"""
Authentication Service
Credential checks and session resolution
"""

from typing import Any
from uuid import UUID
from loguru import logger

from security.permissions import parse_permissions
from security.session import SessionContext
from security.tokens import hash_password, verify_password, create_access_token
from services.gateway import BackendGateway
from services.errors import AuthenticationError, ValidationError
from utils.helpers import normalize_email, utc_now
from utils.validators import validate_password


class AuthService:
    """Sign-in, identity resolution and password changes"""

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    async def authenticate(self, email: str, password: str) -> Any:
        """
        Check credentials

        Unknown email and wrong password fail with the same message.

        Returns:
            The authenticated user
        """
        user = await self.gateway.get_user_by_email(normalize_email(email))

        if not user or not verify_password(password or "", user.password_hash):
            logger.warning(f"Failed login for {normalize_email(email)}")
            raise AuthenticationError("Incorrect email or password")

        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        company = await self.gateway.get_company(user.company_id)
        if company is None or not company.is_active:
            raise AuthenticationError("Company account is inactive")

        user = await self.gateway.update_user(user.id, {"last_login": utc_now()})
        logger.info(f"User logged in: {user.email}")
        return user

    async def sign_in(self, email: str, password: str) -> str:
        """Authenticate and issue a bearer token"""
        user = await self.authenticate(email, password)
        return create_access_token({"sub": str(user.id)})

    async def resolve_session(self, user_id: UUID) -> SessionContext:
        """
        Load user, role and company by foreign key into a SessionContext

        Raises:
            AuthenticationError: user missing/inactive or company inactive
        """
        if not isinstance(user_id, UUID):
            try:
                user_id = UUID(str(user_id))
            except ValueError:
                raise AuthenticationError("Could not validate credentials")

        user = await self.gateway.get_user(user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive")

        company = await self.gateway.get_company(user.company_id)
        if company is None or not company.is_active:
            raise AuthenticationError("Company account is inactive")

        role = await self.gateway.get_role(user.role_id) if user.role_id else None
        if role is not None and role.company_id != user.company_id:
            logger.error(f"User {user.id} references role {role.id} of another company")
            role = None

        return SessionContext(
            user_id=user.id,
            company_id=user.company_id,
            email=user.email,
            full_name=user.full_name,
            role_id=role.id if role else None,
            role_name=role.name if role else None,
            company_name=company.name,
            permissions=parse_permissions(role.permissions if role else []),
        )

    async def reset_password(self, session: SessionContext, new_password: str) -> None:
        valid, error = validate_password(new_password)
        if not valid:
            raise ValidationError(error)

        await self.gateway.update_user(session.user_id, {"password_hash": hash_password(new_password)})
        logger.info(f"Password reset for {session.email or session.user_id}")
