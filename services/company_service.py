"""
Company Service
Tenant signup and company lookups
"""

from typing import Any, Dict, Tuple
from loguru import logger

from security.permissions import DEFAULT_ROLES, OWNER_ROLE_NAME
from security.session import SessionContext
from security.tokens import hash_password
from services.gateway import BackendGateway
from services.errors import ConflictError, NotFoundError, ValidationError
from utils.helpers import normalize_email
from utils.validators import validate_email, validate_password, sanitize_string, missing_fields


class CompanyService:
    """Company lifecycle"""

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    async def signup(self, data: Dict[str, Any]) -> Tuple[Any, Any]:
        """
        Register a company with its default roles and owner account

        Args:
            data: company_name, owner_name, admin_email, admin_password

        Returns:
            Tuple of (company, owner user)
        """
        missing = missing_fields(data, ["company_name", "owner_name", "admin_email", "admin_password"])
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        email = normalize_email(data["admin_email"])
        if not validate_email(email):
            raise ValidationError("Invalid email address")

        valid, error = validate_password(data["admin_password"])
        if not valid:
            raise ValidationError(error)

        if await self.gateway.get_user_by_email(email):
            raise ConflictError("Email already registered")

        company = await self.gateway.create_company({
            "name": sanitize_string(data["company_name"], max_length=255),
            "is_active": True,
        })

        roles = {}
        for template in DEFAULT_ROLES:
            role = await self.gateway.create_role({
                "company_id": company.id,
                "name": template["name"],
                "permissions": list(template["permissions"]),
                "is_default": template["is_default"],
            })
            roles[role.name] = role

        owner = await self.gateway.create_user({
            "email": email,
            "password_hash": hash_password(data["admin_password"]),
            "full_name": sanitize_string(data["owner_name"], max_length=255),
            "company_id": company.id,
            "role_id": roles[OWNER_ROLE_NAME].id,
            "is_active": True,
        })

        company = await self.gateway.update_company(company.id, {"admin_user_id": owner.id})

        logger.info(f"New company registered: {company.name} (owner {owner.email})")
        return company, owner

    async def get_company(self, session: SessionContext) -> Any:
        company = await self.gateway.get_company(session.company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company
