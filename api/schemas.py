"""
Shared API Schemas
camelCase response models and their builders
"""

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from security.session import SessionContext


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanySummary(ApiModel):
    id: UUID
    company_name: str


class CompanyResponse(ApiModel):
    id: UUID
    name: str
    admin_user_id: Optional[UUID] = None
    is_active: bool
    created_at: datetime


class RoleResponse(ApiModel):
    id: UUID
    name: str
    permissions: List[str]
    is_default: bool


class UserResponse(ApiModel):
    id: UUID
    email: str
    full_name: Optional[str] = None
    role_id: Optional[UUID] = None
    role: Optional[str] = None
    permissions: List[str] = []
    company_id: UUID
    company: Optional[CompanySummary] = None


class EmployeeUser(ApiModel):
    id: UUID
    email: str
    role_id: Optional[UUID] = None
    role: Optional[str] = None


class EmployeeResponse(ApiModel):
    id: UUID
    user_id: UUID
    full_name: Optional[str] = None
    department: Optional[str] = None
    is_active: bool
    created_at: datetime
    user: EmployeeUser


class CertificateResponse(ApiModel):
    id: UUID
    user_id: UUID
    course_name: str
    course_link: Optional[str] = None
    organization: Optional[str] = None
    certificate_name: Optional[str] = None
    level: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    demo: Optional[str] = None
    output: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class MessageResponse(ApiModel):
    message: str


def company_response(company: Any) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        admin_user_id=company.admin_user_id,
        is_active=company.is_active,
        created_at=company.created_at,
    )


def role_response(role: Any) -> RoleResponse:
    return RoleResponse(
        id=role.id,
        name=role.name,
        permissions=list(role.permissions or []),
        is_default=role.is_default,
    )


def profile_response(session: SessionContext) -> UserResponse:
    return UserResponse(
        id=session.user_id,
        email=session.email,
        full_name=session.full_name,
        role_id=session.role_id,
        role=session.role_name,
        permissions=sorted(p.value for p in session.permissions),
        company_id=session.company_id,
        company=CompanySummary(id=session.company_id, company_name=session.company_name or ""),
    )


def employee_response(user: Any, roles_by_id: Mapping[UUID, Any]) -> EmployeeResponse:
    role = roles_by_id.get(user.role_id)
    return EmployeeResponse(
        id=user.id,
        user_id=user.id,
        full_name=user.full_name,
        department=user.department,
        is_active=user.is_active,
        created_at=user.created_at,
        user=EmployeeUser(
            id=user.id,
            email=user.email,
            role_id=user.role_id,
            role=role.name if role else None,
        ),
    )


def certificate_response(certificate: Any) -> CertificateResponse:
    return CertificateResponse(
        id=certificate.id,
        user_id=certificate.user_id,
        course_name=certificate.course_name,
        course_link=certificate.course_link,
        organization=certificate.organization,
        certificate_name=certificate.certificate_name,
        level=certificate.level,
        category=certificate.category,
        status=certificate.status,
        start_date=certificate.start_date,
        end_date=certificate.end_date,
        demo=certificate.demo,
        output=certificate.output,
        created_at=certificate.created_at,
        updated_at=certificate.updated_at,
    )


def roles_index(roles: List[Any]) -> Dict[UUID, Any]:
    return {role.id: role for role in roles}
