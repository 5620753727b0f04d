"""
Role API
Company roles and permission sets
"""

from fastapi import APIRouter, Depends
from typing import List, Optional
from uuid import UUID

from api.auth import get_current_session, get_gateway
from api.schemas import ApiModel, RoleResponse, role_response
from security.session import SessionContext
from services.role_service import RoleService
from services.sql_gateway import SqlGateway

router = APIRouter()

class CreateRoleRequest(ApiModel):
    name: str
    permissions: List[str] = []
    is_default: bool = False

class UpdateRoleRequest(ApiModel):
    name: Optional[str] = None
    permissions: Optional[List[str]] = None
    is_default: Optional[bool] = None

@router.get("/all", response_model=List[RoleResponse])
async def list_roles(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    return [role_response(r) for r in await RoleService(gateway).list_roles(session)]

@router.post("/create", response_model=RoleResponse, status_code=201)
async def create_role(
    request: CreateRoleRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    role = await RoleService(gateway).create_role(request.model_dump(), session)
    return role_response(role)

@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    role = await RoleService(gateway).update_role(role_id, request.model_dump(exclude_unset=True), session)
    return role_response(role)
