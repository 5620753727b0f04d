"""
Employee API
Admin management of company members
"""

from fastapi import APIRouter, Depends
from pydantic import EmailStr
from typing import List, Optional
from uuid import UUID

from api.auth import get_current_session, get_gateway
from api.schemas import ApiModel, EmployeeResponse, MessageResponse, employee_response, roles_index
from security.session import SessionContext
from services.employee_service import EmployeeService
from services.sql_gateway import SqlGateway

router = APIRouter()

class CreateEmployeeRequest(ApiModel):
    email: EmailStr
    password: str
    full_name: str
    department: Optional[str] = None
    role: Optional[str] = None  # role name, as the admin screens send it
    role_id: Optional[UUID] = None

class UpdateEmployeeRequest(ApiModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    department: Optional[str] = None
    role: Optional[str] = None
    role_id: Optional[UUID] = None

class UpdateRoleRequest(ApiModel):
    role_id: UUID

class UpdateStatusRequest(ApiModel):
    is_active: bool

async def _respond(gateway: SqlGateway, session: SessionContext, user) -> EmployeeResponse:
    roles = await gateway.list_roles(session.company_id)
    return employee_response(user, roles_index(roles))

@router.get("/all", response_model=List[EmployeeResponse])
async def list_employees(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Company members except the caller and Owner accounts (admin only)"""
    users = await EmployeeService(gateway).list_employees(session)
    roles = roles_index(await gateway.list_roles(session.company_id))
    return [employee_response(u, roles) for u in users]

@router.post("/create", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    request: CreateEmployeeRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    user = await EmployeeService(gateway).create_employee(request.model_dump(exclude_unset=True), session)
    return await _respond(gateway, session, user)

@router.get("/{user_id}", response_model=EmployeeResponse)
async def get_employee(
    user_id: UUID,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    user = await EmployeeService(gateway).get_employee(user_id, session)
    return await _respond(gateway, session, user)

@router.put("/{user_id}", response_model=EmployeeResponse)
async def update_employee(
    user_id: UUID,
    request: UpdateEmployeeRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    user = await EmployeeService(gateway).update_employee(
        user_id, request.model_dump(exclude_unset=True), session
    )
    return await _respond(gateway, session, user)

@router.put("/{user_id}/role", response_model=EmployeeResponse)
async def update_employee_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    user = await EmployeeService(gateway).update_role(user_id, request.role_id, session)
    return await _respond(gateway, session, user)

@router.put("/{user_id}/status", response_model=EmployeeResponse)
async def update_employee_status(
    user_id: UUID,
    request: UpdateStatusRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    user = await EmployeeService(gateway).set_active(user_id, request.is_active, session)
    return await _respond(gateway, session, user)

@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_employee(
    user_id: UUID,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Delete a member; their certificates are kept"""
    await EmployeeService(gateway).delete_user(user_id, session)
    return MessageResponse(message="Employee deleted successfully")
