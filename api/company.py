"""
Company API
Tenant signup and company profile
"""

from fastapi import APIRouter, Depends
from pydantic import EmailStr

from api.auth import get_current_session, get_gateway
from api.schemas import ApiModel, CompanyResponse, company_response
from security.rate_limit import check_rate_limit
from security.session import SessionContext
from services.company_service import CompanyService
from services.sql_gateway import SqlGateway

router = APIRouter()

class CompanySignupRequest(ApiModel):
    company_name: str
    owner_name: str
    admin_email: EmailStr
    admin_password: str

class CompanySignupResponse(ApiModel):
    message: str
    company: CompanyResponse
    admin_user_id: str

@router.post("/signup", response_model=CompanySignupResponse, status_code=201,
             dependencies=[Depends(check_rate_limit)])
async def signup(request: CompanySignupRequest, gateway: SqlGateway = Depends(get_gateway)):
    """Register a company and its owner account"""
    company, owner = await CompanyService(gateway).signup(request.model_dump())
    return CompanySignupResponse(
        message="Company account created successfully",
        company=company_response(company),
        admin_user_id=str(owner.id),
    )

@router.get("/me", response_model=CompanyResponse)
async def get_my_company(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Caller's company"""
    return company_response(await CompanyService(gateway).get_company(session))
