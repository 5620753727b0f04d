"""
Analytics API
Certificate rollups for the admin analytics charts and the personal dashboard
"""

from fastapi import APIRouter, Depends
from typing import Dict, List
from loguru import logger

from api.auth import get_current_session, get_gateway, require_admin
from api.schemas import ApiModel, CertificateResponse, certificate_response
from config import settings
from security.session import SessionContext
from services.analytics import aggregate_certificates, dashboard_stats
from services.certificate_service import CertificateService
from services.employee_service import EmployeeService
from services.sql_gateway import SqlGateway

router = APIRouter()

# Pydantic models
class TopUser(ApiModel):
    user_id: str
    name: str
    certificates: int

class AnalyticsSummary(ApiModel):
    total_employees: int
    total_certificates: int
    completed: int
    in_progress: int
    started: int
    completion_rate: float
    by_status: Dict[str, int]
    by_level: Dict[str, int]
    by_category: Dict[str, int]
    top_users: List[TopUser]

class DashboardResponse(ApiModel):
    total: int
    completed: int
    in_progress: int
    started: int
    completion_rate: int
    recent: List[CertificateResponse]

# Routes
@router.get("/summary", response_model=AnalyticsSummary)
async def get_summary(
    session: SessionContext = Depends(require_admin),
    gateway: SqlGateway = Depends(get_gateway)
):
    """
    Company-wide certificate analytics
    Admin only
    """
    certificates = await CertificateService(gateway).list_certificates(session)
    employees = await EmployeeService(gateway).list_employees(session)

    members = await gateway.list_users(session.company_id)
    names = {u.id: (u.full_name or u.email) for u in members}

    aggregate = aggregate_certificates(certificates, names, limit=settings.TOP_USERS_LIMIT)
    logger.debug(f"Analytics summary for company {session.company_id}: {aggregate.total} certificates")

    return AnalyticsSummary(
        total_employees=len(employees),
        total_certificates=aggregate.total,
        completed=aggregate.completed,
        in_progress=aggregate.in_progress,
        started=aggregate.started,
        completion_rate=aggregate.completion_rate,
        by_status=aggregate.by_status,
        by_level=aggregate.by_level,
        by_category=aggregate.by_category,
        top_users=[
            TopUser(user_id=str(u.user_id), name=u.name, certificates=u.certificates)
            for u in aggregate.top_users
        ],
    )

@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Caller's own certificate progress"""
    certificates = await CertificateService(gateway).list_my_certificates(session)
    stats = dashboard_stats(certificates, limit=settings.RECENT_CERTIFICATES_LIMIT)

    return DashboardResponse(
        total=stats.total,
        completed=stats.completed,
        in_progress=stats.in_progress,
        started=stats.started,
        completion_rate=stats.completion_rate,
        recent=[certificate_response(c) for c in stats.recent],
    )
