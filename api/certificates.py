"""
Certification API
Certificate CRUD scoped by company and ownership
"""

from fastapi import APIRouter, Depends
from datetime import date
from typing import List, Optional
from uuid import UUID

from api.auth import get_current_session, get_gateway
from api.schemas import ApiModel, CertificateResponse, MessageResponse, certificate_response
from security.session import SessionContext
from services.certificate_service import CertificateService
from services.sql_gateway import SqlGateway

router = APIRouter()

class CertificateRequest(ApiModel):
    course_name: Optional[str] = None
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
    user_id: Optional[UUID] = None

@router.get("/all", response_model=List[CertificateResponse])
async def list_certificates(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Company certificates for elevated callers, own certificates otherwise"""
    certificates = await CertificateService(gateway).list_certificates(session)
    return [certificate_response(c) for c in certificates]

@router.get("/my", response_model=List[CertificateResponse])
async def list_my_certificates(
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Caller's own certificates"""
    certificates = await CertificateService(gateway).list_my_certificates(session)
    return [certificate_response(c) for c in certificates]

@router.post("/create", response_model=CertificateResponse, status_code=201)
async def create_certificate(
    request: CertificateRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Create a certificate; companyId always comes from the session"""
    certificate = await CertificateService(gateway).create_certificate(
        request.model_dump(exclude_unset=True), session
    )
    return certificate_response(certificate)

@router.get("/{certificate_id}", response_model=CertificateResponse)
async def get_certificate(
    certificate_id: UUID,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    certificate = await CertificateService(gateway).get_certificate(certificate_id, session)
    return certificate_response(certificate)

@router.put("/{certificate_id}", response_model=CertificateResponse)
async def update_certificate(
    certificate_id: UUID,
    request: CertificateRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Update a certificate (owner or elevated caller)"""
    certificate = await CertificateService(gateway).update_certificate(
        certificate_id, request.model_dump(exclude_unset=True), session
    )
    return certificate_response(certificate)

@router.delete("/{certificate_id}", response_model=MessageResponse)
async def delete_certificate(
    certificate_id: UUID,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Delete a certificate (owner or elevated caller)"""
    await CertificateService(gateway).delete_certificate(certificate_id, session)
    return MessageResponse(message="Certificate deleted successfully")
