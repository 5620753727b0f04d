"""
Certificate Service
Certificate CRUD with company scoping and ownership checks
"""

from typing import Any, Dict, List
from uuid import UUID
from loguru import logger

from security.session import SessionContext
from services.gateway import BackendGateway
from services.errors import AuthorizationError, NotFoundError, ValidationError
from utils.certificates import validate_certificate_input
from utils.validators import validate_date_range


def _as_uuid(value: Any, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(f"{field} is not a valid id")


class CertificateService:
    """
    Certificate operations for one gateway.

    Elevated callers (admins and `manage-certificates` holders) act on the
    whole company; everyone else only on certificates they own.
    """

    def __init__(self, gateway: BackendGateway):
        self.gateway = gateway

    async def list_certificates(self, session: SessionContext) -> List[Any]:
        """Company set for elevated callers, own certificates otherwise"""
        if session.can_manage_all_certificates:
            return await self.gateway.list_certificates(session.company_id)
        return await self.gateway.list_certificates(session.company_id, user_id=session.user_id)

    async def list_my_certificates(self, session: SessionContext) -> List[Any]:
        """Caller's own certificates regardless of role"""
        return await self.gateway.list_certificates(session.company_id, user_id=session.user_id)

    async def get_certificate(self, certificate_id: UUID, session: SessionContext) -> Any:
        certificate = await self._get_scoped(certificate_id, session)
        self._check_access(certificate, session, "view")
        return certificate

    async def create_certificate(self, data: Dict[str, Any], session: SessionContext) -> Any:
        """
        Create a certificate

        Args:
            data: Certificate fields; `user_id` is honoured only for elevated callers
            session: Acting session

        Returns:
            Created certificate
        """
        fields = validate_certificate_input(data)
        fields["user_id"] = await self._resolve_owner(data.get("user_id"), session)
        fields["company_id"] = session.company_id

        certificate = await self.gateway.create_certificate(fields)
        logger.info(
            f"Certificate created: {certificate.id} for user {fields['user_id']} by {session.email or session.user_id}"
        )
        return certificate

    async def update_certificate(
        self,
        certificate_id: UUID,
        patch: Dict[str, Any],
        session: SessionContext
    ) -> Any:
        """
        Update a certificate after re-checking ownership

        Last write wins; there is no version check.
        """
        certificate = await self._get_scoped(certificate_id, session)
        self._check_access(certificate, session, "update")

        fields = validate_certificate_input(patch, partial=True)

        start = fields.get("start_date", certificate.start_date)
        end = fields.get("end_date", certificate.end_date)
        if not validate_date_range(start, end):
            raise ValidationError("end_date cannot be before start_date")

        requested_owner = patch.get("user_id")
        if requested_owner and session.can_manage_all_certificates:
            fields["user_id"] = await self._resolve_owner(requested_owner, session)

        updated = await self.gateway.update_certificate(certificate.id, fields)
        logger.info(f"Certificate updated: {certificate.id} by {session.email or session.user_id}")
        return updated

    async def delete_certificate(self, certificate_id: UUID, session: SessionContext) -> None:
        certificate = await self._get_scoped(certificate_id, session)
        self._check_access(certificate, session, "delete")

        await self.gateway.delete_certificate(certificate.id)
        logger.info(f"Certificate deleted: {certificate.id} by {session.email or session.user_id}")

    async def _get_scoped(self, certificate_id: UUID, session: SessionContext) -> Any:
        certificate = await self.gateway.get_certificate(_as_uuid(certificate_id, "certificate id"))
        # other tenants' certificates are indistinguishable from missing ones
        if certificate is None or certificate.company_id != session.company_id:
            raise NotFoundError("Certificate not found")
        return certificate

    def _check_access(self, certificate: Any, session: SessionContext, action: str) -> None:
        if session.can_manage_all_certificates or certificate.user_id == session.user_id:
            return
        logger.warning(
            f"Denied certificate {action}: user {session.user_id} on certificate {certificate.id}"
        )
        raise AuthorizationError(f"You are not allowed to {action} this certificate")

    async def _resolve_owner(self, requested: Any, session: SessionContext) -> UUID:
        if not requested or not session.can_manage_all_certificates:
            return session.user_id

        owner_id = _as_uuid(requested, "user_id")
        if owner_id == session.user_id:
            return owner_id

        owner = await self.gateway.get_user(owner_id)
        if owner is None or owner.company_id != session.company_id:
            raise ValidationError("Selected user does not belong to your company")
        return owner.id
