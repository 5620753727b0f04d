"""
SQL Backend Gateway
Relational implementation of BackendGateway over an AsyncSession
"""

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from models import Company, Role, User, Certificate
from services.gateway import BackendGateway
from services.errors import NotFoundError
from utils.helpers import utc_now, normalize_email


class SqlGateway(BackendGateway):
    """
    Every list is a filtered, ordered query; writes flush inside the
    request transaction (committed by `get_db`); deletes are hard deletes.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _add(self, obj):
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _patch(self, model, object_id: UUID, patch: Dict[str, Any]):
        obj = await self.db.get(model, object_id)
        if obj is None:
            raise NotFoundError(f"{model.__name__} not found")

        for key, value in patch.items():
            setattr(obj, key, value)
        obj.updated_at = utc_now()

        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete(self, model, object_id: UUID) -> None:
        obj = await self.db.get(model, object_id)
        if obj is None:
            raise NotFoundError(f"{model.__name__} not found")
        await self.db.delete(obj)
        await self.db.flush()

    # ---------------- Companies ----------------

    async def get_company(self, company_id: UUID) -> Optional[Company]:
        return await self.db.get(Company, company_id)

    async def create_company(self, data: Dict[str, Any]) -> Company:
        return await self._add(Company(**data))

    async def update_company(self, company_id: UUID, patch: Dict[str, Any]) -> Company:
        return await self._patch(Company, company_id, patch)

    # ---------------- Roles ----------------

    async def list_roles(self, company_id: UUID) -> List[Role]:
        result = await self.db.execute(
            select(Role)
            .where(Role.company_id == company_id)
            .order_by(Role.created_at, Role.name)
        )
        return list(result.scalars().all())

    async def get_role(self, role_id: UUID) -> Optional[Role]:
        return await self.db.get(Role, role_id)

    async def create_role(self, data: Dict[str, Any]) -> Role:
        return await self._add(Role(**data))

    async def update_role(self, role_id: UUID, patch: Dict[str, Any]) -> Role:
        return await self._patch(Role, role_id, patch)

    # ---------------- Users ----------------

    async def list_users(
        self,
        company_id: UUID,
        exclude_user_id: Optional[UUID] = None,
        exclude_role_ids: Iterable[UUID] = ()
    ) -> List[User]:
        query = select(User).where(User.company_id == company_id)

        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)

        exclude_role_ids = list(exclude_role_ids)
        if exclude_role_ids:
            query = query.where(
                (User.role_id.is_(None)) | (User.role_id.not_in(exclude_role_ids))
            )

        result = await self.db.execute(query.order_by(desc(User.created_at)))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create_user(self, data: Dict[str, Any]) -> User:
        return await self._add(User(**data))

    async def update_user(self, user_id: UUID, patch: Dict[str, Any]) -> User:
        return await self._patch(User, user_id, patch)

    async def delete_user(self, user_id: UUID) -> None:
        await self._delete(User, user_id)

    # ---------------- Certificates ----------------

    async def list_certificates(self, company_id: UUID, user_id: Optional[UUID] = None) -> List[Certificate]:
        query = select(Certificate).where(Certificate.company_id == company_id)
        if user_id is not None:
            query = query.where(Certificate.user_id == user_id)

        result = await self.db.execute(query.order_by(desc(Certificate.created_at)))
        return list(result.scalars().all())

    async def get_certificate(self, certificate_id: UUID) -> Optional[Certificate]:
        return await self.db.get(Certificate, certificate_id)

    async def create_certificate(self, data: Dict[str, Any]) -> Certificate:
        return await self._add(Certificate(**data))

    async def update_certificate(self, certificate_id: UUID, patch: Dict[str, Any]) -> Certificate:
        return await self._patch(Certificate, certificate_id, patch)

    async def delete_certificate(self, certificate_id: UUID) -> None:
        await self._delete(Certificate, certificate_id)
