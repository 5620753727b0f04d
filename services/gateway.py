"""
Backend Gateway
The single point of contact with persistence. Services only ever talk to
this interface; a deployment wires exactly one implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID


class BackendGateway(ABC):
    """
    Typed async CRUD per entity.

    Records are returned as objects exposing the model columns as
    attributes. List methods are scoped by their predicates; callers never
    filter ownership after the fact.
    """

    # ---------------- Companies ----------------

    @abstractmethod
    async def get_company(self, company_id: UUID) -> Optional[Any]: ...

    @abstractmethod
    async def create_company(self, data: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update_company(self, company_id: UUID, patch: Dict[str, Any]) -> Any: ...

    # ---------------- Roles ----------------

    @abstractmethod
    async def list_roles(self, company_id: UUID) -> List[Any]: ...

    @abstractmethod
    async def get_role(self, role_id: UUID) -> Optional[Any]: ...

    @abstractmethod
    async def create_role(self, data: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update_role(self, role_id: UUID, patch: Dict[str, Any]) -> Any: ...

    # ---------------- Users ----------------

    @abstractmethod
    async def list_users(
        self,
        company_id: UUID,
        exclude_user_id: Optional[UUID] = None,
        exclude_role_ids: Iterable[UUID] = ()
    ) -> List[Any]: ...

    @abstractmethod
    async def get_user(self, user_id: UUID) -> Optional[Any]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[Any]: ...

    @abstractmethod
    async def create_user(self, data: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update_user(self, user_id: UUID, patch: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> None: ...

    # ---------------- Certificates ----------------

    @abstractmethod
    async def list_certificates(self, company_id: UUID, user_id: Optional[UUID] = None) -> List[Any]: ...

    @abstractmethod
    async def get_certificate(self, certificate_id: UUID) -> Optional[Any]: ...

    @abstractmethod
    async def create_certificate(self, data: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def update_certificate(self, certificate_id: UUID, patch: Dict[str, Any]) -> Any: ...

    @abstractmethod
    async def delete_certificate(self, certificate_id: UUID) -> None: ...
