"""
CertTrack API Client
Bearer-token REST gateway over the CertTrack HTTP surface
"""

from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID
import httpx
from loguru import logger
from pydantic.alias_generators import to_camel

from client.settings import client_settings
from services.errors import ServiceError
from utils.certificates import validate_certificate_input


class ApiError(Exception):
    """Failed API call with the message a screen should show"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _to_wire(data: Dict[str, Any]) -> Dict[str, Any]:
    """snake_case dict -> camelCase JSON body"""
    body = {}
    for key, value in data.items():
        if isinstance(value, date):
            value = value.isoformat()
        elif isinstance(value, UUID):
            value = str(value)
        body[to_camel(key)] = value
    return body


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        for key in ("message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


class CertTrackClient:
    """
    Async client for the CertTrack API

    Every request carries the current bearer token. Failures raise ApiError
    with the server's message, or the operation's fallback text when the
    server gave none or could not be reached.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = (base_url or client_settings.API_BASE_URL).rstrip("/")
        self.token = token
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout or client_settings.CLIENT_TIMEOUT_SECONDS,
        )

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        json: Optional[Dict[str, Any]] = None
    ) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}

        try:
            response = await self._http.request(method, path, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(fallback)

        if response.is_error:
            message = _error_message(response, fallback)
            logger.debug(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)

        if not response.content:
            return None
        return response.json()

    # Auth
    async def sign_in(self, email: str, password: str) -> str:
        payload = await self._request(
            "POST", "/Auth/signin", "Login failed",
            json={"email": email, "password": password}
        )
        return payload["token"]

    async def get_me(self) -> Dict[str, Any]:
        return await self._request("GET", "/Auth/me", "Failed to load profile")

    async def reset_password(self, new_password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/Auth/reset-password", "Failed to reset password",
            json={"newPassword": new_password}
        )

    async def logout(self) -> Dict[str, Any]:
        return await self._request("POST", "/Auth/logout", "Logout failed")

    # Company
    async def signup_company(
        self,
        company_name: str,
        owner_name: str,
        admin_email: str,
        admin_password: str
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/Company/signup", "Signup failed",
            json=_to_wire({
                "company_name": company_name,
                "owner_name": owner_name,
                "admin_email": admin_email,
                "admin_password": admin_password,
            })
        )

    async def get_company(self) -> Dict[str, Any]:
        return await self._request("GET", "/Company/me", "Failed to fetch company")

    # Certificates
    async def list_certificates(self, mine: bool = False) -> List[Dict[str, Any]]:
        path = "/Certification/my" if mine else "/Certification/all"
        return await self._request("GET", path, "Failed to fetch certificates")

    async def get_certificate(self, certificate_id: UUID) -> Dict[str, Any]:
        return await self._request("GET", f"/Certification/{certificate_id}", "Failed to fetch certificate")

    async def create_certificate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a certificate

        Input is validated locally first; an invalid payload never reaches
        the network.

        Args:
            data: snake_case certificate fields, optionally `user_id` for
                  admins creating on behalf of an employee

        Returns:
            Created certificate payload
        """
        try:
            body = validate_certificate_input(data)
        except ServiceError as e:
            raise ApiError(e.message, e.status_code)
        if data.get("user_id"):
            body["user_id"] = data["user_id"]
        return await self._request(
            "POST", "/Certification/create", "Failed to create certificate", json=_to_wire(body)
        )

    async def update_certificate(self, certificate_id: UUID, patch: Dict[str, Any]) -> Dict[str, Any]:
        try:
            body = validate_certificate_input(patch, partial=True)
        except ServiceError as e:
            raise ApiError(e.message, e.status_code)
        if patch.get("user_id"):
            body["user_id"] = patch["user_id"]
        return await self._request(
            "PUT", f"/Certification/{certificate_id}", "Failed to update certificate", json=_to_wire(body)
        )

    async def delete_certificate(self, certificate_id: UUID) -> Dict[str, Any]:
        return await self._request("DELETE", f"/Certification/{certificate_id}", "Failed to delete certificate")

    # Employees
    async def list_employees(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/Employee/all", "Failed to fetch employees")

    async def get_employee(self, user_id: UUID) -> Dict[str, Any]:
        return await self._request("GET", f"/Employee/{user_id}", "Failed to fetch employee")

    async def create_employee(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/Employee/create", "Failed to create employee", json=_to_wire(data))

    async def update_employee(self, user_id: UUID, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/Employee/{user_id}", "Failed to update employee", json=_to_wire(data))

    async def update_employee_role(self, user_id: UUID, role_id: UUID) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/Employee/{user_id}/role", "Failed to update role",
            json={"roleId": str(role_id)}
        )

    async def set_employee_status(self, user_id: UUID, is_active: bool) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/Employee/{user_id}/status", "Failed to update status",
            json={"isActive": is_active}
        )

    async def delete_employee(self, user_id: UUID) -> Dict[str, Any]:
        return await self._request("DELETE", f"/Employee/{user_id}", "Failed to delete employee")

    # Roles
    async def list_roles(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/Role/all", "Failed to fetch roles")

    async def create_role(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/Role/create", "Failed to create role", json=_to_wire(data))

    async def update_role(self, role_id: UUID, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/Role/{role_id}", "Failed to update role", json=_to_wire(data))

    # Analytics
    async def get_analytics_summary(self) -> Dict[str, Any]:
        return await self._request("GET", "/Analytics/summary", "Failed to fetch analytics")

    async def get_dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/Analytics/dashboard", "Failed to fetch dashboard")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CertTrackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
