"""
Service Errors
Failure taxonomy shared by services, API handlers and the client SDK
"""


class ServiceError(Exception):
    """Base class; carries an HTTP status and a user-facing message"""

    status_code = 500
    code = "service_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(ServiceError):
    """Input rejected before any backend call"""
    status_code = 400
    code = "validation_error"


class AuthenticationError(ServiceError):
    """No trustworthy identity"""
    status_code = 401
    code = "authentication_error"


class AuthorizationError(ServiceError):
    """Caller lacks the permission or ownership the action needs"""
    status_code = 403
    code = "authorization_error"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"
