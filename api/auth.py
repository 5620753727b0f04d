"""
Authentication API
Sign-in, current profile, password reset and shared auth dependencies
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import EmailStr
from typing import Optional
from loguru import logger

from api.schemas import ApiModel, MessageResponse, UserResponse, profile_response
from models.database import get_db
from security.permissions import Permission
from security.rate_limit import check_rate_limit
from security.session import SessionContext
from security.tokens import InvalidTokenError, decode_access_token
from services.auth_service import AuthService
from services.errors import AuthenticationError
from services.sql_gateway import SqlGateway

router = APIRouter()
security = HTTPBearer(auto_error=False)

# Pydantic models
class SignInRequest(ApiModel):
    email: EmailStr
    password: str

class TokenResponse(ApiModel):
    token: str
    token_type: str = "bearer"

class ResetPasswordRequest(ApiModel):
    new_password: str

# Dependencies
async def get_gateway(db: AsyncSession = Depends(get_db)) -> SqlGateway:
    """Gateway bound to the request's database session"""
    return SqlGateway(db)

async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gateway: SqlGateway = Depends(get_gateway)
) -> SessionContext:
    """Dependency to resolve the bearer token into a SessionContext"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        user_id = decode_access_token(credentials.credentials)
        return await AuthService(gateway).resolve_session(user_id)
    except (InvalidTokenError, AuthenticationError) as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"}
        )

async def require_admin(session: SessionContext = Depends(get_current_session)) -> SessionContext:
    """Dependency to require the admin policy (manage-users)"""
    if not session.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return session

def require_permission(permission: Permission):
    """Create a dependency requiring one permission"""
    async def _check(session: SessionContext = Depends(get_current_session)) -> SessionContext:
        if not session.has_permission(permission):
            raise HTTPException(status_code=403, detail=f"Permission '{permission.value}' required")
        return session
    return _check

# Routes
@router.post("/signin", response_model=TokenResponse, dependencies=[Depends(check_rate_limit)])
async def signin(credentials: SignInRequest, gateway: SqlGateway = Depends(get_gateway)):
    """User login"""
    token = await AuthService(gateway).sign_in(credentials.email, credentials.password)
    return TokenResponse(token=token)

@router.get("/me", response_model=UserResponse)
async def get_me(session: SessionContext = Depends(get_current_session)):
    """Get current user profile with role, permissions and company"""
    return profile_response(session)

@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    session: SessionContext = Depends(get_current_session),
    gateway: SqlGateway = Depends(get_gateway)
):
    """Change the caller's password"""
    await AuthService(gateway).reset_password(session, request.new_password)
    return MessageResponse(message="Password updated successfully")

@router.post("/logout", response_model=MessageResponse)
async def logout(session: SessionContext = Depends(get_current_session)):
    """Logout (client should discard token)"""
    logger.info(f"User logged out: {session.email}")
    return MessageResponse(message="Logged out successfully")
