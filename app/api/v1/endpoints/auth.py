# app/api/v1/endpoints/auth.py
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status

from app.core import security
from app.core.config import settings
from app.core.deps import get_current_user
from app.core.exceptions import InvalidRequest
from app.core.logging_config import get_api_logger
from app.schemas.common import MessageResponse
from app.schemas.token import AdminUser, Token, UserLogin, VerifyResponse

router = APIRouter()
logger = get_api_logger()


@router.post("/auth/login", response_model=Token, summary="Login del administrador")
def login_for_access_token(credentials: UserLogin):
    if not credentials.username or not credentials.password:
        raise InvalidRequest("Username and password required")

    username = security.authenticate_admin(credentials.username, credentials.password)
    if not username:
        logger.warning(f"Failed admin login attempt for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = security.create_access_token(
        subject=username, expires_delta=access_token_expires, role="admin"
    )
    return Token(token=access_token, user=AdminUser(username=username))


@router.get("/auth/verify", response_model=VerifyResponse, summary="Verificar token")
def verify_token(current_user: AdminUser = Depends(get_current_user)):
    return VerifyResponse(user=current_user)


@router.post("/auth/logout", response_model=MessageResponse, summary="Logout (el cliente descarta el token)")
def logout(current_user: AdminUser = Depends(get_current_user)):
    return {"message": "Logout successful"}
