from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core import security
from app.core.config import settings
from app.schemas.token import AdminUser, TokenPayload

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


def get_current_user(
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    token: Optional[str] = Query(None, include_in_schema=False),
) -> AdminUser:
    """
    Dependencia para obtener el usuario actual desde el token JWT.
    Acepta el header Authorization: Bearer o el parámetro ?token=.
    """
    raw_token = bearer_token or token
    if not raw_token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No token provided",
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = security.decode_access_token(raw_token)
        token_data = TokenPayload(sub=payload.get("sub"), role=payload.get("role"))
    except JWTError:
        raise credentials_exception

    if token_data.sub is None:
        raise credentials_exception
    return AdminUser(username=token_data.sub, role=token_data.role or "user")


def get_current_admin(current_user: AdminUser = Depends(get_current_user)) -> AdminUser:
    """
    Dependencia que exige rol de administrador.
    """
    if current_user.role != "admin" or current_user.username != settings.ADMIN_USERNAME:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
