from typing import Optional
from pydantic import BaseModel


class AdminUser(BaseModel):
    id: int = 1
    username: str
    role: str = "admin"


class Token(BaseModel):
    """
    Schema para el token de acceso devuelto por la API.
    """
    success: bool = True
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: AdminUser


class TokenPayload(BaseModel):
    """
    Schema para el payload del token JWT.
    """
    sub: Optional[str] = None
    role: Optional[str] = None


class UserLogin(BaseModel):
    """
    Schema para el login del administrador.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class VerifyResponse(BaseModel):
    success: bool = True
    user: AdminUser
