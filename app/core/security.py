from datetime import datetime, timedelta, timezone
import secrets
from typing import Any, Dict, Optional, Union
import bcrypt

from jose import jwt

from app.core.config import settings


def create_access_token(
    subject: Union[str, Any], expires_delta: timedelta = None, role: str = "admin"
) -> str:
    """
    Crea un token de acceso JWT.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode = {"exp": expire, "sub": str(subject), "role": role}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un token. Lanza JWTError si es inválido o expiró.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def is_bcrypt_hash(value: str) -> bool:
    return value.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica una contraseña contra su hash usando bcrypt directamente.
    Trunca la contraseña a 72 bytes (límite de bcrypt).
    """
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8')

    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """
    Genera el hash de una contraseña usando bcrypt directamente.
    Trunca la contraseña a 72 bytes (límite de bcrypt).
    """
    password_bytes = password.encode('utf-8')[:72]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def authenticate_admin(username: str, password: str) -> Optional[str]:
    """
    Valida las credenciales contra ADMIN_USERNAME / ADMIN_PASSWORD.
    ADMIN_PASSWORD puede ser un hash bcrypt o texto plano (comparación en tiempo constante).
    Devuelve el username si son válidas.
    """
    if not secrets.compare_digest(username.encode('utf-8'), settings.ADMIN_USERNAME.encode('utf-8')):
        return None

    configured = settings.ADMIN_PASSWORD
    if is_bcrypt_hash(configured):
        valid = verify_password(password, configured)
    else:
        valid = secrets.compare_digest(password.encode('utf-8'), configured.encode('utf-8'))

    return username if valid else None
