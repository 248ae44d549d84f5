# app/core/exceptions.py
"""
Excepciones de dominio del backend de streaming.

Cada excepción conoce su código HTTP; los handlers registrados en
app.main las convierten en respuestas {"success": false, "error": ...}.
"""
from typing import Any, Dict, Optional


class StreamingError(Exception):
    """Error base de la aplicación."""
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.message = message or self.default_message
        self.context: Dict[str, Any] = context
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        return self.message


class InvalidRequest(StreamingError):
    status_code = 400
    default_message = "Invalid request"


class InvalidReference(StreamingError):
    """Una referencia (ad_id, video_id, ...) viola una llave foránea."""
    status_code = 400
    default_message = "Referenced record does not exist"


class NotFound(StreamingError):
    status_code = 404
    default_message = "Not found"


class StoreUnavailable(StreamingError):
    """Falla de transporte o de base de datos. Nunca expone el detalle al cliente."""
    status_code = 500
    default_message = "Internal server error"

    @property
    def public_message(self) -> str:
        return self.default_message
