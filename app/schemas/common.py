from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

DataT = TypeVar("DataT")


def reject_null(value):
    """
    En un update parcial un campo puede omitirse, pero no enviarse como null
    si la columna no admite NULL.
    """
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class MessageResponse(BaseModel):
    """
    Respuesta simple con mensaje de confirmación.
    """
    success: bool = True
    message: str


class CreatedId(BaseModel):
    id: int


class CreatedResponse(MessageResponse):
    data: CreatedId


class DataResponse(BaseModel, Generic[DataT]):
    """
    Envoltura estándar {"success": true, "data": ...}.
    """
    success: bool = True
    data: DataT


class Pagination(BaseModel):
    current_page: int
    per_page: int
    total: int
    total_pages: int


class PaginatedResponse(DataResponse[DataT], Generic[DataT]):
    pagination: Pagination


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[list] = None
