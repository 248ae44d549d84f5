# app/api/v1/endpoints/database.py
"""
Endpoints administrativos para revisar la base de datos.
La instalación del esquema se hace con Alembic, no desde la API.
"""
from typing import List
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.deps import get_current_admin
from app.crud.crud_database import ping, table_row_counts
from app.db.session import get_db
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.token import AdminUser

router = APIRouter()


class TableStatus(BaseModel):
    table_name: str
    table_rows: int


class DatabaseStatus(BaseModel):
    database: str
    dialect: str
    tables: List[TableStatus]
    status: str = "connected"


@router.get("/database/test", response_model=MessageResponse)
def test_connection(
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    ping(db)
    return {"message": "Database connection is working"}


@router.get("/database/status", response_model=DataResponse[DatabaseStatus])
def database_status(
    db: Session = Depends(get_db),
    current_user: AdminUser = Depends(get_current_admin),
):
    bind = db.get_bind()
    counts = table_row_counts(db)
    return DataResponse(data=DatabaseStatus(
        database=bind.url.database or "",
        dialect=bind.dialect.name,
        tables=[TableStatus(table_name=name, table_rows=rows) for name, rows in counts],
    ))
