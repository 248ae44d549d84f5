from typing import Any, Dict, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidRequest

ModelT = TypeVar("ModelT")


def collect_updates(update: BaseModel) -> Dict[str, Any]:
    """
    Devuelve solo los campos presentes en el schema de actualización.
    Si no hay ninguno se rechaza la petición.
    """
    update_data = update.model_dump(exclude_unset=True)
    if not update_data:
        raise InvalidRequest("No fields to update")
    return update_data


def apply_update(db: Session, db_obj: ModelT, update: BaseModel) -> ModelT:
    """
    Aplica un update parcial sobre un objeto persistido.
    """
    for field, value in collect_updates(update).items():
        setattr(db_obj, field, value)

    db.add(db_obj)
    db.commit()
    db.refresh(db_obj)
    return db_obj
