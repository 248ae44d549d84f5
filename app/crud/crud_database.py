from typing import List, Tuple
from sqlalchemy import func, inspect, select, table, text
from sqlalchemy.orm import Session

from decorators.store_logging import store_operation


@store_operation("ping")
def ping(db: Session) -> None:
    db.execute(text("SELECT 1"))


@store_operation("table_row_counts")
def table_row_counts(db: Session) -> List[Tuple[str, int]]:
    """
    Nombre y número de filas de cada tabla del esquema actual.
    """
    names = sorted(inspect(db.get_bind()).get_table_names())
    return [
        (name, db.execute(select(func.count()).select_from(table(name))).scalar() or 0)
        for name in names
    ]
