# DECORADOR PARA OPERACIONES CONTRA LA BASE DE DATOS
# Cada función del store queda cronometrada, registrada y con errores traducidos

import time
import functools
import inspect
import logging
from typing import Any, Callable, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from prometheus_client import Counter

from app.core.exceptions import InvalidReference, StoreUnavailable
from app.core.logging_config import log_store_operation

logger = logging.getLogger("app.store")

STORE_FAILURES_TOTAL = Counter(
    "streaming_store_failures_total",
    "Operaciones de base de datos fallidas",
    ["operation", "error_type"],
)


def _call_arguments(func: Callable, args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Mapea argumentos posicionales y con nombre a sus parámetros"""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return dict(kwargs)
    return dict(bound.arguments)


def store_operation(operation: str) -> Callable:
    """
    Decorador para funciones del store (app/crud).

    El primer argumento de la función debe ser la Session. Ante un error de
    SQLAlchemy se hace rollback y se traduce:
      - IntegrityError -> InvalidReference
      - cualquier otro SQLAlchemyError -> StoreUnavailable

    Usage:
        @store_operation("count_ad_views")
        def count_ad_views(db: Session, user_identifier: str, ...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(db: Session, *args, **kwargs):
            start_time = time.time()
            params = _call_arguments(func, (db,) + args, kwargs)
            try:
                result = func(db, *args, **kwargs)
            except IntegrityError as e:
                db.rollback()
                STORE_FAILURES_TOTAL.labels(operation=operation, error_type="integrity").inc()
                log_store_operation(
                    logger, operation, success=False, error=e,
                    response_time_ms=int((time.time() - start_time) * 1000), **params
                )
                raise InvalidReference(operation=operation) from e
            except SQLAlchemyError as e:
                db.rollback()
                STORE_FAILURES_TOTAL.labels(operation=operation, error_type="unavailable").inc()
                log_store_operation(
                    logger, operation, success=False, error=e,
                    response_time_ms=int((time.time() - start_time) * 1000), **params
                )
                raise StoreUnavailable(operation=operation) from e

            log_store_operation(
                logger, operation, success=True,
                response_time_ms=int((time.time() - start_time) * 1000), **params
            )
            return result

        return wrapper

    return decorator
