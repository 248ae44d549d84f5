# app/api/v1/endpoints/health.py
from datetime import datetime, timezone
import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()
logger = logging.getLogger("app.api.health")


@router.get("/health", summary="Verifica el estado del servicio")
def check_health(request: Request):
    """
    Endpoint de Health Check.
    Verifica que la API está activa y la conexión a base de datos.
    """
    health_status = {
        "status": "ok",
        "message": "StreamingHanz API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "database": {"status": "unknown"},
        }
    }

    try:
        request.app.state.db.ping()
        health_status["services"]["database"] = {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {type(e).__name__}")
        health_status["services"]["database"] = {"status": "unhealthy"}
        health_status["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status
