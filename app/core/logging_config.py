import logging
import logging.config
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path


# Atributos de contexto que se copian al JSON cuando existen en el record
CONTEXT_FIELDS = (
    "service",
    "operation",
    "endpoint",
    "method",
    "status_code",
    "response_time_ms",
    "request_id",
    "user_identifier",
    "video_id",
    "episode_id",
    "ad_id",
    "error_code",
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter que genera logs en formato JSON estructurado
    para facilitar la integración con sistemas de monitoreo
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    """
    Configura el sistema de logging con rotación y formato estructurado
    para integración con sistemas de monitoreo
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": StructuredFormatter,
            },
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": level,
                "stream": "ext://sys.stdout"
            },
            "file_all": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "structured",
                "filename": str(log_path / "app.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 10,
                "level": level
            },
            "file_errors": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "structured",
                "filename": str(log_path / "errors.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 10,
                "level": "ERROR"
            },
            "file_access": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "structured",
                "filename": str(log_path / "access.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "level": level
            },
            "file_api": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "structured",
                "filename": str(log_path / "api.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 10,
                "level": level
            }
        },
        "loggers": {
            "app": {
                "level": level,
                "handlers": ["console", "file_all", "file_errors"],
                "propagate": False
            },
            "app.services.access_gate": {
                "level": level,
                "handlers": ["console", "file_access", "file_errors"],
                "propagate": False
            },
            "app.api": {
                "level": level,
                "handlers": ["console", "file_api", "file_errors"],
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console", "file_api"],
                "propagate": False
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["file_api"],
                "propagate": False
            },
            "fastapi": {
                "level": "INFO",
                "handlers": ["console", "file_api"],
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console", "file_all"]
        }
    }

    logging.config.dictConfig(logging_config)

    logger = logging.getLogger("app")
    logger.info("Logging system initialized successfully")
    logger.info(f"Log files will be stored in: {log_path.absolute()}")


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter personalizado para agregar contexto adicional a los logs
    """

    def __init__(self, logger: logging.Logger, extra: Dict[str, Any] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        if self.extra:
            kwargs.setdefault('extra', {}).update(self.extra)

        return msg, kwargs


def get_access_logger() -> LoggerAdapter:
    """
    Obtiene un logger específico para las decisiones de acceso (ads-to-unlock)
    """
    base_logger = logging.getLogger("app.services.access_gate")
    return LoggerAdapter(base_logger, {"service": "access_gate"})


def get_api_logger() -> LoggerAdapter:
    """
    Obtiene un logger específico para operaciones de API
    """
    base_logger = logging.getLogger("app.api")
    return LoggerAdapter(base_logger, {"service": "api"})


def log_api_request(logger: logging.Logger, method: str, endpoint: str,
                    status_code: int = None, response_time_ms: int = None,
                    request_id: str = None, **kwargs):
    """
    Registra información de una petición API con contexto estructurado

    Args:
        logger: Logger a usar
        method: Método HTTP
        endpoint: Endpoint accedido
        status_code: Código de respuesta HTTP
        response_time_ms: Tiempo de respuesta en millisegundos
        request_id: Identificador de la petición
        **kwargs: Información adicional
    """
    extra = {
        "method": method,
        "endpoint": endpoint,
        "service": "api"
    }

    if status_code:
        extra["status_code"] = status_code
    if response_time_ms is not None:
        extra["response_time_ms"] = response_time_ms
    if request_id:
        extra["request_id"] = request_id

    extra.update(kwargs)

    if status_code and status_code >= 500:
        logger.error(f"API request failed: {method} {endpoint}", extra=extra)
    elif status_code and status_code >= 400:
        logger.warning(f"API request rejected: {method} {endpoint}", extra=extra)
    else:
        logger.info(f"API request: {method} {endpoint}", extra=extra)


def log_store_operation(logger: logging.Logger, operation: str,
                        success: bool = True, response_time_ms: Optional[int] = None,
                        error: Optional[BaseException] = None, **kwargs):
    """
    Registra información de una operación contra la base de datos

    Args:
        logger: Logger a usar
        operation: Nombre de la operación (ej. "count_ad_views")
        success: Si la operación fue exitosa
        response_time_ms: Tiempo de respuesta
        error: Excepción original si la operación falló
        **kwargs: Identificadores relevantes (user_identifier, video_id, ...)
    """
    extra = {
        "operation": operation,
        "service": "store",
    }

    if response_time_ms is not None:
        extra["response_time_ms"] = response_time_ms
    if error is not None:
        extra["error_code"] = type(error).__name__

    # Solo identificadores conocidos; nunca sesiones ni modelos
    extra.update({
        key: value for key, value in kwargs.items()
        if key in CONTEXT_FIELDS and isinstance(value, (str, int, float, bool))
    })

    if success:
        logger.debug(f"Store operation successful: {operation}", extra=extra)
    else:
        logger.error(f"Store operation failed: {operation}", extra=extra)
