# app/main.py
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.endpoints import ads, auth, categories, database, episodes, health, streaming, videos
from app.core.config import settings
from app.core.exceptions import StreamingError
from app.core.logging_config import CONTEXT_FIELDS, setup_logging
from app.db.session import Database
from app.schemas.common import ErrorResponse
from middleware.request_logging import RequestLoggingMiddleware

logger = logging.getLogger('app')


async def streaming_error_handler(request: Request, exc: StreamingError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f'{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}',
        extra={
            **{k: v for k, v in exc.context.items() if k in CONTEXT_FIELDS and v is not None},
            "request_id": getattr(request.state, "request_id", None),
            "operation": exc.context.get("operation", request.url.path),
        },
        exc_info=exc if exc.status_code >= 500 else None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={'success': False, 'error': exc.public_message},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            'success': False,
            'error': 'Invalid request',
            'details': jsonable_encoder(exc.errors()),
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={'success': False, 'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


def create_app(db: Optional[Database] = None) -> FastAPI:
    """
    Construye la aplicación. El handle de base de datos se abre en el
    arranque y se cierra al apagar; en pruebas se puede inyectar uno propio.
    """
    database_handle = db or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db.open()
        logger.info('StreamingHanz API starting up')
        try:
            yield
        finally:
            app.state.db.close()
            logger.info('StreamingHanz API shut down')

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description='''
    ## Backend API para StreamingHanz

    **Servicios Disponibles:**
    - **Health Check**: Monitoreo de estado de servicios
    - **Authentication**: Login de administrador con JWT
    - **Videos / Episodes / Categories**: CRUD del catálogo
    - **Ads**: Anuncios, redes publicitarias y registro de vistas
    - **Streaming**: Portada, reproductor, ads-to-unlock, historial y búsqueda
    ''',
        version='1.0.0',
        openapi_url='/openapi.json',
        docs_url='/docs',
        redoc_url='/redoc',
        lifespan=lifespan,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    app.state.db = database_handle

    # Configurar CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StreamingError, streaming_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    prefix = settings.API_PREFIX
    app.include_router(health.router, prefix=prefix, tags=['Health Check'])
    app.include_router(auth.router, prefix=prefix, tags=['Authentication'])
    app.include_router(videos.router, prefix=f'{prefix}/videos', tags=['Videos'])
    app.include_router(episodes.router, prefix=f'{prefix}/episodes', tags=['Episodes'])
    app.include_router(categories.router, prefix=f'{prefix}/categories', tags=['Categories'])
    app.include_router(ads.router, prefix=f'{prefix}/ads', tags=['Advertisements'])
    app.include_router(streaming.router, prefix=f'{prefix}/streaming', tags=['Streaming'])
    app.include_router(database.router, prefix=prefix, tags=['Database'])

    @app.get('/')
    async def root():
        return {
            'message': 'Bienvenido al Backend de StreamingHanz',
            'status': 'operativo',
            'version': '1.0.0',
            'docs': '/docs',
            'health': f'{prefix}/health',
        }

    @app.get('/metrics', include_in_schema=False)
    async def prometheus_metrics():
        """Endpoint de metricas para Prometheus"""
        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    return app


# Configurar logging al inicio de la aplicacion
setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
app = create_app()

if __name__ == '__main__':
    import uvicorn
    uvicorn.run(app, host='0.0.0.0', port=8000)
