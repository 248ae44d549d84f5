# MIDDLEWARE DE LOGGING DE PETICIONES
# Registra cada peticion con request id, latencia y metricas Prometheus

import time
import json
import uuid
import logging
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_client import Counter, Histogram

from app.core.logging_config import log_api_request

logger = logging.getLogger('app.api.requests')

HTTP_REQUESTS_TOTAL = Counter(
    'streaming_http_requests_total',
    'Peticiones HTTP atendidas',
    ['method', 'path', 'status_code'],
)
HTTP_REQUEST_DURATION = Histogram(
    'streaming_http_request_duration_seconds',
    'Latencia de las peticiones HTTP',
    ['method', 'path'],
)


def generate_request_id() -> str:
    return f'req_{uuid.uuid4().hex[:12]}'


def _route_path(request: Request) -> str:
    # Se usa la plantilla de la ruta para no disparar la cardinalidad de labels
    route = request.scope.get('route')
    return getattr(route, 'path', None) or 'unmatched'


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get('X-Request-ID') or generate_request_id()
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f'Unhandled error on {request.method} {request.url.path}',
                extra={'request_id': request_id},
            )
            response = Response(
                content=json.dumps({'success': False, 'error': 'Internal server error', 'request_id': request_id}),
                status_code=500,
                media_type='application/json'
            )

        elapsed = time.perf_counter() - start_time
        path = _route_path(request)
        HTTP_REQUESTS_TOTAL.labels(method=request.method, path=path, status_code=response.status_code).inc()
        HTTP_REQUEST_DURATION.labels(method=request.method, path=path).observe(elapsed)

        log_api_request(
            logger,
            request.method,
            request.url.path,
            status_code=response.status_code,
            response_time_ms=int(elapsed * 1000),
            request_id=request_id,
        )

        response.headers['X-Request-ID'] = request_id
        return response
