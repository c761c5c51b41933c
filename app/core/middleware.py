"""
Middlewares de aplicación: contexto por petición (request id + access log) y CORS.
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Asigna `request.state.request_id`, lo devuelve en la respuesta y loggea una línea por petición.

    Los 5xx se loggean en WARNING para que destaquen sobre el tráfico normal.
    """

    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("notes.request")

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = rid
        start = time.perf_counter()
        status = 0
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            dt_ms = int((time.perf_counter() - start) * 1000)
            level = logging.WARNING if status == 0 or status >= 500 else logging.INFO
            self.log.log(
                level,
                "request_id=%s method=%s path=%s status=%s latency_ms=%s",
                rid, request.method, request.url.path, status, dt_ms,
            )


def _cors_kwargs() -> dict:
    # Con orígenes dinámicos (cors_allow_any) no se permiten credentials
    if settings.cors_allow_any:
        return dict(allow_origin_regex=".*", allow_credentials=False, allow_methods=["*"], allow_headers=["*"])
    return dict(allow_origins=settings.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])


def add_middlewares(app: FastAPI) -> None:
    app.add_middleware(CORSMiddleware, **_cors_kwargs())
    app.add_middleware(RequestContextMiddleware)
