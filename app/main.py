"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from app.core.config import settings
from app.infrastructure.db.mongo_async import get_async_db, ping, close_async_client
from app.infrastructure.db.bootstrap import ensure_collections
from app.api.router import api_router
from app.api.routers import frontend
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers
from app.repositories.note_repo import COLLECTION as NOTE_COLL, NoteRepository
from app.services.note_service import NoteService
import logging

_log = logging.getLogger("notes.startup")

setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = get_async_db()
    # Garantiza colección/validador/índices si hay conexión
    if await ping():
        await ensure_collections(db)
    else:
        _log.warning("Mongo no listo; omitiendo ensure_collections()")
    app.state.note_service = NoteService(NoteRepository(db[NOTE_COLL]))
    _log.info("Servicios listos (prefix=%r)", settings.api_prefix_normalized)
    yield
    close_async_client()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

add_middlewares(app)
register_exception_handlers(app)

# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)

# Shell del SPA; los assets del build de React viven en <dist>/static
if settings.frontend_dist and (Path(settings.frontend_dist) / "static").is_dir():
    app.mount("/static", StaticFiles(directory=str(Path(settings.frontend_dist) / "static")), name="static")
app.include_router(frontend.router)
