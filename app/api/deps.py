"""
Dependencias reutilizables para routers (FastAPI Depends).

Los servicios se construyen una vez en el startup y viven en `app.state`;
los tests los reemplazan con `app.dependency_overrides`.
"""
from typing import Annotated
from fastapi import Depends, Request

from app.services.note_service import NoteService


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]
