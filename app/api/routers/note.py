"""
Endpoints para `notes`: un único recurso con GET/POST/PATCH/DELETE.

Los ids viajan en el body (no en la ruta), como espera el cliente React.
Un body ausente o `null` equivale a `{}`: la validación de campos la hace el servicio (400).
"""
from typing import List, Optional
from fastapi import APIRouter, Body, status

from app.api.deps import NoteServiceDep
from app.api.schemas.note import NoteCreate, NoteDelete, NoteMessageOut, NoteOut, NoteUpdate


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Devuelve todas las notas (lista vacía si no hay ninguna).",
)
async def get_all_notes(service: NoteServiceDep) -> List[NoteOut]:
    items = await service.list_notes()
    return [NoteOut(**i) for i in items]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteMessageOut,
    summary="Crear nota",
    description="Crea una nota con completed=false. 409 si ya existe otra con el mismo texto.",
)
async def create_note(service: NoteServiceDep, payload: Optional[NoteCreate] = Body(None)) -> NoteMessageOut:
    payload = payload or NoteCreate()
    note = await service.create_note(payload.user, payload.title, payload.text)
    return NoteMessageOut(message="New note created", note=NoteOut(**note))


@router.patch(
    "",
    response_model=NoteMessageOut,
    summary="Actualizar nota",
    description="Reemplaza user, title, text y completed de la nota indicada por `id`.",
)
async def update_note(service: NoteServiceDep, payload: Optional[NoteUpdate] = Body(None)) -> NoteMessageOut:
    payload = payload or NoteUpdate()
    note = await service.update_note(
        payload.id, payload.user, payload.title, payload.text, payload.completed
    )
    return NoteMessageOut(message="Note updated", note=NoteOut(**note))


@router.delete(
    "",
    response_model=str,
    summary="Eliminar nota",
    description="Elimina la nota indicada por `id` y devuelve un mensaje de confirmación.",
)
async def delete_note(service: NoteServiceDep, payload: Optional[NoteDelete] = Body(None)) -> str:
    payload = payload or NoteDelete()
    return await service.delete_note(payload.id)
