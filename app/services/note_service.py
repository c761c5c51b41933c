"""
Service layer for notes: validación de campos, unicidad por texto y mapeo de errores.

Los mensajes de error son parte del contrato HTTP (el cliente React los muestra tal cual).
"""
import logging
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError, WriteError
from app.repositories.note_repo import NoteRepository

_log = logging.getLogger("notes.service")

ALL_FIELDS_REQUIRED = "All fields are required"


def _missing(*values: Optional[str]) -> bool:
    # Cadena vacía cuenta como ausente
    return any(not v for v in values)


class NoteService:
    def __init__(self, repo: NoteRepository) -> None:
        self.repo = repo

    async def list_notes(self) -> List[Dict[str, Any]]:
        """Lista todas las notas. Una colección vacía devuelve []."""
        try:
            return await self.repo.list_notes()
        except PyMongoError as e:
            _log.warning("list_notes falló: %s", e)
            raise NotFoundError("No notes found") from e

    async def create_note(self, user: Optional[str], title: Optional[str], text: Optional[str]) -> Dict[str, Any]:
        if _missing(user, title, text):
            raise ValidationError(ALL_FIELDS_REQUIRED)

        if await self.repo.find_by_text(text):
            raise ConflictError("Duplicate text content")

        try:
            note = await self.repo.insert_note(user, title, text)
        except DuplicateKeyError as e:
            # Otra petición insertó el mismo texto entre el check y el insert
            raise ConflictError("Duplicate text content") from e
        if not note:
            raise WriteError("Problem creating note")
        _log.info("Nota creada id=%s user=%s", note["id"], user)
        return note

    async def update_note(
        self,
        note_id: Optional[str],
        user: Optional[str],
        title: Optional[str],
        text: Optional[str],
        completed: Any,
    ) -> Dict[str, Any]:
        """Reemplazo completo de user/title/text/completed (aunque el verbo sea PATCH)."""
        # bool estricto: 0/1 o "true" no valen
        if _missing(note_id, user, title, text) or not isinstance(completed, bool):
            raise ValidationError(ALL_FIELDS_REQUIRED)

        if not await self.repo.find_by_id(note_id):
            raise NotFoundError("Note not found")

        duplicate = await self.repo.find_by_text(text)
        # Se permite que la nota conserve su propio texto
        if duplicate and duplicate["id"] != note_id:
            raise ConflictError("Duplicate note")

        try:
            note = await self.repo.replace_note(
                note_id, user=user, title=title, text=text, completed=completed
            )
        except DuplicateKeyError as e:
            raise ConflictError("Duplicate note") from e
        if not note:
            # Borrada entre el find y el update
            raise NotFoundError("Note not found")
        _log.info("Nota actualizada id=%s", note_id)
        return note

    async def delete_note(self, note_id: Optional[str]) -> str:
        if not note_id:
            raise ValidationError("Note ID Required")

        note = await self.repo.find_by_id(note_id)
        if not note:
            raise NotFoundError("Note not found")

        if not await self.repo.delete_note(note_id):
            raise NotFoundError("Note not found")
        _log.info("Nota eliminada id=%s", note_id)
        return f"Note {note['title']} with ID {note['id']} deleted"
