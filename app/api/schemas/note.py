"""
Esquemas Pydantic para `notes`.

Los payloads de entrada aceptan campos ausentes: la validación de presencia la hace
el servicio para responder 400 "All fields are required" (no 422).
"""
from typing import Any, Optional
from pydantic import BaseModel


class NoteCreate(BaseModel):
    user: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None


class NoteUpdate(BaseModel):
    id: Optional[str] = None
    user: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None
    # Any: el servicio exige bool estricto, pydantic convertiría "true" -> True
    completed: Any = None


class NoteDelete(BaseModel):
    id: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    user: str
    title: str
    text: str
    completed: bool = False
    created_at: str = ""
    updated_at: str = ""


class NoteMessageOut(BaseModel):
    message: str
    note: NoteOut
