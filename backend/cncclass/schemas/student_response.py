"""
Schémas Pydantic pour les réponses des élèves.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ResponseSubmit(BaseModel):
    """Corps de requête pour soumettre une réponse à un exercice."""
    response: str

    @field_validator("response")
    @classmethod
    def response_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("La réponse ne peut pas être vide.")
        return v


class StudentResponseOut(BaseModel):
    """Réponse enrichie pour l'affichage côté enseignant."""
    id: uuid.UUID
    assignment_id: uuid.UUID
    student_id: uuid.UUID
    response: str
    is_correct: bool
    created_at: Optional[datetime] = None
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    assignment_title: Optional[str] = None

    model_config = {"from_attributes": True}


class SubmissionResult(BaseModel):
    """Résultat d'une soumission côté élève."""
    id: uuid.UUID
    assignment_id: uuid.UUID
    is_correct: bool
    attempts_left: int
    created_at: Optional[datetime] = None
