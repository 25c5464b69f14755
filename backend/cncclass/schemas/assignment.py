"""
Schémas Pydantic pour les exercices d'une classe.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class AssignmentCreate(BaseModel):
    """Champs d'un exercice en cours de création (brouillon du formulaire)."""
    class_id: uuid.UUID
    title: str
    problem_description: str = ""
    correct_answer: str = ""
    attempts: int = 1

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre de l'exercice ne peut pas être vide.")
        return v.strip()

    @field_validator("attempts")
    @classmethod
    def attempts_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Le nombre de tentatives doit être au moins 1.")
        return v


class AssignmentUpdate(BaseModel):
    """Champs modifiables d'un exercice. Les champs absents ne sont pas modifiés."""
    title: Optional[str] = None
    problem_description: Optional[str] = None
    correct_answer: Optional[str] = None
    attempts: Optional[int] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le titre de l'exercice ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("attempts")
    @classmethod
    def attempts_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Le nombre de tentatives doit être au moins 1.")
        return v


class AssignmentResponse(BaseModel):
    id: uuid.UUID
    class_id: uuid.UUID
    title: str
    problem_description: str
    correct_answer: str
    attempts: int
    image_url: Optional[str]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ImageUpload(BaseModel):
    """Image jointe à un exercice, déjà lue depuis la requête multipart."""
    filename: str
    content_type: str
    data: bytes
