"""
Schémas Pydantic pour les classes et leurs participants.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ClassCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom de la classe ne peut pas être vide.")
        return v.strip()


class ClassResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_by: Optional[uuid.UUID]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ParticipantAdd(BaseModel):
    """Corps de requête pour ajouter un utilisateur à une classe."""
    user_id: uuid.UUID
