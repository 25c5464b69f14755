"""
Schémas Pydantic pour les profils et les rôles.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

VALID_ROLES = ("student", "teacher", "admin")

# Libellés hérités des premières versions de la plateforme
ROLE_ALIASES = {
    "estudiante": "student",
    "docente": "teacher",
    "administrador": "admin",
}


def normalize_role(value: str) -> str:
    """Ramène un libellé de rôle à sa valeur canonique (student, teacher, admin)."""
    key = value.strip().lower()
    role = ROLE_ALIASES.get(key, key)
    if role not in VALID_ROLES:
        raise ValueError(f"Rôle invalide. Valeurs acceptées : {', '.join(VALID_ROLES)}")
    return role


class RoleUpdate(BaseModel):
    """Corps de requête pour changer le rôle d'un utilisateur."""
    role: str

    @field_validator("role")
    @classmethod
    def valid_role(cls, v: str) -> str:
        return normalize_role(v)


class ProfileResponse(BaseModel):
    id: uuid.UUID
    email: str
    display_name: Optional[str]
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
