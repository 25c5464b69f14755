"""
Router pour la gestion des profils et des rôles (console admin).
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cncclass.database import get_db
from cncclass.schemas.profile import ProfileResponse, RoleUpdate, normalize_role
from cncclass.services import profile_service

router = APIRouter(prefix="/api/v1/profiles", tags=["Profils"])


@router.get("", response_model=List[ProfileResponse], summary="Lister les profils")
def list_profiles(
    exclude_role: Optional[str] = Query(None, description="Rôle à exclure (ex. admin pour le sélecteur de participants)"),
    db: Session = Depends(get_db),
):
    """Retourne tous les profils, triés par email."""
    if exclude_role:
        try:
            exclude_role = normalize_role(exclude_role)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
    return profile_service.list_profiles(db, exclude_role=exclude_role)


@router.put("/{user_id}/role", response_model=List[ProfileResponse], summary="Changer le rôle d'un utilisateur")
def set_role(user_id: uuid.UUID, data: RoleUpdate, db: Session = Depends(get_db)):
    """Met à jour le rôle puis retourne la liste rechargée des profils."""
    profiles = profile_service.set_role(db, user_id, data)
    if profiles is None:
        raise HTTPException(status_code=404, detail="Utilisateur introuvable.")
    return profiles
