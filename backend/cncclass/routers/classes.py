"""
Router pour la gestion des classes et de leurs participants.
Console admin : toutes les classes. Console enseignant : /mine, classes du porteur du jeton.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cncclass.database import get_db
from cncclass.models.profile import Profile
from cncclass.routers.auth import get_current_user
from cncclass.schemas.profile import ProfileResponse
from cncclass.schemas.school_class import ClassCreate, ClassResponse, ParticipantAdd
from cncclass.services import class_service

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"])


@router.post("", response_model=ClassResponse, status_code=201, summary="Créer une classe")
def create_class(data: ClassCreate, db: Session = Depends(get_db)):
    """Crée une classe sans propriétaire (console admin)."""
    try:
        return class_service.create_class(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=List[ClassResponse], summary="Lister les classes")
def list_classes(db: Session = Depends(get_db)):
    return class_service.list_classes(db)


# --- Console enseignant (déclarées avant /{class_id}) ---

@router.get("/mine", response_model=List[ClassResponse], summary="Lister mes classes")
def list_own_classes(current: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    """Retourne les classes créées par l'utilisateur connecté."""
    return class_service.list_own_classes(db, current.id)


@router.post("/mine", response_model=ClassResponse, status_code=201, summary="Créer une de mes classes")
def create_own_class(
    data: ClassCreate,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Crée une classe dont l'utilisateur connecté est propriétaire."""
    try:
        return class_service.create_class(db, data, teacher_id=current.id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{class_id}", response_model=ClassResponse, summary="Détail d'une classe")
def get_class(class_id: uuid.UUID, db: Session = Depends(get_db)):
    school_class = class_service.get_class(db, class_id)
    if school_class is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return school_class


# --- Gestion des participants ---

@router.get("/{class_id}/participants", response_model=List[ProfileResponse], summary="Lister les participants")
def list_participants(class_id: uuid.UUID, db: Session = Depends(get_db)):
    return class_service.list_participants(db, class_id)


@router.post(
    "/{class_id}/participants",
    response_model=List[ProfileResponse],
    status_code=201,
    summary="Ajouter un participant",
)
def add_participant(class_id: uuid.UUID, data: ParticipantAdd, db: Session = Depends(get_db)):
    """Ajoute un utilisateur à la classe et retourne la liste rechargée des participants."""
    try:
        return class_service.add_participant(db, class_id, data)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
