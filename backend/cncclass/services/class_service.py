"""
Service métier pour la gestion des classes et de leurs participants
(consoles admin et enseignant).
"""

import uuid
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cncclass.models.profile import Profile
from cncclass.models.school_class import ClassParticipant, SchoolClass
from cncclass.schemas.school_class import ClassCreate, ParticipantAdd

logger = logging.getLogger(__name__)


def create_class(
    db: Session,
    data: ClassCreate,
    teacher_id: Optional[uuid.UUID] = None,
) -> SchoolClass:
    """
    Crée une nouvelle classe.
    `teacher_id` renseigne le propriétaire (console enseignant) ; None depuis la console admin.
    """
    school_class = SchoolClass(name=data.name, created_by=teacher_id)
    db.add(school_class)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValueError(f"Impossible de créer la classe '{data.name}' : {exc.orig}")
    db.refresh(school_class)

    logger.info("Classe '%s' créée (%s) par %s", school_class.name, school_class.id, teacher_id or "admin")
    return school_class


def list_classes(db: Session) -> List[SchoolClass]:
    """Retourne toutes les classes, triées par nom."""
    return list(db.execute(
        select(SchoolClass).order_by(SchoolClass.name)
    ).scalars().all())


def list_own_classes(db: Session, teacher_id: uuid.UUID) -> List[SchoolClass]:
    """Retourne les classes créées par un enseignant, triées par nom."""
    return list(db.execute(
        select(SchoolClass)
        .where(SchoolClass.created_by == teacher_id)
        .order_by(SchoolClass.name)
    ).scalars().all())


def get_class(db: Session, class_id: uuid.UUID) -> Optional[SchoolClass]:
    """Retourne une classe par son ID, ou None si inexistante."""
    return db.get(SchoolClass, class_id)


def add_participant(db: Session, class_id: uuid.UUID, data: ParticipantAdd) -> List[Profile]:
    """
    Ajoute un utilisateur à une classe puis recharge la liste des participants.
    Aucune vérification de doublon : un second ajout crée une seconde ligne.
    """
    if db.get(SchoolClass, class_id) is None:
        raise LookupError("Classe introuvable.")
    if db.get(Profile, data.user_id) is None:
        raise LookupError("Utilisateur introuvable.")

    db.add(ClassParticipant(class_id=class_id, user_id=data.user_id))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ValueError(f"Impossible d'ajouter le participant : {exc.orig}")

    logger.info("Utilisateur %s ajouté à la classe %s", data.user_id, class_id)
    return list_participants(db, class_id)


def list_participants(db: Session, class_id: uuid.UUID) -> List[Profile]:
    """Retourne les profils inscrits à une classe (jointure participants → profils)."""
    return list(db.execute(
        select(Profile)
        .join(ClassParticipant, ClassParticipant.user_id == Profile.id)
        .where(ClassParticipant.class_id == class_id)
        .order_by(ClassParticipant.created_at)
    ).scalars().all())
