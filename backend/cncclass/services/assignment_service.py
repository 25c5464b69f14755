"""
Service métier pour le cycle de vie des exercices (console enseignant).

Création et modification se font en deux temps : l'image éventuelle est
d'abord envoyée au stockage objet, puis la ligne est écrite. Si l'écriture
échoue, l'image déjà envoyée est supprimée (compensation).
"""

import uuid
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cncclass.config import settings
from cncclass.models.assignment import Assignment
from cncclass.models.school_class import SchoolClass
from cncclass.schemas.assignment import AssignmentCreate, AssignmentUpdate, ImageUpload
from cncclass.services.storage_service import LocalObjectStore, StorageError, generate_object_key

logger = logging.getLogger(__name__)


def create_assignment(
    db: Session,
    storage: LocalObjectStore,
    data: AssignmentCreate,
    image: Optional[ImageUpload] = None,
) -> List[Assignment]:
    """
    Crée un exercice dans une classe puis recharge les exercices de cette classe.

    Étapes :
    1. La classe doit exister (erreur lisible, pas d'erreur de stockage)
    2. Upload de l'image éventuelle et résolution de son URL publique
    3. Insertion de la ligne ; en cas d'échec, l'image envoyée est supprimée
    """
    if db.get(SchoolClass, data.class_id) is None:
        raise LookupError("Classe introuvable. Sélectionnez une classe avant de créer un exercice.")

    # Lève StorageError : la création est abandonnée avant toute écriture en BDD
    image_key = _upload_image(storage, image) if image else None

    assignment = Assignment(
        class_id=data.class_id,
        title=data.title,
        problem_description=data.problem_description,
        correct_answer=data.correct_answer,
        attempts=data.attempts,
        image_url=_public_url(storage, image_key),
    )
    db.add(assignment)
    _commit_or_compensate(db, storage, image_key)
    db.refresh(assignment)

    logger.info("Exercice '%s' (%s) créé dans la classe %s", assignment.title, assignment.id, data.class_id)
    return list_assignments(db, data.class_id)


def update_assignment(
    db: Session,
    storage: LocalObjectStore,
    assignment_id: uuid.UUID,
    data: AssignmentUpdate,
    image: Optional[ImageUpload] = None,
) -> Optional[Assignment]:
    """
    Met à jour les champs fournis d'un exercice.
    Sans nouvelle image, image_url est conservée telle quelle.
    Retourne None si l'exercice est introuvable.
    """
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        return None

    image_key = _upload_image(storage, image) if image else None

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(assignment, field, value)
    if image_key:
        assignment.image_url = _public_url(storage, image_key)

    _commit_or_compensate(db, storage, image_key)
    db.refresh(assignment)

    logger.info("Exercice %s mis à jour (%s)", assignment_id, ", ".join(update_data) or "image")
    return assignment


def delete_assignment(db: Session, assignment_id: uuid.UUID) -> bool:
    """
    Supprime définitivement un exercice.
    Les réponses des élèves ne sont pas supprimées.
    Retourne True si supprimé, False si introuvable.
    """
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        return False

    db.delete(assignment)
    db.commit()
    logger.info("Exercice %s supprimé", assignment_id)
    return True


def get_assignment(db: Session, assignment_id: uuid.UUID) -> Optional[Assignment]:
    return db.get(Assignment, assignment_id)


def list_assignments(db: Session, class_id: uuid.UUID) -> List[Assignment]:
    """Retourne les exercices d'une classe, du plus récent au plus ancien."""
    return list(db.execute(
        select(Assignment)
        .where(Assignment.class_id == class_id)
        .order_by(Assignment.created_at.desc())
    ).scalars().all())


def _upload_image(storage: LocalObjectStore, image: ImageUpload) -> str:
    """Envoie l'image dans le bucket des exercices et retourne sa clé."""
    key = generate_object_key(image.filename)
    storage.upload(settings.ASSIGNMENT_IMAGES_BUCKET, key, image.data)
    return key


def _public_url(storage: LocalObjectStore, key: Optional[str]) -> Optional[str]:
    if key is None:
        return None
    return storage.get_public_url(settings.ASSIGNMENT_IMAGES_BUCKET, key)


def _commit_or_compensate(db: Session, storage: LocalObjectStore, image_key: Optional[str]) -> None:
    """
    Valide la transaction. En cas d'échec, annule et supprime l'image qui vient
    d'être envoyée pour ne pas laisser d'objet orphelin.
    """
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        if image_key:
            try:
                storage.remove(settings.ASSIGNMENT_IMAGES_BUCKET, image_key)
                logger.warning("Image %s supprimée après échec de l'enregistrement", image_key)
            except StorageError as cleanup_exc:
                # La purge planifiée récupérera l'objet
                logger.error("Image %s non supprimée : %s", image_key, cleanup_exc)
        raise ValueError(f"Enregistrement de l'exercice impossible : {getattr(exc, 'orig', None) or exc}")
