"""
Router pour le cycle de vie des exercices (console enseignant).
Création et modification en multipart pour accepter une image jointe.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from cncclass.config import settings
from cncclass.database import get_db
from cncclass.schemas.assignment import AssignmentCreate, AssignmentResponse, AssignmentUpdate, ImageUpload
from cncclass.services import assignment_service
from cncclass.services.storage_service import LocalObjectStore, StorageError, get_object_store

router = APIRouter(prefix="/api/v1", tags=["Exercices"])

_UPDATABLE_FIELDS = ("title", "problem_description", "correct_answer", "attempts")


async def _read_image(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    """Lit et valide l'image jointe. Retourne None si aucun fichier n'a été choisi."""
    if image is None or not image.filename:
        return None

    if not (image.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Format invalide. Seules les images sont acceptées.")

    content = await image.read()

    if not content:
        raise HTTPException(status_code=400, detail="Le fichier image est vide.")

    if len(content) > settings.MAX_IMAGE_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"Image trop volumineuse. Taille maximale : {settings.MAX_IMAGE_SIZE_MB} Mo."
        )

    return ImageUpload(filename=image.filename, content_type=image.content_type, data=content)


def _validation_detail(exc: ValidationError) -> str:
    return exc.errors()[0]["msg"].removeprefix("Value error, ")


@router.get(
    "/classes/{class_id}/assignments",
    response_model=List[AssignmentResponse],
    summary="Lister les exercices d'une classe",
)
def list_assignments(class_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retourne les exercices de la classe, du plus récent au plus ancien."""
    return assignment_service.list_assignments(db, class_id)


@router.post(
    "/classes/{class_id}/assignments",
    response_model=List[AssignmentResponse],
    status_code=201,
    summary="Créer un exercice",
)
async def create_assignment(
    class_id: uuid.UUID,
    title: str = Form(""),
    problem_description: str = Form(""),
    correct_answer: str = Form(""),
    attempts: int = Form(1),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_object_store),
):
    """
    Crée un exercice dans la classe et retourne la liste rechargée des exercices.

    Si une image est jointe, elle est envoyée au stockage avant l'insertion ;
    un échec d'upload annule toute la création.
    """
    try:
        data = AssignmentCreate(
            class_id=class_id,
            title=title,
            problem_description=problem_description,
            correct_answer=correct_answer,
            attempts=attempts,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=_validation_detail(e))

    upload = await _read_image(image)

    try:
        return assignment_service.create_assignment(db, storage, data, upload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=502, detail=f"Échec de l'envoi de l'image : {e}")
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/assignments/{assignment_id}", response_model=AssignmentResponse, summary="Détail d'un exercice")
def get_assignment(assignment_id: uuid.UUID, db: Session = Depends(get_db)):
    assignment = assignment_service.get_assignment(db, assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Exercice introuvable.")
    return assignment


@router.put("/assignments/{assignment_id}", response_model=AssignmentResponse, summary="Modifier un exercice")
async def update_assignment(
    assignment_id: uuid.UUID,
    request: Request,
    title: Optional[str] = Form(None),
    problem_description: Optional[str] = Form(None),
    correct_answer: Optional[str] = Form(None),
    attempts: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_object_store),
):
    """
    Met à jour les champs fournis. Sans nouvelle image, l'image actuelle est conservée.
    Un champ envoyé vide (ex: problem_description="") efface la valeur actuelle.
    """
    # FastAPI remplace un champ vide par sa valeur par défaut : on relit le formulaire brut
    form = await request.form()
    fields = {name: form[name] for name in _UPDATABLE_FIELDS if name in form}
    try:
        data = AssignmentUpdate(**fields)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=_validation_detail(e))

    upload = await _read_image(image)

    try:
        result = assignment_service.update_assignment(db, storage, assignment_id, data, upload)
    except StorageError as e:
        raise HTTPException(status_code=502, detail=f"Échec de l'envoi de l'image : {e}")
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Exercice introuvable.")
    return result


@router.delete("/assignments/{assignment_id}", status_code=204, summary="Supprimer un exercice")
def delete_assignment(
    assignment_id: uuid.UUID,
    confirm: bool = Query(False, description="Doit valoir true pour confirmer la suppression"),
    db: Session = Depends(get_db),
):
    """
    Supprime définitivement un exercice.
    Exige confirm=true ; les réponses des élèves ne sont pas supprimées.
    """
    if not confirm:
        raise HTTPException(
            status_code=400,
            detail="Suppression non confirmée. Renvoyez la requête avec confirm=true.",
        )
    if not assignment_service.delete_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="Exercice introuvable.")
