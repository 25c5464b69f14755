"""
Router pour les réponses des élèves : consultation (enseignant) et soumission (élève).
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cncclass.database import get_db
from cncclass.models.profile import Profile
from cncclass.routers.auth import get_current_user
from cncclass.schemas.student_response import ResponseSubmit, StudentResponseOut, SubmissionResult
from cncclass.services import response_service

router = APIRouter(prefix="/api/v1", tags=["Réponses"])


@router.get(
    "/assignments/{assignment_id}/responses",
    response_model=List[StudentResponseOut],
    summary="Réponses à un exercice",
)
def list_assignment_responses(
    assignment_id: uuid.UUID,
    student_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
):
    responses = response_service.list_responses_for_assignment(db, assignment_id)
    return response_service.filter_responses(responses, student_id=student_id)


@router.get(
    "/classes/{class_id}/responses",
    response_model=List[StudentResponseOut],
    summary="Réponses aux exercices d'une classe",
)
def list_class_responses(
    class_id: uuid.UUID,
    assignment_id: Optional[uuid.UUID] = Query(None),
    student_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Retourne les réponses à tous les exercices de la classe, enrichies du nom
    de l'élève et du titre de l'exercice. Les filtres s'appliquent à la liste chargée.
    """
    responses = response_service.list_responses_for_class(db, class_id)
    return response_service.filter_responses(responses, assignment_id=assignment_id, student_id=student_id)


@router.post(
    "/assignments/{assignment_id}/responses",
    response_model=SubmissionResult,
    status_code=201,
    summary="Soumettre une réponse",
)
def submit_response(
    assignment_id: uuid.UUID,
    data: ResponseSubmit,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Enregistre la réponse de l'utilisateur connecté et indique si elle est correcte."""
    try:
        result = response_service.submit_response(db, assignment_id, current.id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Exercice introuvable.")
    return result
