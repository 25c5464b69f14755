"""
Service métier pour les réponses des élèves : consultation côté enseignant
et soumission côté élève.
"""

import re
import uuid
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cncclass.models.assignment import Assignment
from cncclass.models.profile import Profile
from cncclass.models.student_response import StudentResponse
from cncclass.schemas.student_response import ResponseSubmit, StudentResponseOut, SubmissionResult

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_answer(answer: str) -> str:
    """Normalise un programme CNC pour la comparaison : espaces réduits, majuscules."""
    return _WHITESPACE.sub(" ", answer.strip()).upper()


def is_correct_answer(response: str, correct_answer: str) -> bool:
    return normalize_answer(response) == normalize_answer(correct_answer)


def list_responses_for_assignment(db: Session, assignment_id: uuid.UUID) -> List[StudentResponseOut]:
    """Retourne les réponses d'un exercice, enrichies pour l'affichage."""
    responses = db.execute(
        select(StudentResponse)
        .where(StudentResponse.assignment_id == assignment_id)
        .order_by(StudentResponse.created_at.desc())
    ).scalars().all()

    assignments = db.execute(
        select(Assignment).where(Assignment.id == assignment_id)
    ).scalars().all()
    return _enrich(db, responses, assignments)


def list_responses_for_class(db: Session, class_id: uuid.UUID) -> List[StudentResponseOut]:
    """
    Retourne les réponses à tous les exercices d'une classe.
    Sans exercice, retourne une liste vide sans interroger les réponses
    (un filtre IN sur un ensemble vide n'est pas émis).
    """
    assignments = db.execute(
        select(Assignment).where(Assignment.class_id == class_id)
    ).scalars().all()

    if not assignments:
        return []

    responses = db.execute(
        select(StudentResponse)
        .where(StudentResponse.assignment_id.in_([a.id for a in assignments]))
        .order_by(StudentResponse.created_at.desc())
    ).scalars().all()
    return _enrich(db, responses, assignments)


def filter_responses(
    responses: Iterable[StudentResponseOut],
    assignment_id: Optional[uuid.UUID] = None,
    student_id: Optional[uuid.UUID] = None,
) -> List[StudentResponseOut]:
    """Filtre une liste déjà chargée par exercice et/ou par élève, sans nouvelle requête."""
    return [
        r for r in responses
        if (assignment_id is None or r.assignment_id == assignment_id)
        and (student_id is None or r.student_id == student_id)
    ]


def submit_response(
    db: Session,
    assignment_id: uuid.UUID,
    student_id: uuid.UUID,
    data: ResponseSubmit,
) -> Optional[SubmissionResult]:
    """
    Enregistre la réponse d'un élève et la corrige par comparaison avec la réponse attendue.

    Retourne None si l'exercice est introuvable.
    Lève une ValueError si l'élève a épuisé ses tentatives.
    La ligne de l'exercice est verrouillée (SELECT ... FOR UPDATE) jusqu'au commit.
    """
    assignment = db.get(Assignment, assignment_id, with_for_update=True)
    if assignment is None:
        return None

    used = db.execute(
        select(func.count())
        .select_from(StudentResponse)
        .where(
            StudentResponse.assignment_id == assignment_id,
            StudentResponse.student_id == student_id,
        )
    ).scalar() or 0

    if used >= assignment.attempts:
        db.rollback()
        raise ValueError(
            f"Plus aucune tentative disponible pour cet exercice ({assignment.attempts} maximum)."
        )

    student_response = StudentResponse(
        assignment_id=assignment_id,
        student_id=student_id,
        response=data.response,
        is_correct=is_correct_answer(data.response, assignment.correct_answer),
    )
    db.add(student_response)
    db.commit()
    db.refresh(student_response)

    logger.info(
        "Réponse de %s à l'exercice %s : %s (tentative %d/%d)",
        student_id, assignment_id,
        "correcte" if student_response.is_correct else "incorrecte",
        used + 1, assignment.attempts,
    )
    return SubmissionResult(
        id=student_response.id,
        assignment_id=assignment_id,
        is_correct=student_response.is_correct,
        attempts_left=assignment.attempts - used - 1,
        created_at=student_response.created_at,
    )


def _enrich(
    db: Session,
    responses: Iterable[StudentResponse],
    assignments: Iterable[Assignment],
) -> List[StudentResponseOut]:
    """Associe à chaque réponse le nom de l'élève et le titre de l'exercice (profils chargés une fois)."""
    responses = list(responses)
    if not responses:
        return []

    titles: Dict[uuid.UUID, str] = {a.id: a.title for a in assignments}
    student_ids = list({r.student_id for r in responses})
    profiles: Dict[uuid.UUID, Profile] = {
        p.id: p for p in db.execute(
            select(Profile).where(Profile.id.in_(student_ids))
        ).scalars().all()
    }

    enriched = []
    for r in responses:
        profile = profiles.get(r.student_id)
        enriched.append(
            StudentResponseOut(
                id=r.id,
                assignment_id=r.assignment_id,
                student_id=r.student_id,
                response=r.response,
                is_correct=r.is_correct,
                created_at=r.created_at,
                student_name=profile.display_name if profile else None,
                student_email=profile.email if profile else None,
                assignment_title=titles.get(r.assignment_id),
            )
        )
    return enriched
