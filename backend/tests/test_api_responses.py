"""
Tests d'intégration API pour la consultation et la soumission des réponses.
"""

import uuid
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from cncclass.main import app
from cncclass.routers.auth import get_current_user
from cncclass.schemas.student_response import StudentResponseOut, SubmissionResult


def make_response_out(**kwargs) -> StudentResponseOut:
    return StudentResponseOut(
        id=uuid.uuid4(),
        assignment_id=kwargs.get("assignment_id", uuid.uuid4()),
        student_id=kwargs.get("student_id", uuid.uuid4()),
        response="G01 X10 Y5",
        is_correct=kwargs.get("is_correct", True),
        created_at=datetime.now(),
        student_name=kwargs.get("student_name", "Ana"),
        assignment_title=kwargs.get("assignment_title", "Torno básico"),
    )


@pytest.fixture
def student(client):
    profile = MagicMock()
    profile.id = uuid.uuid4()
    app.dependency_overrides[get_current_user] = lambda: profile
    return profile


def test_list_class_responses_enrichies(client):
    with patch("cncclass.routers.responses.response_service.list_responses_for_class") as mock:
        mock.return_value = [make_response_out()]
        response = client.get(f"/api/v1/classes/{uuid.uuid4()}/responses")

    assert response.status_code == 200
    body = response.json()[0]
    assert body["student_name"] == "Ana"
    assert body["assignment_title"] == "Torno básico"


def test_list_class_responses_filtres(client):
    """Les filtres s'appliquent à la liste déjà chargée (un seul appel au service)."""
    a1, s1 = uuid.uuid4(), uuid.uuid4()
    loaded = [
        make_response_out(assignment_id=a1, student_id=s1),
        make_response_out(assignment_id=a1),
        make_response_out(student_id=s1),
    ]
    with patch("cncclass.routers.responses.response_service.list_responses_for_class") as mock:
        mock.return_value = loaded
        response = client.get(f"/api/v1/classes/{uuid.uuid4()}/responses?assignment_id={a1}&student_id={s1}")

    assert response.status_code == 200
    assert len(response.json()) == 1
    mock.assert_called_once()


def test_list_class_responses_classe_sans_exercice(client):
    with patch("cncclass.routers.responses.response_service.list_responses_for_class") as mock:
        mock.return_value = []
        response = client.get(f"/api/v1/classes/{uuid.uuid4()}/responses")

    assert response.status_code == 200
    assert response.json() == []


def test_list_assignment_responses(client):
    with patch("cncclass.routers.responses.response_service.list_responses_for_assignment") as mock:
        mock.return_value = [make_response_out(), make_response_out(student_name="Luis")]
        response = client.get(f"/api/v1/assignments/{uuid.uuid4()}/responses")

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_submit_response_sans_jeton(client):
    response = client.post(f"/api/v1/assignments/{uuid.uuid4()}/responses", json={"response": "G00"})
    assert response.status_code == 401


def test_submit_response_succes(client, student):
    assignment_id = uuid.uuid4()
    with patch("cncclass.routers.responses.response_service.submit_response") as mock:
        mock.return_value = SubmissionResult(
            id=uuid.uuid4(), assignment_id=assignment_id, is_correct=True, attempts_left=2,
        )
        response = client.post(f"/api/v1/assignments/{assignment_id}/responses", json={"response": "G01 X10 Y5"})

    assert response.status_code == 201
    assert response.json()["is_correct"] is True
    assert response.json()["attempts_left"] == 2
    assert mock.call_args[0][2] == student.id


def test_submit_response_tentatives_epuisees(client, student):
    with patch("cncclass.routers.responses.response_service.submit_response") as mock:
        mock.side_effect = ValueError("Plus aucune tentative disponible pour cet exercice (1 maximum).")
        response = client.post(f"/api/v1/assignments/{uuid.uuid4()}/responses", json={"response": "G00"})

    assert response.status_code == 409


def test_submit_response_vide(client, student):
    response = client.post(f"/api/v1/assignments/{uuid.uuid4()}/responses", json={"response": "  "})
    assert response.status_code == 422


def test_submit_response_exercice_introuvable(client, student):
    with patch("cncclass.routers.responses.response_service.submit_response") as mock:
        mock.return_value = None
        response = client.post(f"/api/v1/assignments/{uuid.uuid4()}/responses", json={"response": "G00"})

    assert response.status_code == 404
