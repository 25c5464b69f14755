"""
Tests d'intégration API pour la console admin : profils et rôles.
"""

import uuid
from unittest.mock import patch

from cncclass.schemas.profile import ProfileResponse


def make_profile_response(**kwargs) -> ProfileResponse:
    return ProfileResponse(
        id=kwargs.get("id", uuid.uuid4()),
        email=kwargs.get("email", "ana@ecole.es"),
        display_name=kwargs.get("display_name", "Ana"),
        role=kwargs.get("role", "student"),
    )


def test_list_profiles(client):
    with patch("cncclass.routers.profiles.profile_service.list_profiles") as mock:
        mock.return_value = [make_profile_response(), make_profile_response(role="teacher")]
        response = client.get("/api/v1/profiles")

    assert response.status_code == 200
    assert [p["role"] for p in response.json()] == ["student", "teacher"]
    assert mock.call_args.kwargs["exclude_role"] is None


def test_list_profiles_exclut_admin(client):
    with patch("cncclass.routers.profiles.profile_service.list_profiles") as mock:
        mock.return_value = []
        response = client.get("/api/v1/profiles?exclude_role=Administrador")

    assert response.status_code == 200
    assert mock.call_args.kwargs["exclude_role"] == "admin"


def test_list_profiles_role_exclu_inconnu(client):
    response = client.get("/api/v1/profiles?exclude_role=root")
    assert response.status_code == 422


def test_set_role_succes(client):
    user_id = uuid.uuid4()
    with patch("cncclass.routers.profiles.profile_service.set_role") as mock:
        mock.return_value = [make_profile_response(id=user_id, role="teacher")]
        response = client.put(f"/api/v1/profiles/{user_id}/role", json={"role": "Docente"})

    assert response.status_code == 200
    assert response.json()[0]["role"] == "teacher"
    assert mock.call_args[0][2].role == "teacher"


def test_set_role_invalide(client):
    with patch("cncclass.routers.profiles.profile_service.set_role") as mock:
        response = client.put(f"/api/v1/profiles/{uuid.uuid4()}/role", json={"role": "superuser"})

    assert response.status_code == 422
    mock.assert_not_called()


def test_set_role_profil_introuvable(client):
    with patch("cncclass.routers.profiles.profile_service.set_role") as mock:
        mock.return_value = None
        response = client.put(f"/api/v1/profiles/{uuid.uuid4()}/role", json={"role": "admin"})

    assert response.status_code == 404
