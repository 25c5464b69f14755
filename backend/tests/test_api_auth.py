"""
Tests d'intégration API pour l'inscription, la connexion et le profil courant.
"""

import uuid
from datetime import datetime
from unittest.mock import MagicMock, patch

from cncclass.services.auth_service import create_access_token


def make_profile(**kwargs):
    p = MagicMock()
    p.id = kwargs.get("id", uuid.uuid4())
    p.email = kwargs.get("email", "ana@ecole.es")
    p.display_name = kwargs.get("display_name", "Ana")
    p.role = kwargs.get("role", "student")
    p.created_at = datetime.now()
    return p


def test_sign_up_succes(client):
    with patch("cncclass.routers.auth.auth_service.sign_up") as mock:
        mock.return_value = make_profile()
        response = client.post("/api/v1/auth/sign-up", json={
            "email": "ana@ecole.es", "password": "secreto123", "display_name": "Ana",
        })

    assert response.status_code == 201
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]
    assert response.json()["profile"]["role"] == "student"


def test_sign_up_email_existant(client):
    with patch("cncclass.routers.auth.auth_service.sign_up") as mock:
        mock.side_effect = ValueError("Un compte existe déjà pour l'email 'ana@ecole.es'.")
        response = client.post("/api/v1/auth/sign-up", json={
            "email": "ana@ecole.es", "password": "secreto123", "display_name": "Ana",
        })

    assert response.status_code == 409


def test_sign_up_mot_de_passe_court(client):
    response = client.post("/api/v1/auth/sign-up", json={
        "email": "ana@ecole.es", "password": "123", "display_name": "Ana",
    })
    assert response.status_code == 422


def test_sign_in_identifiants_invalides(client):
    with patch("cncclass.routers.auth.auth_service.sign_in") as mock:
        mock.return_value = None
        response = client.post("/api/v1/auth/sign-in", json={"email": "ana@ecole.es", "password": "x"})

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_sign_in_succes(client):
    with patch("cncclass.routers.auth.auth_service.sign_in") as mock:
        mock.return_value = make_profile()
        response = client.post("/api/v1/auth/sign-in", json={"email": "ana@ecole.es", "password": "secreto123"})

    assert response.status_code == 200
    assert response.json()["profile"]["email"] == "ana@ecole.es"


def test_me_avec_jeton(client):
    profile = make_profile(role="teacher")
    token = create_access_token(profile.id)
    with patch("cncclass.routers.auth.auth_service.get_profile") as mock:
        mock.return_value = profile
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["id"] == str(profile.id)
    assert mock.call_args[0][1] == profile.id


def test_me_jeton_invalide(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer pas-un-jeton"})
    assert response.status_code == 401


def test_me_profil_supprime(client):
    with patch("cncclass.routers.auth.auth_service.get_profile") as mock:
        mock.return_value = None
        response = client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {create_access_token(uuid.uuid4())}"},
        )

    assert response.status_code == 401
