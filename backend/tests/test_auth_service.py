"""
Tests unitaires pour l'inscription, la connexion et les jetons d'accès.
"""

import uuid
from datetime import timedelta

import pytest
from pydantic import ValidationError

from cncclass.schemas.auth import SignInRequest, SignUpRequest
from cncclass.services.auth_service import (
    create_access_token,
    decode_access_token,
    hash_password,
    sign_in,
    sign_up,
    verify_password,
)


def make_sign_up(**kwargs):
    return SignUpRequest(
        email=kwargs.get("email", "ana@ecole.es"),
        password=kwargs.get("password", "secreto123"),
        display_name=kwargs.get("display_name", "Ana"),
    )


# --- Schémas ---

def test_sign_up_mot_de_passe_trop_court():
    with pytest.raises(ValidationError, match="mot de passe"):
        make_sign_up(password="123")


def test_sign_up_email_invalide():
    with pytest.raises(ValidationError):
        make_sign_up(email="pas-un-email")


# --- Mots de passe et jetons ---

def test_hash_password_verifiable():
    hashed = hash_password("secreto123")
    assert hashed != "secreto123"
    assert verify_password("secreto123", hashed)
    assert not verify_password("autre", hashed)


def test_jeton_aller_retour():
    profile_id = uuid.uuid4()
    assert decode_access_token(create_access_token(profile_id)) == profile_id


def test_jeton_expire():
    token = create_access_token(uuid.uuid4(), expires_delta=timedelta(seconds=-1))
    assert decode_access_token(token) is None


def test_jeton_invalide():
    assert decode_access_token("pas.un.jeton") is None


# --- sign_up / sign_in ---

def test_sign_up_cree_un_eleve(db_session):
    profile = sign_up(db_session, make_sign_up(email="Ana@Ecole.es"))
    assert profile.role == "student"
    assert profile.email == "ana@ecole.es"
    assert profile.display_name == "Ana"


def test_sign_up_email_deja_utilise(db_session):
    sign_up(db_session, make_sign_up())
    with pytest.raises(ValueError, match="existe déjà"):
        sign_up(db_session, make_sign_up(display_name="Autre"))


def test_sign_in(db_session):
    created = sign_up(db_session, make_sign_up())

    assert sign_in(db_session, SignInRequest(email="ana@ecole.es", password="secreto123")).id == created.id
    assert sign_in(db_session, SignInRequest(email="ana@ecole.es", password="mauvais")) is None
    assert sign_in(db_session, SignInRequest(email="inconnu@ecole.es", password="secreto123")) is None
