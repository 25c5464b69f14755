"""
Router d'identité : inscription, connexion et profil courant.
Fournit aussi la dépendance get_current_user utilisée par les autres routers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cncclass.database import get_db
from cncclass.models.profile import Profile
from cncclass.schemas.auth import SignInRequest, SignUpRequest, TokenResponse
from cncclass.schemas.profile import ProfileResponse
from cncclass.services import auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentification"])

_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    db: Session = Depends(get_db),
) -> Profile:
    """
    Dépendance FastAPI — résout le profil porteur du jeton à chaque requête.
    Le profil est relu en base pour refléter un éventuel changement de rôle.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentification requise.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    profile_id = auth_service.decode_access_token(credentials.credentials)
    profile = auth_service.get_profile(db, profile_id) if profile_id else None
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Jeton invalide ou expiré.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile


@router.post("/sign-up", response_model=TokenResponse, status_code=201, summary="Créer un compte")
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """Crée un compte élève et retourne un jeton d'accès."""
    try:
        profile = auth_service.sign_up(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return TokenResponse(
        access_token=auth_service.create_access_token(profile.id),
        profile=ProfileResponse.model_validate(profile),
    )


@router.post("/sign-in", response_model=TokenResponse, summary="Se connecter")
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    profile = auth_service.sign_in(db, data)
    if profile is None:
        raise HTTPException(
            status_code=401,
            detail="Email ou mot de passe incorrect.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(
        access_token=auth_service.create_access_token(profile.id),
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("/me", response_model=ProfileResponse, summary="Profil courant")
def me(current: Profile = Depends(get_current_user)):
    return current
