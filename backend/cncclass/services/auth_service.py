"""
Service d'identité : inscription, connexion et jetons d'accès JWT.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cncclass.config import settings
from cncclass.models.profile import Profile
from cncclass.schemas.auth import MAX_PASSWORD_BYTES, SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "student"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    if len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def create_access_token(profile_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Crée un jeton signé dont le sujet est l'identifiant du profil."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"sub": str(profile_id), "exp": expire},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[uuid.UUID]:
    """Retourne l'identifiant du profil porté par le jeton, ou None si invalide ou expiré."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return uuid.UUID(payload["sub"])
    except (JWTError, KeyError, ValueError, TypeError):
        return None


def sign_up(db: Session, data: SignUpRequest) -> Profile:
    """
    Crée le profil d'un nouvel utilisateur avec le rôle élève.
    Lève une ValueError si l'email est déjà utilisé.
    """
    profile = Profile(
        email=data.email.lower(),
        display_name=data.display_name,
        role=DEFAULT_ROLE,
        password_hash=hash_password(data.password),
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(f"Un compte existe déjà pour l'email '{data.email}'.")
    db.refresh(profile)
    logger.info("Nouveau profil %s inscrit (%s)", profile.id, profile.email)
    return profile


def sign_in(db: Session, data: SignInRequest) -> Optional[Profile]:
    """Retourne le profil si les identifiants sont valides, sinon None."""
    profile = db.execute(
        select(Profile).where(Profile.email == data.email.lower())
    ).scalar_one_or_none()

    if profile is None or not verify_password(data.password, profile.password_hash):
        logger.warning("Connexion refusée pour %s", data.email)
        return None
    return profile


def get_profile(db: Session, profile_id: uuid.UUID) -> Optional[Profile]:
    return db.get(Profile, profile_id)
