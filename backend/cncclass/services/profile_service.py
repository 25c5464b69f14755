"""
Service métier pour la gestion des profils et des rôles (console admin).
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from cncclass.models.profile import Profile
from cncclass.schemas.profile import RoleUpdate

logger = logging.getLogger(__name__)


def list_profiles(db: Session, exclude_role: Optional[str] = None) -> List[Profile]:
    """
    Retourne tous les profils triés par email.
    `exclude_role` permet d'écarter un rôle (ex. les admins dans le sélecteur de participants).
    """
    query = select(Profile).order_by(Profile.email)
    if exclude_role:
        query = query.where(Profile.role != exclude_role)
    return list(db.execute(query).scalars().all())


def set_role(db: Session, user_id: uuid.UUID, data: RoleUpdate) -> Optional[List[Profile]]:
    """
    Met à jour le rôle d'un profil puis recharge la liste complète des profils.
    Retourne None si le profil est introuvable.
    """
    profile = db.get(Profile, user_id)
    if profile is None:
        return None

    previous = profile.role
    profile.role = data.role
    db.commit()

    logger.info("Rôle du profil %s : %s → %s", user_id, previous, data.role)
    return list_profiles(db)
