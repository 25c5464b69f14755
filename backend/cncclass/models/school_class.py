"""
Modèles SQLAlchemy pour les classes et leurs participants.
Nommé school_class pour éviter le conflit avec le mot-clé Python 'class'.
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid, func

from cncclass.database import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False)  # non unique
    created_by = Column(Uuid, ForeignKey("profiles.id"), nullable=True)  # NULL = créée depuis l'admin
    created_at = Column(DateTime, server_default=func.now())


class ClassParticipant(Base):
    """
    Association classe ↔ profils.
    Pas de contrainte d'unicité sur (class_id, user_id) : les doublons sont tolérés.
    """
    __tablename__ = "class_participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
