"""
Modèle SQLAlchemy pour les profils utilisateurs.
Le profil est créé à l'inscription ; seul un administrateur modifie le rôle.
"""

import uuid
from sqlalchemy import Column, DateTime, String, Uuid, func

from cncclass.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    display_name = Column(String(150), nullable=True)
    role = Column(String(20), nullable=False, default="student")  # student, teacher, admin
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
