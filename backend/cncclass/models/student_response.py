"""
Modèle SQLAlchemy pour les réponses des élèves aux exercices.
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, Uuid, func

from cncclass.database import Base


class StudentResponse(Base):
    __tablename__ = "student_responses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Pas de FK vers assignments : la suppression d'un exercice laisse ses réponses en place
    assignment_id = Column(Uuid, nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("profiles.id"), nullable=False)
    response = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())
