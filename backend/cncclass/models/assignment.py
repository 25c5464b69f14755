"""
Modèle SQLAlchemy pour les exercices (programmes CNC à écrire) d'une classe.
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, Uuid, func

from cncclass.database import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("classes.id"), nullable=False)
    title = Column(String(200), nullable=False)
    problem_description = Column(Text, nullable=False, default="")
    correct_answer = Column(Text, nullable=False, default="")  # Ex: "G01 X10 Y5"
    attempts = Column(Integer, nullable=False, default=1)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
