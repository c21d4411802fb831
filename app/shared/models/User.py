# app/shared/models/User.py
"""
Propriétaire des tests psychométriques.

Seuls les champs utiles à l'assessment sont modélisés ici : la gestion
des comptes (inscription, mot de passe) vit dans le service d'authentification.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    id         = Column(Integer, primary_key=True, index=True)
    email      = Column(String, unique=True, index=True, nullable=False)
    name       = Column(String, nullable=False)
    is_active  = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    psychological_tests = relationship(
        "PsychologicalTest", back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
