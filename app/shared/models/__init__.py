"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from app.shared.models import User, PsychologicalTest, ...

→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la création des tables (Alembic, create_all).
"""

from app.shared.models.User       import User
from app.shared.models.Assessment import TestQuestion, PsychologicalTest, TestResponse, PersonalityProfile

__all__ = [
    # User
    "User",
    # Assessment
    "TestQuestion",
    "PsychologicalTest",
    "TestResponse",
    "PersonalityProfile",
]
