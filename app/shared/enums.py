# app/shared/enums.py
"""
Toutes les énumérations du projet.

Source unique de vérité pour les statuts et types.
Importé par les modèles, schemas, services et engine.
"""

from enum import Enum


class TestType(str, Enum):
    UNIFIED         = "unified"          # DISC + Big Five + Leadership
    DISC_ONLY       = "disc_only"
    BIG_FIVE_ONLY   = "big_five_only"
    LEADERSHIP_ONLY = "leadership_only"


class TestStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED   = "completed"        # Terminal : plus aucune réponse acceptée


class Framework(str, Enum):
    """Valeurs possibles de TestQuestion.question_type reconnues par l'engine."""
    DISC       = "disc"
    BIG_FIVE   = "big_five"
    LEADERSHIP = "leadership"
