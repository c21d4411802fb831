# tests/conftest.py
"""
Fixtures et factories partagées sur l'ensemble de la suite de tests.

Trois couches :
    1. Engine  : fonctions pures, aucun mock nécessaire (factories de réponses)
    2. Service : mocks AsyncSession + repo via pytest-mock
    3. Router  : httpx.AsyncClient + dependency_overrides FastAPI
"""
import pytest
from types import SimpleNamespace
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from app.main import app
from app.core.database import get_db
from app.shared.deps import get_current_user


# ── Entrées de l'engine ───────────────────────────────────────────────────────

def answer(weights, question_type: str = "disc") -> tuple:
    """Paire (dimension_scores, question_type) telle que renvoyée par le repository."""
    return (weights, question_type)


def scores_all_zero() -> dict:
    return {
        "disc": {"D": 0, "I": 0, "S": 0, "C": 0},
        "big_five": {
            "openness": 0, "conscientiousness": 0, "extraversion": 0,
            "agreeableness": 0, "neuroticism": 0,
        },
        "leadership": {
            "autocratic": 0, "democratic": 0, "transformational": 0,
            "transactional": 0, "servant": 0,
        },
    }


def scores_typical() -> dict:
    """Profil D/I, conscientiousness, transformational."""
    return {
        "disc": {"D": 8.8, "I": 6.3, "S": 2.5, "C": 5.0},
        "big_five": {
            "openness": 6.3, "conscientiousness": 8.8, "extraversion": 5.0,
            "agreeableness": 7.5, "neuroticism": 2.5,
        },
        "leadership": {
            "autocratic": 2.5, "democratic": 7.5, "transformational": 10.0,
            "transactional": 5.0, "servant": 0,
        },
    }


# ── Factories de modèles ORM (SimpleNamespace, sans ORM) ─ ──────────────

def make_user(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "email": "user@test.com",
        "name": "Test User",
        "is_active": True,
        "created_at": datetime(2026, 1, 1),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_question(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "question_number": 1,
        "question_text": "Face à un problème urgent dans l'équipe, vous…",
        "question_type": "disc",
        "dimension": "D",
        "options": [
            {"label": "A", "text": "prenez les choses en main"},
            {"label": "B", "text": "réunissez tout le monde"},
            {"label": "C", "text": "rassurez vos collègues"},
            {"label": "D", "text": "analysez les causes"},
        ],
        "scoring_weights": {
            "A": {"D": 4, "I": 1},
            "B": {"I": 4, "S": 1},
            "C": {"S": 4},
            "D": {"C": 4},
        },
        "is_active": True,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_test(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "user_id": 1,
        "test_type": "unified",
        "total_questions": 25,
        "answered_questions": 0,
        "status": "in_progress",
        "disc_scores": None,
        "big_five_scores": None,
        "leadership_scores": None,
        "overall_analysis": None,
        "recommendations": None,
        "created_at": datetime(2026, 1, 1, 9, 0, 0),
        "completed_at": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_completed_test(**kwargs) -> SimpleNamespace:
    scores = scores_typical()
    defaults = {
        "status": "completed",
        "answered_questions": 25,
        "disc_scores": scores["disc"],
        "big_five_scores": scores["big_five"],
        "leadership_scores": scores["leadership"],
        "overall_analysis": "Votre profil présente…",
        "recommendations": "Au vu de votre profil…",
        "completed_at": datetime(2026, 1, 1, 9, 30, 0),
    }
    defaults.update(kwargs)
    return make_test(**defaults)


def make_response(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "test_id": 1,
        "question_id": 1,
        "question_number": 1,
        "selected_option": "A",
        "response_value": 1,
        "dimension_scores": {"D": 4, "I": 1},
        "answered_at": datetime(2026, 1, 1, 9, 5, 0),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_profile(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "test_id": 1,
        "profile_type": "disc",
        "primary_trait": "D",
        "secondary_trait": "I",
        "description": "Profil D avec des traits I",
        "strengths": "Détermination, orientation résultats, leadership naturel",
        "development_areas": "Développer la patience et l'écoute active",
        "career_suggestions": "Postes de direction, gestion de projets, vente",
        "created_at": datetime(2026, 1, 1, 9, 30, 0),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """AsyncMock simulant une AsyncSession SQLAlchemy."""
    db = AsyncMock(spec=AsyncSession)
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.close = AsyncMock()
    return db


# ── Fixtures HTTP (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
async def client():
    """Client sans auth : vérifie le rejet des requêtes anonymes."""
    mock_db = make_async_db()
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def user_client():
    """Client authentifié (service mocké au cas par cas)."""
    mock_db = make_async_db()
    mock_user = make_user()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = lambda: mock_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
