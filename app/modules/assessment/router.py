# modules/assessment/router.py
"""
Endpoints du cycle de vie d'un test psychologique.
Démarrage → Questions → Réponses → Complétion → Rapport

Règle : ce fichier ne touche jamais la DB ni l'engine.
Tout passe par AssessmentService.
"""
from fastapi import APIRouter, HTTPException, Query, Response, status
from typing import List, Optional

from app.shared.deps import DbDep, UserDep
from app.shared.enums import TestStatus
from app.modules.assessment.service import AssessmentService
from app.modules.assessment.schemas import (
    StartTestIn,
    TestOut,
    TestListItemOut,
    TestDetailOut,
    TestQuestionsOut,
    SubmitResponseIn,
    ResponseOut,
    CompletionOut,
    ReportOut,
)

router = APIRouter(prefix="/psychological-tests", tags=["Psychological tests"])
service = AssessmentService()


# ─────────────────────────────────────────────
# TESTS
# ─────────────────────────────────────────────

@router.post(
    "",
    response_model=TestOut,
    status_code=status.HTTP_201_CREATED,
    summary="Démarrer un nouveau test",
)
async def start_test(payload: StartTestIn, db: DbDep, current_user: UserDep):
    return await service.start_test(db, current_user, payload.test_type)


@router.get(
    "",
    response_model=List[TestListItemOut],
    summary="Mes tests",
)
async def list_tests(
    db: DbDep,
    current_user: UserDep,
    status_filter: Optional[TestStatus] = Query(None, alias="status"),
    limit: int = Query(10, ge=1, le=100),
):
    """Plus récents d'abord, avec le nombre de profils générés."""
    return await service.list_tests(db, current_user, status=status_filter, limit=limit)


@router.get(
    "/{test_id}",
    response_model=TestDetailOut,
    summary="Détail d'un test (réponses + profils)",
)
async def get_test(test_id: int, db: DbDep, current_user: UserDep):
    detail = await service.get_test_detail(db, current_user, test_id)
    if not detail:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Test introuvable.")
    return detail


@router.get(
    "/{test_id}/questions",
    response_model=TestQuestionsOut,
    summary="Questions éligibles pour ce test",
)
async def get_questions(test_id: int, db: DbDep, current_user: UserDep):
    questions = await service.get_questions(db, current_user, test_id)
    if not questions:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Test introuvable.")
    return questions


# ─────────────────────────────────────────────
# RÉPONSES & COMPLÉTION
# ─────────────────────────────────────────────

@router.post(
    "/{test_id}/responses",
    response_model=ResponseOut,
    status_code=status.HTTP_201_CREATED,
    summary="Répondre à une question",
    description=(
        "Une seule réponse par numéro de question : une nouvelle soumission "
        "écrase la précédente (200) au lieu d'en créer une autre (201)."
    ),
)
async def submit_response(
    test_id: int,
    payload: SubmitResponseIn,
    response: Response,
    db: DbDep,
    current_user: UserDep,
):
    try:
        saved, created = await service.submit_response(
            db,
            current_user,
            test_id=test_id,
            question_id=payload.question_id,
            question_number=payload.question_number,
            selected_option=payload.selected_option,
        )
    except LookupError as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(e))
    except ValueError as e:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))

    if not created:
        response.status_code = status.HTTP_200_OK
    return saved


@router.post(
    "/{test_id}/complete",
    response_model=CompletionOut,
    summary="Terminer le test",
    description=(
        "Calcule les scores DISC / Big Five / Leadership (0-10), l'analyse "
        "globale et un profil par référentiel. Transition définitive."
    ),
)
async def complete_test(test_id: int, db: DbDep, current_user: UserDep):
    try:
        return await service.complete_test(db, current_user, test_id)
    except LookupError as e:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(e))


@router.get(
    "/{test_id}/report",
    response_model=ReportOut,
    summary="Rapport détaillé d'un test terminé",
)
async def get_report(test_id: int, db: DbDep, current_user: UserDep):
    report = await service.get_report(db, current_user, test_id)
    if not report:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Test introuvable ou non terminé.")
    return report
