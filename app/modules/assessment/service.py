# modules/assessment/service.py
"""
Orchestration du cycle de vie d'un test psychologique.

Responsabilités :
1. Interroger la DB via repository (test, questions, réponses)
2. Déléguer le calcul à engine/psychometrics (scoring + profiling)
3. Sauvegarder scores, analyse et profils dans une seule transaction
"""
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional, Tuple

from app.engine.psychometrics.frameworks import (
    TOTAL_QUESTIONS_BY_TEST_TYPE,
    frameworks_for_test_type,
    response_value_for,
)
from app.engine.psychometrics.profiling import build_profiles, build_report, generate_analysis
from app.engine.psychometrics.scoring import calculate_final_scores
from app.modules.assessment.repository import AssessmentRepository
from app.shared.enums import TestStatus, TestType

logger = logging.getLogger(__name__)

repo = AssessmentRepository()


class AssessmentService:

    # ─────────────────────────────────────────────
    # SESSION DE TEST
    # ─────────────────────────────────────────────

    async def start_test(self, db: AsyncSession, user, test_type: TestType = TestType.UNIFIED):
        test_type = TestType(test_type)
        test = await repo.create_test(
            db,
            user_id=user.id,
            test_type=test_type.value,
            total_questions=TOTAL_QUESTIONS_BY_TEST_TYPE[test_type.value],
        )
        logger.info("Test %s démarré (user=%s, type=%s)", test.id, user.id, test_type.value)
        return test

    async def list_tests(
        self, db: AsyncSession, user, status: Optional[TestStatus] = None, limit: int = 10
    ) -> List[Dict]:
        rows = await repo.list_tests_for_user(db, user.id, status=status, limit=limit)
        return [
            {**_test_as_dict(test), "profiles_count": profiles_count}
            for test, profiles_count in rows
        ]

    async def get_test_detail(self, db: AsyncSession, user, test_id: int) -> Optional[Dict]:
        test = await repo.get_test_for_user(db, test_id, user.id)
        if not test:
            return None
        return {
            "test":      test,
            "responses": await repo.get_responses_with_questions(db, test_id),
            "profiles":  await repo.get_profiles(db, test_id),
        }

    async def get_questions(self, db: AsyncSession, user, test_id: int) -> Optional[Dict]:
        """
        Questions éligibles selon le type du test.
        Test unifié : toutes les questions actives, quel que soit leur type.
        """
        test = await repo.get_test_for_user(db, test_id, user.id)
        if not test:
            return None

        if test.test_type == TestType.UNIFIED.value:
            question_types = None
        else:
            question_types = [fw.name for fw in frameworks_for_test_type(test.test_type)]

        questions = await repo.get_active_questions(db, question_types)
        return {
            "test_id":         test.id,
            "test_type":       test.test_type,
            "questions":       questions,
            "total_questions": len(questions),
        }

    async def submit_response(
        self,
        db: AsyncSession,
        user,
        test_id: int,
        question_id: int,
        question_number: int,
        selected_option: str,
    ) -> Tuple[object, bool]:
        """
        Upsert de la réponse à (test, question_number).
        dimension_scores = copie de scoring_weights[selected_option] au moment de la réponse.

        Retourne (réponse, created). LookupError si test fini/inconnu ou question
        inconnue/inactive. ValueError si question_number ne correspond pas à la
        question ou si la question est hors des référentiels du test.
        """
        test = await repo.lock_in_progress_test(db, test_id, user.id)
        if not test:
            raise LookupError("TEST_NOT_FOUND_OR_COMPLETED")

        question = await repo.get_question(db, question_id)
        if not question or not question.is_active:
            raise LookupError("QUESTION_NOT_FOUND")
        # La clé d'unicité est question_number : elle doit désigner cette question
        if question.question_number != question_number:
            raise ValueError("QUESTION_NUMBER_MISMATCH")
        allowed_types = {fw.name for fw in frameworks_for_test_type(test.test_type)}
        if question.question_type not in allowed_types:
            raise ValueError("QUESTION_NOT_IN_TEST")

        dimension_scores = dict((question.scoring_weights or {}).get(selected_option) or {})

        response, created = await repo.upsert_response(db, {
            "test_id":          test_id,
            "question_id":      question_id,
            "question_number":  question_number,
            "selected_option":  selected_option,
            "response_value":   response_value_for(selected_option),
            "dimension_scores": dimension_scores,
        })
        logger.debug(
            "Réponse %s (test=%s, question=%s, option=%s)",
            "créée" if created else "écrasée", test_id, question_number, selected_option,
        )
        return response, created

    async def complete_test(self, db: AsyncSession, user, test_id: int) -> Dict:
        """
        Pipeline de complétion :
        1. Verrou sur le test (FOR UPDATE) puis lecture des réponses : aucune
           soumission ne peut s'intercaler avant la transition
        2. Calcul pur : scores → analyse → profils
        3. Transition in_progress → completed (compare-and-swap) + profils, même transaction
        """
        test = await repo.lock_in_progress_test(db, test_id, user.id)
        if not test:
            raise LookupError("TEST_NOT_FOUND_OR_COMPLETED")

        rows = await repo.get_scoring_rows(db, test_id)
        scores = calculate_final_scores(rows)
        analysis = generate_analysis(scores)
        profiles = build_profiles(scores, frameworks_for_test_type(test.test_type))

        completed = await repo.mark_completed(db, test_id, user.id, scores, analysis)
        if not completed:
            # Une complétion concurrente est passée entre la lecture et l'UPDATE
            await db.rollback()
            raise LookupError("TEST_NOT_FOUND_OR_COMPLETED")

        saved_profiles = await repo.save_profiles(db, test_id, profiles)
        logger.info(
            "Test %s complété (%d réponses, %d profils)", test_id, len(rows), len(saved_profiles)
        )

        return {
            "test":     completed,
            "scores":   scores,
            "analysis": analysis,
            "profiles": saved_profiles,
        }

    async def get_report(self, db: AsyncSession, user, test_id: int) -> Optional[Dict]:
        test = await repo.get_test_for_user(db, test_id, user.id, status=TestStatus.COMPLETED)
        if not test:
            return None
        profiles = await repo.get_profiles(db, test_id)
        return build_report(test, profiles)


def _test_as_dict(test) -> Dict:
    return {
        "id":                 test.id,
        "user_id":            test.user_id,
        "test_type":          test.test_type,
        "total_questions":    test.total_questions,
        "answered_questions": test.answered_questions,
        "status":             test.status,
        "disc_scores":        test.disc_scores,
        "big_five_scores":    test.big_five_scores,
        "leadership_scores":  test.leadership_scores,
        "overall_analysis":   test.overall_analysis,
        "recommendations":    test.recommendations,
        "created_at":         test.created_at,
        "completed_at":       test.completed_at,
    }
