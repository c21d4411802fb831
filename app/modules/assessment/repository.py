# modules/assessment/repository.py
"""
Accès DB pour le module assessment.
Toute la logique SQL est ici, les services n'écrivent jamais de queries directes.

Garanties de concurrence (PostgreSQL) :
- Réponse : INSERT ... ON CONFLICT (test_id, question_number) DO UPDATE → upsert atomique.
- Soumission vs complétion : les deux chemins verrouillent la ligne du test (FOR UPDATE)
  avant de lire ou d'écrire les réponses → les réponses lues au scoring sont définitives.
- Complétion : UPDATE ... WHERE status = 'in_progress' RETURNING → une seule complétion gagne.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select, update, func, literal_column
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.enums import TestStatus
from app.shared.models import PsychologicalTest, TestQuestion, TestResponse, PersonalityProfile


class AssessmentRepository:

    # ─────────────────────────────────────────────
    # TESTS
    # ─────────────────────────────────────────────

    async def create_test(
        self, db: AsyncSession, user_id: int, test_type: str, total_questions: int
    ) -> PsychologicalTest:
        db_obj = PsychologicalTest(
            user_id=user_id,
            test_type=test_type,
            total_questions=total_questions,
            answered_questions=0,
            status=TestStatus.IN_PROGRESS,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def list_tests_for_user(
        self,
        db: AsyncSession,
        user_id: int,
        status: Optional[TestStatus] = None,
        limit: int = 10,
    ) -> List[Tuple[PsychologicalTest, int]]:
        """Tests de l'utilisateur, plus récents d'abord, avec le nombre de profils générés."""
        stmt = (
            select(PsychologicalTest, func.count(PersonalityProfile.id).label("profiles_count"))
            .outerjoin(PersonalityProfile, PersonalityProfile.test_id == PsychologicalTest.id)
            .where(PsychologicalTest.user_id == user_id)
        )
        if status is not None:
            stmt = stmt.where(PsychologicalTest.status == status)

        r = await db.execute(
            stmt.group_by(PsychologicalTest.id)
            .order_by(PsychologicalTest.created_at.desc())
            .limit(limit)
        )
        return [(row[0], row[1]) for row in r.all()]

    async def get_test_for_user(
        self,
        db: AsyncSession,
        test_id: int,
        user_id: int,
        status: Optional[TestStatus] = None,
    ) -> Optional[PsychologicalTest]:
        stmt = select(PsychologicalTest).where(
            PsychologicalTest.id == test_id,
            PsychologicalTest.user_id == user_id,
        )
        if status is not None:
            stmt = stmt.where(PsychologicalTest.status == status)
        r = await db.execute(stmt)
        return r.scalar_one_or_none()

    async def lock_in_progress_test(
        self, db: AsyncSession, test_id: int, user_id: int
    ) -> Optional[PsychologicalTest]:
        """
        Verrou ligne jusqu'au prochain commit : sérialise une soumission
        de réponse avec une complétion concurrente du même test.
        """
        r = await db.execute(
            select(PsychologicalTest)
            .where(
                PsychologicalTest.id == test_id,
                PsychologicalTest.user_id == user_id,
                PsychologicalTest.status == TestStatus.IN_PROGRESS,
            )
            .with_for_update()
        )
        return r.scalar_one_or_none()

    # ─────────────────────────────────────────────
    # CATALOGUE DE QUESTIONS
    # ─────────────────────────────────────────────

    async def get_active_questions(
        self, db: AsyncSession, question_types: Optional[Sequence[str]] = None
    ) -> List[TestQuestion]:
        """question_types=None → toutes les questions actives (test unifié)."""
        stmt = select(TestQuestion).where(TestQuestion.is_active == True)
        if question_types is not None:
            stmt = stmt.where(TestQuestion.question_type.in_(list(question_types)))
        r = await db.execute(stmt.order_by(TestQuestion.question_number))
        return r.scalars().all()

    async def get_question(self, db: AsyncSession, question_id: int) -> Optional[TestQuestion]:
        r = await db.execute(select(TestQuestion).where(TestQuestion.id == question_id))
        return r.scalar_one_or_none()

    # ─────────────────────────────────────────────
    # RÉPONSES
    # ─────────────────────────────────────────────

    async def upsert_response(self, db: AsyncSession, data: Dict[str, Any]) -> Tuple[TestResponse, bool]:
        """
        Insère ou écrase la réponse (test_id, question_number), recalcule le
        compteur answered_questions puis commit (libère le verrou du test).

        Retourne (réponse, created) : created=False si une réponse existait déjà.
        xmax = 0 uniquement pour une ligne fraîchement insérée (PostgreSQL).
        """
        stmt = pg_insert(TestResponse).values(**data)
        stmt = stmt.on_conflict_do_update(
            constraint="uq_test_responses_test_question",
            set_={
                "question_id":      stmt.excluded.question_id,
                "selected_option":  stmt.excluded.selected_option,
                "response_value":   stmt.excluded.response_value,
                "dimension_scores": stmt.excluded.dimension_scores,
                "answered_at":      func.now(),
            },
        ).returning(TestResponse.id, literal_column("(xmax = 0)").label("inserted"))

        row = (await db.execute(stmt)).one()
        await self._refresh_answered_count(db, data["test_id"])
        await db.commit()

        response = await db.get(TestResponse, row.id, populate_existing=True)
        return response, bool(row.inserted)

    async def _refresh_answered_count(self, db: AsyncSession, test_id: int) -> None:
        """answered_questions = nombre de question_number distincts répondus."""
        answered = (
            select(func.count(func.distinct(TestResponse.question_number)))
            .where(TestResponse.test_id == test_id)
            .scalar_subquery()
        )
        await db.execute(
            update(PsychologicalTest)
            .where(PsychologicalTest.id == test_id)
            .values(answered_questions=answered)
            .execution_options(synchronize_session=False)
        )

    async def get_scoring_rows(self, db: AsyncSession, test_id: int) -> List[Tuple[Any, str]]:
        """Paires (dimension_scores, question_type), entrée directe de l'engine."""
        r = await db.execute(
            select(TestResponse.dimension_scores, TestQuestion.question_type)
            .join(TestQuestion, TestQuestion.id == TestResponse.question_id)
            .where(TestResponse.test_id == test_id)
        )
        return [(row[0], row[1]) for row in r.all()]

    async def get_responses_with_questions(self, db: AsyncSession, test_id: int) -> List[Dict[str, Any]]:
        r = await db.execute(
            select(TestResponse, TestQuestion)
            .join(TestQuestion, TestQuestion.id == TestResponse.question_id)
            .where(TestResponse.test_id == test_id)
            .order_by(TestResponse.question_number)
        )
        return [
            {
                "id":               response.id,
                "question_id":      response.question_id,
                "question_number":  response.question_number,
                "selected_option":  response.selected_option,
                "response_value":   response.response_value,
                "dimension_scores": response.dimension_scores,
                "answered_at":      response.answered_at,
                "question_text":    question.question_text,
                "question_type":    question.question_type,
                "options":          question.options,
            }
            for response, question in r.all()
        ]

    # ─────────────────────────────────────────────
    # COMPLÉTION
    # ─────────────────────────────────────────────

    async def mark_completed(
        self,
        db: AsyncSession,
        test_id: int,
        user_id: int,
        scores: Dict[str, Dict[str, float]],
        analysis: Dict[str, str],
    ) -> Optional[PsychologicalTest]:
        """
        Transition in_progress → completed, une seule fois (compare-and-swap).
        Ne commit PAS : les profils sont écrits dans la même transaction.
        None si le test n'est plus en cours (complétion concurrente).
        """
        r = await db.execute(
            update(PsychologicalTest)
            .where(
                PsychologicalTest.id == test_id,
                PsychologicalTest.user_id == user_id,
                PsychologicalTest.status == TestStatus.IN_PROGRESS,
            )
            .values(
                status=TestStatus.COMPLETED,
                disc_scores=scores["disc"],
                big_five_scores=scores["big_five"],
                leadership_scores=scores["leadership"],
                overall_analysis=analysis["overall"],
                recommendations=analysis["recommendations"],
                completed_at=datetime.now(timezone.utc),
            )
            .returning(PsychologicalTest)
            .execution_options(synchronize_session="fetch")
        )
        return r.scalar_one_or_none()

    async def save_profiles(
        self, db: AsyncSession, test_id: int, profiles: List[Dict[str, str]]
    ) -> List[PersonalityProfile]:
        """Écrit les profils et commit la transaction de complétion."""
        db_objs = [PersonalityProfile(test_id=test_id, **p) for p in profiles]
        db.add_all(db_objs)
        await db.commit()
        for obj in db_objs:
            await db.refresh(obj)
        return db_objs

    async def get_profiles(self, db: AsyncSession, test_id: int) -> List[PersonalityProfile]:
        r = await db.execute(
            select(PersonalityProfile)
            .where(PersonalityProfile.test_id == test_id)
            .order_by(PersonalityProfile.id)
        )
        return r.scalars().all()
