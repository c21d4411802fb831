# tests/modules/assessment/test_service.py
"""
Tests unitaires pour modules.assessment.service.AssessmentService

Couverture :
    start_test() :
        - total_questions dérivé du type de test
    get_questions() :
        - Test unifié → aucun filtre de type
        - Test *_only → filtre sur le référentiel
        - Test introuvable → None
    submit_response() :
        - Test introuvable / terminé → LookupError
        - Question introuvable → LookupError
        - Copie de scoring_weights[option] + response_value
        - Option sans poids → dimension_scores vide
        - Re-soumission : une seule réponse, la dernière gagne
        - question_number incohérent, question inactive ou hors référentiel → refus
    complete_test() :
        - Verrou FOR UPDATE pris avant la lecture des réponses
        - Scores, analyse, trois profils persistés
        - disc_only → un seul profil
        - Test introuvable / déjà terminé → LookupError, rien n'est écrit
        - Complétion concurrente perdue → rollback + LookupError
    get_report() :
        - Test non terminé → None
        - Rapport avec résumé
"""
import pytest
from unittest.mock import AsyncMock

from app.modules.assessment.service import AssessmentService
from app.shared import enums
from tests.conftest import (
    make_async_db,
    make_completed_test,
    make_profile,
    make_question,
    make_response,
    make_test,
    make_user,
)

pytestmark = pytest.mark.service

service = AssessmentService()

REPO = "app.modules.assessment.service.repo"


class _InMemoryResponses:
    """Upsert (test_id, question_number) en mémoire, comme la contrainte unique en base."""

    def __init__(self):
        self.rows = {}

    async def upsert(self, db, data):
        key = (data["test_id"], data["question_number"])
        created = key not in self.rows
        self.rows[key] = make_response(id=len(self.rows) + 1, **data)
        return self.rows[key], created


# ── start_test ────────────────────────────────────────────────────────────────

class TestStartTest:
    @pytest.mark.parametrize("test_type, total", [
        ("unified", 25),
        ("disc_only", 10),
        ("big_five_only", 10),
        ("leadership_only", 5),
    ])
    async def test_total_questions_selon_le_type(self, mocker, test_type, total):
        create = mocker.patch(f"{REPO}.create_test", AsyncMock(return_value=make_test()))
        await service.start_test(make_async_db(), make_user(), test_type)

        kwargs = create.call_args.kwargs
        assert kwargs["test_type"] == test_type
        assert kwargs["total_questions"] == total
        assert kwargs["user_id"] == 1

    async def test_type_inconnu_leve_value_error(self, mocker):
        mocker.patch(f"{REPO}.create_test", AsyncMock())
        with pytest.raises(ValueError):
            await service.start_test(make_async_db(), make_user(), "cognitive")


# ── list_tests ────────────────────────────────────────────────────────────────

class TestListTests:
    async def test_ajoute_profiles_count(self, mocker):
        mocker.patch(
            f"{REPO}.list_tests_for_user",
            AsyncMock(return_value=[(make_completed_test(id=2), 3), (make_test(id=1), 0)]),
        )
        result = await service.list_tests(make_async_db(), make_user(), status=None, limit=10)
        assert [r["id"] for r in result] == [2, 1]
        assert [r["profiles_count"] for r in result] == [3, 0]


# ── get_questions ─────────────────────────────────────────────────────────────

class TestGetQuestions:
    async def test_test_unifie_sans_filtre(self, mocker):
        mocker.patch(f"{REPO}.get_test_for_user", AsyncMock(return_value=make_test()))
        get_active = mocker.patch(
            f"{REPO}.get_active_questions",
            AsyncMock(return_value=[make_question(id=1), make_question(id=2)]),
        )
        result = await service.get_questions(make_async_db(), make_user(), 1)

        assert get_active.call_args.args[1] is None
        assert result["total_questions"] == 2
        assert result["test_type"] == "unified"

    async def test_test_disc_only_filtre(self, mocker):
        mocker.patch(
            f"{REPO}.get_test_for_user",
            AsyncMock(return_value=make_test(test_type="disc_only", total_questions=10)),
        )
        get_active = mocker.patch(f"{REPO}.get_active_questions", AsyncMock(return_value=[]))
        await service.get_questions(make_async_db(), make_user(), 1)

        assert get_active.call_args.args[1] == ["disc"]

    async def test_test_introuvable_none(self, mocker):
        mocker.patch(f"{REPO}.get_test_for_user", AsyncMock(return_value=None))
        assert await service.get_questions(make_async_db(), make_user(), 99) is None


# ── submit_response ───────────────────────────────────────────────────────────

class TestSubmitResponse:
    async def test_test_introuvable_ou_termine(self, mocker):
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=None))
        upsert = mocker.patch(f"{REPO}.upsert_response", AsyncMock())

        with pytest.raises(LookupError, match="TEST_NOT_FOUND_OR_COMPLETED"):
            await service.submit_response(make_async_db(), make_user(), 1, 1, 1, "A")
        upsert.assert_not_called()

    async def test_question_introuvable(self, mocker):
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=None))

        with pytest.raises(LookupError, match="QUESTION_NOT_FOUND"):
            await service.submit_response(make_async_db(), make_user(), 1, 999, 1, "A")

    async def test_copie_des_poids_de_l_option(self, mocker):
        question = make_question()
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=question))
        upsert = mocker.patch(
            f"{REPO}.upsert_response", AsyncMock(return_value=(make_response(), True))
        )

        _, created = await service.submit_response(make_async_db(), make_user(), 1, 1, 1, "B")

        data = upsert.call_args.args[1]
        assert created is True
        assert data["selected_option"] == "B"
        assert data["response_value"] == 2
        assert data["dimension_scores"] == {"I": 4, "S": 1}
        # Copie : modifier la question ensuite ne touche pas la réponse
        question.scoring_weights["B"]["I"] = 0
        assert data["dimension_scores"]["I"] == 4

    async def test_option_sans_poids_dimension_scores_vide(self, mocker):
        question = make_question(scoring_weights={"A": {"D": 4}})
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=question))
        upsert = mocker.patch(
            f"{REPO}.upsert_response", AsyncMock(return_value=(make_response(), True))
        )

        await service.submit_response(make_async_db(), make_user(), 1, 1, 1, "D")
        assert upsert.call_args.args[1]["dimension_scores"] == {}
        assert upsert.call_args.args[1]["response_value"] == 4

    async def test_resoumission_derniere_reponse_gagne(self, mocker):
        store = _InMemoryResponses()
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=make_question()))
        mocker.patch(f"{REPO}.upsert_response", AsyncMock(side_effect=store.upsert))

        db, user = make_async_db(), make_user()
        _, first = await service.submit_response(db, user, 1, 1, 1, "A")
        _, second = await service.submit_response(db, user, 1, 1, 1, "C")

        assert (first, second) == (True, False)
        assert len(store.rows) == 1
        assert store.rows[(1, 1)].selected_option == "C"
        assert store.rows[(1, 1)].dimension_scores == {"S": 4}

    async def test_numero_de_question_incoherent_refuse(self, mocker):
        """Une même question ne peut pas être enregistrée sous plusieurs numéros."""
        store = _InMemoryResponses()
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=make_question(question_number=1)))
        mocker.patch(f"{REPO}.upsert_response", AsyncMock(side_effect=store.upsert))

        db, user = make_async_db(), make_user()
        await service.submit_response(db, user, 1, 1, 1, "A")
        for number in (2, 3):
            with pytest.raises(ValueError, match="QUESTION_NUMBER_MISMATCH"):
                await service.submit_response(db, user, 1, 1, number, "A")

        assert list(store.rows) == [(1, 1)]

    async def test_question_inactive_refusee(self, mocker):
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=make_question(is_active=False)))
        upsert = mocker.patch(f"{REPO}.upsert_response", AsyncMock())

        with pytest.raises(LookupError, match="QUESTION_NOT_FOUND"):
            await service.submit_response(make_async_db(), make_user(), 1, 1, 1, "A")
        upsert.assert_not_called()

    async def test_question_hors_referentiel_du_test_refusee(self, mocker):
        test = make_test(test_type="big_five_only", total_questions=10)
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=test))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=make_question(question_type="disc")))
        upsert = mocker.patch(f"{REPO}.upsert_response", AsyncMock())

        with pytest.raises(ValueError, match="QUESTION_NOT_IN_TEST"):
            await service.submit_response(make_async_db(), make_user(), 1, 1, 1, "A")
        upsert.assert_not_called()

    async def test_question_du_referentiel_acceptee_dans_un_test_dedie(self, mocker):
        test = make_test(test_type="big_five_only", total_questions=10)
        question = make_question(
            id=11, question_number=11, question_type="big_five", dimension="openness",
            scoring_weights={"A": {"openness": 4}},
        )
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=test))
        mocker.patch(f"{REPO}.get_question", AsyncMock(return_value=question))
        upsert = mocker.patch(
            f"{REPO}.upsert_response", AsyncMock(return_value=(make_response(), True))
        )

        await service.submit_response(make_async_db(), make_user(), 1, 11, 11, "A")
        assert upsert.call_args.args[1]["dimension_scores"] == {"openness": 4}


# ── complete_test ─────────────────────────────────────────────────────────────

def _patch_completion(mocker, test, rows, completed=None):
    mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=test))
    mocker.patch(f"{REPO}.get_scoring_rows", AsyncMock(return_value=rows))
    mark = mocker.patch(
        f"{REPO}.mark_completed",
        AsyncMock(return_value=completed if completed is not None else make_completed_test()),
    )
    save = mocker.patch(
        f"{REPO}.save_profiles",
        AsyncMock(side_effect=lambda db, test_id, profiles: [make_profile(**p) for p in profiles]),
    )
    return mark, save


class TestCompleteTest:
    async def test_scores_analyse_et_profils_persistes(self, mocker):
        rows = [({"D": 4, "I": 1}, "disc"), ({"openness": 3}, "big_five"), ({"servant": 4}, "leadership")]
        mark, save = _patch_completion(mocker, make_test(), rows)

        result = await service.complete_test(make_async_db(), make_user(), 1)

        assert result["scores"]["disc"] == {"D": 10.0, "I": 2.5, "S": 0, "C": 0}
        assert result["scores"]["big_five"]["openness"] == 7.5
        assert result["scores"]["leadership"]["servant"] == 10.0
        assert "Dominant" in result["analysis"]["overall"]

        scores_arg = mark.call_args.args[3]
        assert scores_arg == result["scores"]

        profiles = save.call_args.args[2]
        assert [p["profile_type"] for p in profiles] == ["disc", "big_five", "leadership"]
        assert profiles[0]["primary_trait"] == "D"
        assert profiles[0]["secondary_trait"] == "I"
        assert profiles[2]["primary_trait"] == "servant"
        assert len(result["profiles"]) == 3

    async def test_disc_only_un_seul_profil(self, mocker):
        test = make_test(test_type="disc_only", total_questions=10)
        _, save = _patch_completion(mocker, test, [({"C": 4}, "disc")])

        await service.complete_test(make_async_db(), make_user(), 1)

        profiles = save.call_args.args[2]
        assert len(profiles) == 1
        assert profiles[0]["primary_trait"] == "C"

    async def test_sans_reponse_profils_quand_meme(self, mocker):
        _, save = _patch_completion(mocker, make_test(), [])
        result = await service.complete_test(make_async_db(), make_user(), 1)

        assert result["scores"]["disc"] == {"D": 0, "I": 0, "S": 0, "C": 0}
        assert len(save.call_args.args[2]) == 3

    async def test_verrou_pris_avant_lecture_des_reponses(self, mocker):
        """Une soumission concurrente ne peut pas s'intercaler entre lecture et transition."""
        calls = []
        lock = mocker.patch(
            f"{REPO}.lock_in_progress_test",
            AsyncMock(side_effect=lambda *a: calls.append("lock") or make_test()),
        )
        mocker.patch(
            f"{REPO}.get_scoring_rows",
            AsyncMock(side_effect=lambda *a: calls.append("rows") or []),
        )
        mocker.patch(f"{REPO}.mark_completed", AsyncMock(return_value=make_completed_test()))
        mocker.patch(f"{REPO}.save_profiles", AsyncMock(return_value=[]))

        await service.complete_test(make_async_db(), make_user(), 1)

        lock.assert_awaited_once()
        assert lock.call_args.args[1:] == (1, 1)
        assert calls == ["lock", "rows"]

    async def test_test_deja_termine_rien_n_est_ecrit(self, mocker):
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=None))
        mark = mocker.patch(f"{REPO}.mark_completed", AsyncMock())
        save = mocker.patch(f"{REPO}.save_profiles", AsyncMock())

        with pytest.raises(LookupError, match="TEST_NOT_FOUND_OR_COMPLETED"):
            await service.complete_test(make_async_db(), make_user(), 1)
        mark.assert_not_called()
        save.assert_not_called()

    async def test_completion_concurrente_perdue(self, mocker):
        mocker.patch(f"{REPO}.lock_in_progress_test", AsyncMock(return_value=make_test()))
        mocker.patch(f"{REPO}.get_scoring_rows", AsyncMock(return_value=[]))
        mocker.patch(f"{REPO}.mark_completed", AsyncMock(return_value=None))
        save = mocker.patch(f"{REPO}.save_profiles", AsyncMock())
        db = make_async_db()

        with pytest.raises(LookupError):
            await service.complete_test(db, make_user(), 1)
        db.rollback.assert_awaited_once()
        save.assert_not_called()


# ── get_report ────────────────────────────────────────────────────────────────

class TestGetReport:
    async def test_test_non_termine_none(self, mocker):
        get_test = mocker.patch(f"{REPO}.get_test_for_user", AsyncMock(return_value=None))
        assert await service.get_report(make_async_db(), make_user(), 1) is None
        assert get_test.call_args.kwargs["status"] == enums.TestStatus.COMPLETED

    async def test_rapport_avec_resume(self, mocker):
        mocker.patch(f"{REPO}.get_test_for_user", AsyncMock(return_value=make_completed_test()))
        mocker.patch(f"{REPO}.get_profiles", AsyncMock(return_value=[make_profile()]))

        report = await service.get_report(make_async_db(), make_user(), 1)
        assert report["summary"]["primary_disc"] == "D"
        assert report["summary"]["primary_leadership"] == "transformational"
        assert len(report["profiles"]) == 1
