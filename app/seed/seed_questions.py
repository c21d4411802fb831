# seed/seed_questions.py
"""
Seed du catalogue de questions du test unifié.

Contenu :
    25 TestQuestion (options A-D, poids 0-4 par dimension) :
        #1-10  : DISC        (D, I, S, C)
        #11-20 : Big Five    (openness, conscientiousness, extraversion, agreeableness, neuroticism)
        #21-25 : Leadership  (autocratic, democratic, transformational, transactional, servant)

Idempotent : une question dont le question_number existe déjà est ignorée.

Usage :
    python -m app.seed.seed_questions
"""
import asyncio
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import SessionLocal
from app.shared.models import TestQuestion


def _q(number: int, qtype: str, dimension: str, text: str, options: List[tuple]) -> Dict:
    """options : [(label, texte, {dimension: poids}), ...]"""
    return {
        "question_number": number,
        "question_type":   qtype,
        "dimension":       dimension,
        "question_text":   text,
        "options":         [{"label": label, "text": t} for label, t, _ in options],
        "scoring_weights": {label: weights for label, _, weights in options},
    }


# ── DISC ───────────────────────────────────────────────────────────────────────
# Chaque option pèse surtout sur une dimension (4) avec une composante secondaire (1).

DISC_QUESTIONS = [
    _q(1, "disc", "D", "Face à un problème urgent dans l'équipe, vous…", [
        ("A", "prenez immédiatement les choses en main", {"D": 4, "I": 1}),
        ("B", "réunissez tout le monde pour en parler", {"I": 4, "S": 1}),
        ("C", "rassurez et soutenez vos collègues", {"S": 4, "C": 1}),
        ("D", "analysez les causes avant d'agir", {"C": 4, "D": 1}),
    ]),
    _q(2, "disc", "I", "Dans une réunion, on vous reconnaît surtout pour…", [
        ("A", "votre capacité à trancher", {"D": 4}),
        ("B", "votre enthousiasme communicatif", {"I": 4}),
        ("C", "votre écoute", {"S": 4}),
        ("D", "la précision de vos remarques", {"C": 4}),
    ]),
    _q(3, "disc", "S", "Un changement d'organisation est annoncé. Votre première réaction :", [
        ("A", "y voir une occasion de prendre plus de responsabilités", {"D": 4, "I": 1}),
        ("B", "en parler avec enthousiasme autour de vous", {"I": 4}),
        ("C", "vous inquiéter de l'impact sur l'équipe", {"S": 4}),
        ("D", "demander les détails et le calendrier", {"C": 4, "S": 1}),
    ]),
    _q(4, "disc", "C", "Pour rendre un dossier important, vous privilégiez…", [
        ("A", "la rapidité de livraison", {"D": 4}),
        ("B", "une présentation qui capte l'attention", {"I": 4}),
        ("C", "l'avis de ceux qui l'utiliseront", {"S": 4, "I": 1}),
        ("D", "l'exactitude de chaque chiffre", {"C": 4}),
    ]),
    _q(5, "disc", "D", "Ce qui vous motive le plus au travail :", [
        ("A", "relever des défis ambitieux", {"D": 4}),
        ("B", "être reconnu par les autres", {"I": 4}),
        ("C", "un climat stable et bienveillant", {"S": 4}),
        ("D", "un travail bien fait et maîtrisé", {"C": 4}),
    ]),
    _q(6, "disc", "I", "Lors d'un événement professionnel, vous…", [
        ("A", "allez droit vers les décideurs", {"D": 4, "I": 1}),
        ("B", "faites connaissance avec un maximum de personnes", {"I": 4}),
        ("C", "restez avec les personnes que vous connaissez", {"S": 4}),
        ("D", "observez avant de vous engager", {"C": 4}),
    ]),
    _q(7, "disc", "S", "Un collègue est en difficulté sur un projet. Vous…", [
        ("A", "reprenez le sujet pour tenir l'échéance", {"D": 4}),
        ("B", "lui remontez le moral", {"I": 4, "S": 1}),
        ("C", "proposez de l'aider durablement", {"S": 4}),
        ("D", "l'aidez à structurer sa méthode", {"C": 4, "S": 1}),
    ]),
    _q(8, "disc", "C", "Devant une décision importante, vous avez besoin…", [
        ("A", "de peu d'informations pour trancher", {"D": 4}),
        ("B", "de l'avis enthousiaste de votre entourage", {"I": 4}),
        ("C", "de temps pour vous sentir à l'aise", {"S": 4}),
        ("D", "de données complètes et vérifiées", {"C": 4}),
    ]),
    _q(9, "disc", "D", "En cas de désaccord avec votre responsable, vous…", [
        ("A", "défendez fermement votre position", {"D": 4}),
        ("B", "cherchez à le convaincre avec des arguments vivants", {"I": 4, "D": 1}),
        ("C", "vous alignez pour préserver la relation", {"S": 4}),
        ("D", "préparez une argumentation documentée", {"C": 4}),
    ]),
    _q(10, "disc", "S", "Votre environnement de travail idéal :", [
        ("A", "rapide et compétitif", {"D": 4}),
        ("B", "animé et convivial", {"I": 4}),
        ("C", "calme et prévisible", {"S": 4}),
        ("D", "structuré et rigoureux", {"C": 4}),
    ]),
]

# ── BIG FIVE ───────────────────────────────────────────────────────────────────
# Échelle d'accord : A = tout à fait (4) … D = pas du tout (1).

def _likert(number: int, trait: str, text: str) -> Dict:
    return _q(number, "big_five", trait, text, [
        ("A", "Tout à fait d'accord", {trait: 4}),
        ("B", "Plutôt d'accord", {trait: 3}),
        ("C", "Plutôt pas d'accord", {trait: 2}),
        ("D", "Pas du tout d'accord", {trait: 1}),
    ])


BIG_FIVE_QUESTIONS = [
    _likert(11, "openness", "Je suis curieux des nouvelles méthodes de travail."),
    _likert(12, "openness", "J'apprécie les discussions sur des idées abstraites."),
    _likert(13, "conscientiousness", "Je planifie mes tâches à l'avance."),
    _likert(14, "conscientiousness", "Je respecte systématiquement les délais fixés."),
    _likert(15, "extraversion", "Je prends facilement la parole en groupe."),
    _likert(16, "extraversion", "Les interactions sociales me donnent de l'énergie."),
    _likert(17, "agreeableness", "Je tiens compte des besoins des autres avant de décider."),
    _likert(18, "agreeableness", "Je cherche à maintenir une atmosphère harmonieuse."),
    _likert(19, "neuroticism", "Je me sens souvent tendu sans raison apparente."),
    _likert(20, "neuroticism", "Les situations stressantes me déstabilisent durablement."),
]

# ── LEADERSHIP ─────────────────────────────────────────────────────────────────

LEADERSHIP_QUESTIONS = [
    _q(21, "leadership", "autocratic", "Une décision urgente doit être prise pour l'équipe. Vous…", [
        ("A", "décidez seul et communiquez la décision", {"autocratic": 4}),
        ("B", "consultez rapidement l'équipe puis tranchez", {"democratic": 4}),
        ("C", "expliquez la vision qui guide votre choix", {"transformational": 4}),
        ("D", "appliquez la règle prévue pour ce cas", {"transactional": 4}),
    ]),
    _q(22, "leadership", "democratic", "Pour fixer les objectifs de l'année, vous…", [
        ("A", "les définissez et les imposez", {"autocratic": 4}),
        ("B", "les construisez avec l'équipe", {"democratic": 4, "servant": 1}),
        ("C", "partez d'une ambition qui donne du sens", {"transformational": 4}),
        ("D", "les liez à un système de primes clair", {"transactional": 4}),
    ]),
    _q(23, "leadership", "transformational", "Un membre de l'équipe perd sa motivation. Vous…", [
        ("A", "lui rappelez vos attentes", {"autocratic": 4, "transactional": 1}),
        ("B", "en discutez avec lui pour trouver une solution", {"democratic": 4}),
        ("C", "lui montrez en quoi son travail compte", {"transformational": 4}),
        ("D", "l'aidez à retrouver ce qui le fait progresser", {"servant": 4}),
    ]),
    _q(24, "leadership", "transactional", "Un objectif est atteint. Votre réaction :", [
        ("A", "fixer immédiatement le suivant", {"autocratic": 4}),
        ("B", "faire le bilan collectivement", {"democratic": 4}),
        ("C", "célébrer et relancer une nouvelle ambition", {"transformational": 4}),
        ("D", "récompenser selon les engagements pris", {"transactional": 4}),
    ]),
    _q(25, "leadership", "servant", "Votre rôle de manager consiste avant tout à…", [
        ("A", "garantir que les consignes sont suivies", {"autocratic": 4}),
        ("B", "faire émerger les décisions du groupe", {"democratic": 4}),
        ("C", "inspirer le changement", {"transformational": 4}),
        ("D", "lever les obstacles pour que chacun réussisse", {"servant": 4}),
    ]),
]

ALL_QUESTIONS = DISC_QUESTIONS + BIG_FIVE_QUESTIONS + LEADERSHIP_QUESTIONS


# ── Seed principal ─────────────────────────────────────────────────────────────

async def seed(db: AsyncSession) -> None:
    print("🧪 Seed catalogue de questions démarré...")

    r = await db.execute(select(TestQuestion.question_number))
    existing = set(r.scalars().all())

    created = 0
    for data in ALL_QUESTIONS:
        if data["question_number"] in existing:
            continue
        db.add(TestQuestion(is_active=True, **data))
        created += 1
    await db.commit()

    print(f"  ✓ Questions : {created} créées, {len(existing)} déjà présentes")
    print("✅ Seed catalogue terminé.")


async def main():
    async with SessionLocal() as db:
        await seed(db)


if __name__ == "__main__":
    asyncio.run(main())
