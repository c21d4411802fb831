# engine/psychometrics/scoring.py
"""
Calcul des scores DISC / Big Five / Leadership. ZÉRO accès DB.
Reçoit les réponses déjà hydratées, retourne les scores normalisés 0-10.

Pipeline :
    (dimension_scores, question_type)*  →  aggregate_answers()  →  sommes + compteurs
                                        →  normalize_scores()   →  {framework: {dim: 0-10}}

Appelé par : modules/assessment/service.py
"""
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any, Dict, Iterable, Mapping, Tuple

from app.engine.psychometrics.frameworks import FRAMEWORKS, NORMALIZATION_FACTOR, Framework

ScoreMap = Dict[str, Dict[str, float]]
CountMap = Dict[str, Dict[str, int]]


def aggregate_answers(
    answers: Iterable[Tuple[Any, str]],
    frameworks: Tuple[Framework, ...] = FRAMEWORKS,
) -> Tuple[ScoreMap, CountMap]:
    """
    Somme les poids par (référentiel, dimension) et compte les réponses.

    Chaque dimension connue est pré-remplie à 0/0, même jamais observée.
    Types de question inconnus, dimensions hors référentiel et poids
    non numériques sont ignorés (tolère la dérive du catalogue).
    """
    by_name = {fw.name: fw for fw in frameworks}
    sums: ScoreMap = {fw.name: {dim: 0 for dim in fw.dimensions} for fw in frameworks}
    counts: CountMap = {fw.name: {dim: 0 for dim in fw.dimensions} for fw in frameworks}

    for dimension_scores, question_type in answers:
        framework = by_name.get(question_type)
        if framework is None or not isinstance(dimension_scores, Mapping):
            continue

        for dimension, weight in dimension_scores.items():
            if not framework.has_dimension(dimension):
                continue
            if isinstance(weight, bool) or not isinstance(weight, Real):
                continue
            sums[framework.name][dimension] += weight
            counts[framework.name][dimension] += 1

    return sums, counts


def normalize_scores(
    sums: ScoreMap,
    counts: CountMap,
    factor: float = NORMALIZATION_FACTOR,
) -> ScoreMap:
    """
    Moyenne par dimension ramenée sur 0-10 : round1(somme / n × 2.5).
    Une dimension sans réponse reste à 0 (jamais None).
    """
    normalized: ScoreMap = {}
    for framework_name, dims in sums.items():
        normalized[framework_name] = {}
        for dim, total in dims.items():
            n = counts.get(framework_name, {}).get(dim, 0)
            normalized[framework_name][dim] = round_half_up(total / n * factor) if n > 0 else 0
    return normalized


def round_half_up(value: float, digits: int = 1) -> float:
    """Arrondi commercial (0.25 → 0.3), contrairement au round() bancaire de Python."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_final_scores(
    answers: Iterable[Tuple[Any, str]],
    frameworks: Tuple[Framework, ...] = FRAMEWORKS,
) -> ScoreMap:
    """
    Point d'entrée du service : agrégation + normalisation.

    Retour :
    {
        "disc":       {"D": 10.0, "I": 2.5, "S": 0, "C": 0},
        "big_five":   {"openness": 0, ...},
        "leadership": {"autocratic": 0, ...}
    }
    """
    sums, counts = aggregate_answers(answers, frameworks)
    return normalize_scores(sums, counts)
