# engine/psychometrics/frameworks.py
"""
Catalogue des trois référentiels de traits : données immuables.

Chargé une seule fois à l'import, puis passé en paramètre aux fonctions
de scoring et de profilage (jamais muté).

L'ordre des dimensions est CANONIQUE : il sert de règle de départage
quand deux dimensions ont le même score (la première de la liste gagne).
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from app.shared.enums import Framework as FrameworkName, TestType


@dataclass(frozen=True)
class Framework:
    name: str
    dimensions: Tuple[str, ...]
    # None → secondaire calculé (DISC). Sinon valeur fixe.
    secondary_placeholder: Optional[str] = None

    def has_dimension(self, dimension: str) -> bool:
        return dimension in self.dimensions


DISC = Framework(
    name=FrameworkName.DISC.value,
    dimensions=("D", "I", "S", "C"),
)

BIG_FIVE = Framework(
    name=FrameworkName.BIG_FIVE.value,
    dimensions=("openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism"),
    secondary_placeholder="Balanced",
)

LEADERSHIP = Framework(
    name=FrameworkName.LEADERSHIP.value,
    dimensions=("autocratic", "democratic", "transformational", "transactional", "servant"),
    secondary_placeholder="Adaptive",
)

FRAMEWORKS: Tuple[Framework, ...] = (DISC, BIG_FIVE, LEADERSHIP)

# --- OPTIONS & ÉCHELLE ---
OPTION_ALPHABET: Tuple[str, ...] = ("A", "B", "C", "D")
MAX_OPTION_WEIGHT = 4
NORMALIZATION_FACTOR = 2.5      # moyenne max (4) × 2.5 = 10
SCORE_CEILING = 10.0

# Référentiels couverts par chaque type de test
_TEST_TYPE_FRAMEWORKS: Dict[str, Tuple[str, ...]] = {
    TestType.UNIFIED.value:         (DISC.name, BIG_FIVE.name, LEADERSHIP.name),
    TestType.DISC_ONLY.value:       (DISC.name,),
    TestType.BIG_FIVE_ONLY.value:   (BIG_FIVE.name,),
    TestType.LEADERSHIP_ONLY.value: (LEADERSHIP.name,),
}

TOTAL_QUESTIONS_BY_TEST_TYPE: Dict[str, int] = {
    TestType.UNIFIED.value:         25,
    TestType.DISC_ONLY.value:       10,
    TestType.BIG_FIVE_ONLY.value:   10,
    TestType.LEADERSHIP_ONLY.value: 5,
}


def frameworks_for_test_type(
    test_type: str,
    frameworks: Tuple[Framework, ...] = FRAMEWORKS,
) -> Tuple[Framework, ...]:
    """Référentiels d'un type de test, dans l'ordre canonique."""
    try:
        names = _TEST_TYPE_FRAMEWORKS[str(getattr(test_type, "value", test_type))]
    except KeyError:
        raise ValueError(f"Type de test inconnu : {test_type}")
    return tuple(fw for fw in frameworks if fw.name in names)


def response_value_for(option: str) -> int:
    """Position 1-based de l'option dans l'alphabet (A=1 … D=4)."""
    return OPTION_ALPHABET.index(option) + 1
