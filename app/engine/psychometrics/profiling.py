# engine/psychometrics/profiling.py
"""
Traits dominants, profils de personnalité et textes d'analyse.
ZÉRO accès DB : reçoit les scores normalisés (cf. scoring.py).

Règle de départage : on parcourt les dimensions dans l'ordre canonique
du référentiel et on ne remplace le meilleur candidat que sur un score
STRICTEMENT supérieur → à égalité, la dimension la plus tôt dans l'ordre gagne.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.content.traits import (
    DESCRIPTION_TEMPLATES,
    OVERALL_TEMPLATE,
    RECOMMENDATIONS_TEXT,
    TRAIT_LABELS,
    TRAIT_PROFILES,
    get_description_template,
    get_trait_content,
    get_trait_label,
)
from app.engine.psychometrics.frameworks import BIG_FIVE, DISC, FRAMEWORKS, LEADERSHIP, Framework


def select_dominant_trait(
    scores: Mapping[str, float],
    framework: Framework,
    exclude: Tuple[str, ...] = (),
) -> str:
    best: Optional[str] = None
    for dim in framework.dimensions:
        if dim in exclude:
            continue
        if best is None or scores.get(dim, 0) > scores.get(best, 0):
            best = dim
    if best is None:
        raise ValueError(f"Aucune dimension sélectionnable pour {framework.name}")
    return best


def select_secondary_trait(
    scores: Mapping[str, float],
    framework: Framework,
    primary: str,
) -> str:
    """
    DISC : deuxième score le plus haut (hors primaire).
    Big Five / Leadership : valeur fixe, non calculée.
    """
    if framework.secondary_placeholder is not None:
        return framework.secondary_placeholder
    return select_dominant_trait(scores, framework, exclude=(primary,))


def build_profiles(
    scores: Mapping[str, Mapping[str, float]],
    frameworks: Tuple[Framework, ...] = FRAMEWORKS,
    profiles_table: Mapping = TRAIT_PROFILES,
    templates: Mapping = DESCRIPTION_TEMPLATES,
) -> List[Dict[str, str]]:
    """
    Un profil par référentiel demandé, dans l'ordre canonique.
    Un référentiel sans réponse (scores tous à 0) produit quand même un profil.
    """
    profiles = []
    for framework in frameworks:
        fw_scores = scores.get(framework.name, {})
        primary = select_dominant_trait(fw_scores, framework)
        secondary = select_secondary_trait(fw_scores, framework, primary)
        content = get_trait_content(framework.name, primary, profiles_table)
        template = get_description_template(framework.name, templates)

        profiles.append({
            "profile_type":       framework.name,
            "primary_trait":      primary,
            "secondary_trait":    secondary,
            "description":        template.format(primary=primary, secondary=secondary),
            "strengths":          content["strengths"],
            "development_areas":  content["development_areas"],
            "career_suggestions": content["career_suggestions"],
        })
    return profiles


def generate_analysis(
    scores: Mapping[str, Mapping[str, float]],
    labels: Mapping = TRAIT_LABELS,
) -> Dict[str, str]:
    dominant = {
        fw.name: select_dominant_trait(scores.get(fw.name, {}), fw)
        for fw in (DISC, BIG_FIVE, LEADERSHIP)
    }
    overall = OVERALL_TEMPLATE.format(**{
        name: get_trait_label(name, trait, labels) for name, trait in dominant.items()
    })
    return {"overall": overall, "recommendations": RECOMMENDATIONS_TEXT}


def build_report(test: Any, profiles: List[Any]) -> Dict:
    """
    Rapport détaillé d'un test terminé.
    `test` et `profiles` : objets ORM ou équivalents (lecture d'attributs uniquement).
    """
    stored = {
        DISC.name:       test.disc_scores,
        BIG_FIVE.name:   test.big_five_scores,
        LEADERSHIP.name: test.leadership_scores,
    }

    return {
        "test_info": {
            "id":                 test.id,
            "type":               getattr(test.test_type, "value", test.test_type),
            "completed_at":       test.completed_at,
            "total_questions":    test.total_questions,
            "answered_questions": test.answered_questions,
        },
        "scores": stored,
        "analysis": {
            "overall":         test.overall_analysis,
            "recommendations": test.recommendations,
        },
        "profiles": profiles,
        "summary": {
            f"primary_{fw.name}": select_dominant_trait(stored[fw.name], fw) if stored[fw.name] else None
            for fw in (DISC, BIG_FIVE, LEADERSHIP)
        },
    }
