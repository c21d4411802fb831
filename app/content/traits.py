# content/traits.py
"""
Textes descriptifs des traits dominants, par référentiel.

Tables figées (MappingProxyType) : chargées à l'import, jamais modifiées.
Clé : (référentiel, trait). Une clé absente signifie que le catalogue de
questions a dérivé par rapport aux référentiels → UnknownTraitError.
"""
from types import MappingProxyType
from typing import Mapping


class UnknownTraitError(RuntimeError):
    """Trait sans texte associé - erreur de programmation, pas d'utilisateur."""

    def __init__(self, framework: str, trait: str):
        self.framework = framework
        self.trait = trait
        super().__init__(f"Aucun contenu pour le trait '{trait}' du référentiel '{framework}'")


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({k: MappingProxyType(v) for k, v in table.items()})


# ── Libellés courts (utilisés dans l'analyse globale) ─────────────────────────

TRAIT_LABELS = _freeze({
    "disc": {
        "D": "Dominant - orienté résultats, direct et déterminé",
        "I": "Influent - sociable, optimiste et persuasif",
        "S": "Stable - patient, loyal et coopératif",
        "C": "Consciencieux - analytique, précis et méthodique",
    },
    "big_five": {
        "openness":          "Ouverture élevée - créatif et ouvert aux nouvelles expériences",
        "conscientiousness": "Conscienciosité élevée - organisé et fiable",
        "extraversion":      "Extraversion élevée - sociable et énergique",
        "agreeableness":     "Agréabilité élevée - coopératif et bienveillant",
        "neuroticism":       "Névrosisme élevé - sensible au stress",
    },
    "leadership": {
        "autocratic":       "Autocratique - décide de façon indépendante",
        "democratic":       "Démocratique - implique l'équipe dans les décisions",
        "transformational": "Transformationnel - inspire et motive l'équipe",
        "transactional":    "Transactionnel - pilote par objectifs et récompenses",
        "servant":          "Serviteur - priorise le développement de l'équipe",
    },
})


# ── Contenu des profils ───────────────────────────────────────────────────────

TRAIT_PROFILES = _freeze({
    "disc": {
        "D": {
            "strengths": "Détermination, orientation résultats, leadership naturel",
            "development_areas": "Développer la patience et l'écoute active",
            "career_suggestions": "Postes de direction, gestion de projets, vente",
        },
        "I": {
            "strengths": "Communication, enthousiasme, capacité à fédérer",
            "development_areas": "Renforcer le suivi et la rigueur dans l'exécution",
            "career_suggestions": "Relations publiques, marketing, formation, commercial",
        },
        "S": {
            "strengths": "Fiabilité, esprit d'équipe, constance",
            "development_areas": "Gagner en aisance face au changement et aux conflits",
            "career_suggestions": "Ressources humaines, support client, coordination",
        },
        "C": {
            "strengths": "Précision, sens de l'analyse, exigence de qualité",
            "development_areas": "Accepter l'imperfection et accélérer la prise de décision",
            "career_suggestions": "Analyse de données, audit, ingénierie, qualité",
        },
    },
    "big_five": {
        "openness": {
            "strengths": "Créativité, curiosité intellectuelle, adaptabilité",
            "development_areas": "Structurer les idées pour les mener à terme",
            "career_suggestions": "Innovation, design, recherche, conseil",
        },
        "conscientiousness": {
            "strengths": "Organisation, sens des responsabilités, persévérance",
            "development_areas": "Gagner en souplesse face à l'imprévu",
            "career_suggestions": "Gestion de projets, finance, opérations",
        },
        "extraversion": {
            "strengths": "Énergie, aisance relationnelle, prise de parole",
            "development_areas": "Laisser davantage d'espace à l'écoute",
            "career_suggestions": "Vente, animation d'équipe, événementiel",
        },
        "agreeableness": {
            "strengths": "Coopération, empathie, confiance envers autrui",
            "development_areas": "Oser le désaccord et affirmer ses positions",
            "career_suggestions": "Accompagnement, santé, ressources humaines",
        },
        "neuroticism": {
            "strengths": "Vigilance, sensibilité aux signaux faibles",
            "development_areas": "Développer des stratégies de gestion du stress",
            "career_suggestions": "Environnements stables et bien structurés",
        },
    },
    "leadership": {
        "autocratic": {
            "strengths": "Décision rapide, clarté des directives",
            "development_areas": "Impliquer davantage l'équipe dans les choix",
            "career_suggestions": "Gestion de crise, opérations à forte contrainte",
        },
        "democratic": {
            "strengths": "Écoute, construction du consensus, engagement collectif",
            "development_areas": "Trancher plus vite quand le temps presse",
            "career_suggestions": "Management d'équipes pluridisciplinaires",
        },
        "transformational": {
            "strengths": "Vision, inspiration, conduite du changement",
            "development_areas": "Ancrer la vision dans un suivi opérationnel",
            "career_suggestions": "Direction générale, transformation, innovation",
        },
        "transactional": {
            "strengths": "Pilotage par objectifs, équité, rigueur du suivi",
            "development_areas": "Nourrir la motivation au-delà des récompenses",
            "career_suggestions": "Management commercial, production, logistique",
        },
        "servant": {
            "strengths": "Développement des personnes, bienveillance, confiance",
            "development_areas": "Poser des limites et tenir les exigences de résultat",
            "career_suggestions": "Coaching, management de proximité, éducation",
        },
    },
})

DESCRIPTION_TEMPLATES = MappingProxyType({
    "disc":       "Profil {primary} avec des traits {secondary}",
    "big_five":   "Niveau élevé de {primary}",
    "leadership": "Style de leadership {primary}",
})

OVERALL_TEMPLATE = (
    "Votre profil présente les caractéristiques suivantes : {disc}, {big_five} "
    "et un style de leadership {leadership}."
)

RECOMMENDATIONS_TEXT = (
    "Au vu de votre profil, nous vous recommandons de développer des compétences "
    "complémentaires et de rechercher les opportunités qui valorisent vos points forts naturels."
)


def get_trait_label(framework: str, trait: str, labels: Mapping = TRAIT_LABELS) -> str:
    try:
        return labels[framework][trait]
    except KeyError:
        raise UnknownTraitError(framework, trait)


def get_trait_content(framework: str, trait: str, profiles: Mapping = TRAIT_PROFILES) -> Mapping:
    try:
        return profiles[framework][trait]
    except KeyError:
        raise UnknownTraitError(framework, trait)


def get_description_template(framework: str, templates: Mapping = DESCRIPTION_TEMPLATES) -> str:
    try:
        return templates[framework]
    except KeyError:
        raise UnknownTraitError(framework, "*")
