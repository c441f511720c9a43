"""
Client risk rules.

Flags first (PEP, sanctions, adverse media, identification reluctance), then
age of the person or of the entity, then relationship length. The
established-relationship rule is the only one that lowers a score.
"""
from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..models.request import ClientProfile
from ..models.result import RiskScore


# (attribute, points, justification)
FLAG_RULES: tuple[tuple[str, int, str], ...] = (
    ("politically_exposed", 4, "Personne politiquement exposée (PEP)"),
    ("sanctioned", 4, "Personne sous sanctions internationales"),
    ("adverse_media", 5, "Notoriété défavorable du client en sources ouvertes (médias)"),
    ("identification_reluctance", 4, "Réticence ou refus de dévoiler l'identité du représenté"),
)

MINOR_AGE = 18
ELDERLY_AGE = 70
DAYS_PER_YEAR = 365

NEW_RELATIONSHIP_YEARS = 1
ESTABLISHED_RELATIONSHIP_YEARS = 5


class ClientEvaluator:
    """
    Scores a ClientProfile.

    Args:
        today: Callable returning the reference date for age computations.
            Defaults to the current date.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or date.today

    def evaluate(self, client: ClientProfile) -> RiskScore:
        score = 0
        justifications: list[str] = []
        reference = self._today()

        for attribute, points, text in FLAG_RULES:
            if getattr(client, attribute):
                score += points
                justifications.append(text)

        if client.is_natural_person and client.birth_year:
            age = reference.year - client.birth_year
            if age < MINOR_AGE:
                score += 3
                justifications.append("Client mineur (risque de tutelle/curatelle)")
            elif age >= ELDERLY_AGE:
                score += 2
                justifications.append("Client âgé (risque d'abus de faiblesse)")

        if client.is_legal_person and client.incorporation_date is not None:
            entity_age = (reference - client.incorporation_date).days / DAYS_PER_YEAR
            if entity_age < 1:
                score += 3
                justifications.append("Société récemment créée (<1 an)")
            elif entity_age < 2:
                score += 2
                justifications.append("Société nouvellement créée (<2 ans)")

        if client.relationship_years < NEW_RELATIONSHIP_YEARS:
            score += 1
            justifications.append("Nouvelle relation commerciale")
        elif client.relationship_years > ESTABLISHED_RELATIONSHIP_YEARS:
            score -= 1
            justifications.append("Relation commerciale établie (>5 ans)")

        return RiskScore.create(score, justifications)
