"""
Total score classification.

Inclusive upper bounds, integer thresholds only:

    total <= 3   FAIBLE
    total <= 6   MODERE
    total <= 10  ELEVE
    otherwise    TRES_ELEVE
"""
from __future__ import annotations

from ..models.enums import RiskLevel


RISK_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (3, RiskLevel.FAIBLE),
    (6, RiskLevel.MODERE),
    (10, RiskLevel.ELEVE),
)


def classify_total(total: int) -> RiskLevel:
    for upper_bound, level in RISK_THRESHOLDS:
        if total <= upper_bound:
            return level
    return RiskLevel.TRES_ELEVE
