"""
Geographic risk rules.

Residence and account domicile are each assessed on their own, so a client
living and banking in the same listed country is counted twice. Rules are
additive and applied in order: residence, account, cross-border, distance.
"""
from __future__ import annotations

from typing import Optional

from ..models.enums import CountryTier
from ..models.request import GeographicProfile
from ..models.result import RiskScore
from ..registry.registry import RiskRegistry


CATCHMENT_RADIUS_KM = 100
CROSS_BORDER_POINTS = 2
OUT_OF_AREA_POINTS = 1

# (tier, aggravated) -> (points, list description)
_COUNTRY_POINTS: dict[tuple[CountryTier, bool], tuple[int, str]] = {
    (CountryTier.VERY_HIGH, True): (5, "liste noire GAFI + UE"),
    (CountryTier.VERY_HIGH, False): (4, "liste noire GAFI"),
    (CountryTier.HIGH, True): (4, "pays à haut risque GAFI + UE"),
    (CountryTier.HIGH, False): (3, "pays à haut risque GAFI"),
}


class GeographicEvaluator:
    """Scores a GeographicProfile against a country registry."""

    def __init__(self, registry: RiskRegistry):
        self.registry = registry

    def _country_points(self, country: str) -> Optional[tuple[int, str]]:
        tier = self.registry.country_tier(country)
        if tier == CountryTier.STANDARD:
            return None
        return _COUNTRY_POINTS[(tier, self.registry.is_aggravated(country))]

    def evaluate(self, geo: GeographicProfile) -> RiskScore:
        score = 0
        justifications: list[str] = []

        hit = self._country_points(geo.residence_country)
        if hit:
            points, listing = hit
            score += points
            justifications.append(f"Client résident en {geo.residence_country} ({listing})")

        hit = self._country_points(geo.account_country)
        if hit:
            points, listing = hit
            score += points
            justifications.append(f"Compte bancaire en {geo.account_country} ({listing})")

        if (
            geo.account_country != geo.residence_country
            and not self.registry.is_home(geo.account_country)
        ):
            score += CROSS_BORDER_POINTS
            justifications.append("Compte bancaire dans un pays différent de la résidence")

        if geo.distance_km > CATCHMENT_RADIUS_KM:
            score += OUT_OF_AREA_POINTS
            justifications.append(
                f"Client situé hors zone de chalandise habituelle (>{CATCHMENT_RADIUS_KM}km)"
            )

        return RiskScore.create(score, justifications)
