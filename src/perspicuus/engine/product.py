"""
Product and service risk rules.

Justification order: sector, amount, payment method, structuring.
"""
from __future__ import annotations

from ..models.enums import PaymentMethod, SectorTier
from ..models.request import ClientProfile, TransactionProfile
from ..models.result import RiskScore
from ..registry.registry import RiskRegistry


SECTOR_POINTS: dict[SectorTier, tuple[int, str]] = {
    SectorTier.VERY_HIGH: (4, "Secteur à très haut risque"),
    SectorTier.HIGH: (3, "Secteur à haut risque"),
    SectorTier.MODERATE: (2, "Secteur à risque modéré"),
}

# Checked highest first; only one applies.
AMOUNT_THRESHOLDS: tuple[tuple[float, int, str], ...] = (
    (100_000, 2, "Montant de transaction élevé (>100K€)"),
    (50_000, 1, "Montant de transaction significatif (>50K€)"),
)

PAYMENT_POINTS: dict[PaymentMethod, tuple[int, str]] = {
    PaymentMethod.CASH: (3, "Paiement en espèces (risque de blanchiment)"),
    PaymentMethod.SPLIT: (3, "Paiement fractionné (tentative de contournement)"),
    PaymentMethod.CRYPTO: (2, "Transaction en cryptomonnaies (risque réglementaire et volatilité)"),
    PaymentMethod.INTERNATIONAL_WIRE: (2, "Virement international"),
}

COMPLEX_STRUCTURE_POINTS = 3


class ProductEvaluator:
    """Scores the sector of the client and the transaction pattern."""

    def __init__(self, registry: RiskRegistry):
        self.registry = registry

    def evaluate(self, client: ClientProfile, transaction: TransactionProfile) -> RiskScore:
        score = 0
        justifications: list[str] = []

        if client.sector_code:
            match = self.registry.sector_lookup(client.sector_code)
            if match is not None:
                points, prefix = SECTOR_POINTS[match.tier]
                score += points
                justifications.append(f"{prefix}: {match.label}")

        for threshold, points, text in AMOUNT_THRESHOLDS:
            if transaction.amount > threshold:
                score += points
                justifications.append(text)
                break

        payment = PAYMENT_POINTS.get(transaction.payment_method)
        if payment is not None:
            points, text = payment
            score += points
            justifications.append(text)

        if transaction.complex_structure:
            score += COMPLEX_STRUCTURE_POINTS
            justifications.append(
                "Montage juridique complexe (difficile d'identifier le bénéficiaire effectif)"
            )

        return RiskScore.create(score, justifications)
