"""
Assessment Result Models

- RiskScore: one sub-score with its ordered justification trail
- AssessmentResult: the three sub-scores, total, level and recommendations

Results are produced once and never mutated. Construction enforces the two
aggregate invariants: the total is the sum of the sub-scores, and the level
is the classification of the total.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .enums import RiskLevel


@dataclass(frozen=True)
class RiskScore:
    """
    A sub-score and the evidence behind it.

    The score may be negative: an established relationship lowers the
    client sub-score and nothing clamps it.
    """
    score: int
    justifications: tuple[str, ...] = ()

    @classmethod
    def create(cls, score: int, justifications: Iterable[str] = ()) -> RiskScore:
        return cls(score=score, justifications=tuple(justifications))

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "justifications": list(self.justifications)}


@dataclass(frozen=True)
class AssessmentResult:
    """
    Outcome of one assessment.

    Attributes:
        geographic: Geographic sub-score
        product: Product/service sub-score
        client: Client sub-score
        total: Sum of the three sub-scores
        risk_level: Classification of the total
        recommendations: Ordered guidance for the risk level
    """
    geographic: RiskScore
    product: RiskScore
    client: RiskScore
    total: int
    risk_level: RiskLevel
    recommendations: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        from ..engine.classifier import classify_total

        expected = self.geographic.score + self.product.score + self.client.score
        if self.total != expected:
            raise ValueError(
                f"Total score {self.total} does not equal the sum of sub-scores ({expected})"
            )
        if self.risk_level != classify_total(self.total):
            raise ValueError(
                f"Risk level {self.risk_level.value} does not match total score {self.total}"
            )
        object.__setattr__(self, "recommendations", tuple(self.recommendations))

    @classmethod
    def build(
        cls,
        geographic: RiskScore,
        product: RiskScore,
        client: RiskScore,
        recommendations: Iterable[str] = (),
    ) -> AssessmentResult:
        """Aggregate three sub-scores into a result, computing total and level."""
        from ..engine.classifier import classify_total

        total = geographic.score + product.score + client.score
        return cls(
            geographic=geographic,
            product=product,
            client=client,
            total=total,
            risk_level=classify_total(total),
            recommendations=tuple(recommendations),
        )

    @property
    def key_factors(self) -> list[str]:
        """All justifications, geographic then product then client."""
        return [
            *self.geographic.justifications,
            *self.product.justifications,
            *self.client.justifications,
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "geographic": self.geographic.to_dict(),
            "product": self.product.to_dict(),
            "client": self.client.to_dict(),
            "total": self.total,
            "risk_level": self.risk_level.value,
            "recommendations": list(self.recommendations),
        }
