"""
Risk assessment pipeline.

Runs the three evaluators, aggregates and classifies the total, and attaches
the recommendations for the resulting level. Every well-typed request yields
a result; there is no error path.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..models.request import (
    AssessmentRequest,
    ClientProfile,
    GeographicProfile,
    TransactionProfile,
)
from ..models.result import AssessmentResult
from ..registry.loader import load_default_registry
from ..registry.registry import RiskRegistry
from .classifier import classify_total
from .client import ClientEvaluator
from .geographic import GeographicEvaluator
from .product import ProductEvaluator
from .recommendations import recommendations_for

logger = logging.getLogger(__name__)


class RiskEngine:
    """
    LCBFT risk scoring engine.

    Holds no mutable state: one engine can score any number of requests,
    concurrently if needed.

    Usage:
        engine = RiskEngine()
        result = engine.evaluate(client, geographic, transaction)
        print(result.risk_level, result.total)

    Args:
        registry: Country and sector tables. Defaults to the packaged
            French registry (or PERSPICUUS_REGISTRY_PATH).
        reference_date: Date used for age computations. Defaults to today
            at each evaluation.
    """

    def __init__(
        self,
        registry: Optional[RiskRegistry] = None,
        reference_date: Optional[date] = None,
    ):
        self.registry = registry or load_default_registry()
        self.reference_date = reference_date
        self.geographic = GeographicEvaluator(self.registry)
        self.product = ProductEvaluator(self.registry)
        self.client = ClientEvaluator(
            today=(lambda: reference_date) if reference_date else None
        )

    def evaluate(
        self,
        client: ClientProfile,
        geographic: GeographicProfile,
        transaction: TransactionProfile,
    ) -> AssessmentResult:
        geo_score = self.geographic.evaluate(geographic)
        product_score = self.product.evaluate(client, transaction)
        client_score = self.client.evaluate(client)

        level = classify_total(geo_score.score + product_score.score + client_score.score)
        result = AssessmentResult.build(
            geo_score, product_score, client_score,
            recommendations=recommendations_for(level),
        )
        logger.debug(
            "Assessment complete: geo=%d product=%d client=%d total=%d level=%s",
            geo_score.score, product_score.score, client_score.score,
            result.total, result.risk_level.value,
        )
        return result

    def assess(self, request: AssessmentRequest) -> AssessmentResult:
        return self.evaluate(request.client, request.geographic, request.transaction)


def evaluate(
    client: ClientProfile,
    geographic: GeographicProfile,
    transaction: TransactionProfile,
    registry: Optional[RiskRegistry] = None,
) -> AssessmentResult:
    """Score one request with a fresh engine over the given (or default) registry."""
    return RiskEngine(registry=registry).evaluate(client, geographic, transaction)
