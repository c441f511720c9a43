"""
Perspicuus Scoring Engine

Rule-based LCBFT risk scoring: three independent evaluators (geographic,
product/service, client), a fixed-threshold classifier and static
recommendations per risk level.

Usage:
    from perspicuus.engine import RiskEngine

    engine = RiskEngine()
    result = engine.evaluate(client, geographic, transaction)
"""
from __future__ import annotations

from .assessor import RiskEngine, evaluate
from .classifier import RISK_THRESHOLDS, classify_total
from .client import ClientEvaluator
from .geographic import GeographicEvaluator
from .product import ProductEvaluator
from .recommendations import RECOMMENDATIONS, recommendations_for, strip_emphasis

__all__ = [
    "RiskEngine",
    "evaluate",
    "RISK_THRESHOLDS",
    "classify_total",
    "ClientEvaluator",
    "GeographicEvaluator",
    "ProductEvaluator",
    "RECOMMENDATIONS",
    "recommendations_for",
    "strip_emphasis",
]
