"""
Export formats.

Two JSON shapes are produced, both re-importable:

- full: metadata, the originating request and every result detail
- compact: flat scores and the list of key factors

Recommendations are exported without emphasis markup.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from .config import APPLICATION_ID, DISCLAIMER, EXPORT_VERSION
from .engine.recommendations import strip_emphasis
from .models.request import AssessmentRequest
from .models.result import AssessmentResult
from .registry.registry import RiskRegistry

SCORING_SYSTEM = "open_scoring"


def _iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def export_full_envelope(
    result: AssessmentResult,
    request: Optional[AssessmentRequest] = None,
    generated_at: Optional[str] = None,
    registry: Optional[RiskRegistry] = None,
) -> dict[str, Any]:
    """
    Build the full export document.

    Args:
        result: Assessment to export
        request: Originating request, exported as evaluation_request
        generated_at: ISO-8601 timestamp; defaults to now (UTC)
        registry: Registry the result was scored against, recorded as provenance
    """
    metadata: dict[str, Any] = {
        "application": APPLICATION_ID,
        "version": EXPORT_VERSION,
        "generated_at": generated_at or _iso_now(),
        "disclaimer": DISCLAIMER,
    }
    if registry is not None:
        metadata["registry"] = {
            "id": registry.id,
            "version": registry.version,
            "hash": registry.content_hash,
        }

    return {
        "metadata": metadata,
        "evaluation_request": request.to_dict() if request is not None else None,
        "risk_assessment_results": {
            "overall": {
                "risk_level": result.risk_level.value,
                "risk_level_fr": result.risk_level.label_fr,
                "total_score": result.total,
                "scoring_system": SCORING_SYSTEM,
            },
            "geographic_risk": result.geographic.to_dict(),
            "product_service_risk": result.product.to_dict(),
            "client_risk": result.client.to_dict(),
            "recommendations": [strip_emphasis(r) for r in result.recommendations],
        },
    }


def export_compact(result: AssessmentResult, timestamp: Optional[str] = None) -> dict[str, Any]:
    """Build the compact export document."""
    return {
        "timestamp": timestamp or _iso_now(),
        "risk_level": result.risk_level.value,
        "total_score": result.total,
        "scores": {
            "geographic": result.geographic.score,
            "product_service": result.product.score,
            "client": result.client.score,
        },
        "key_factors": result.key_factors,
    }


def dumps(document: dict[str, Any]) -> str:
    """Serialize an export document as indented UTF-8 JSON text."""
    return json.dumps(document, ensure_ascii=False, indent=2)
