"""
Perspicuus Secure Import

Safe decoding and recognition of externally supplied JSON: size ceiling,
forbidden-key filtering, schema validation, and reconciliation of the known
export formats into requests or results.

Usage:
    from perspicuus.ingest import import_payload, RequestOnly, FullResult

    outcome = import_payload(raw_bytes)
    if isinstance(outcome, RequestOnly):
        result = engine.assess(outcome.request)
"""
from __future__ import annotations

from .reconciler import (
    RECONSTRUCTION_WARNING,
    FullResult,
    ImportOutcome,
    ImportReconciler,
    ReconstructedResult,
    RequestOnly,
    categorize_factor,
    import_payload,
    partition_factors,
)
from .schemas import CompactResultSchema, FullEnvelopeSchema, RequestSchema
from .secure_parser import (
    FORBIDDEN_KEYS,
    SecureJsonParser,
    parse_json,
    sanitize_text,
    validate_file_metadata,
)

__all__ = [
    # Reconciler
    "RECONSTRUCTION_WARNING",
    "FullResult",
    "ImportOutcome",
    "ImportReconciler",
    "ReconstructedResult",
    "RequestOnly",
    "categorize_factor",
    "import_payload",
    "partition_factors",
    # Schemas
    "CompactResultSchema",
    "FullEnvelopeSchema",
    "RequestSchema",
    # Parser
    "FORBIDDEN_KEYS",
    "SecureJsonParser",
    "parse_json",
    "sanitize_text",
    "validate_file_metadata",
]
