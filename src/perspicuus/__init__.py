"""
Perspicuus: LCBFT Risk Assessment

Rule-based anti-money-laundering / counter-terrorist-financing risk scoring
for a client relationship and transaction pattern, and safe re-import of
previously exported assessments.

Every decision is a named, auditable rule: three independent evaluators
(geographic, product/service, client) produce sub-scores with their
justifications; the total is classified into four tiers, each with fixed
recommendations.

Usage:
    from perspicuus import (
        RiskEngine, ClientProfile, GeographicProfile, TransactionProfile,
        ClientType, PaymentMethod, export_full_envelope, import_payload,
    )

    engine = RiskEngine()
    result = engine.evaluate(
        ClientProfile(client_type=ClientType.NATURAL_PERSON, relationship_years=3),
        GeographicProfile(residence_country="France", account_country="France"),
        TransactionProfile(amount=20_000, payment_method=PaymentMethod.WIRE),
    )
    print(result.risk_level.label_fr, result.total)

    outcome = import_payload(raw_bytes)
"""
from __future__ import annotations

__version__ = "1.0.0"

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    InvalidFileMetadataError,
    MalformedInputError,
    PayloadImportError,
    PayloadTooLargeError,
    PerspicuusError,
    RegistryError,
    RegistryLoadError,
    RegistryValidationError,
    RegistryVersionMismatch,
    SchemaViolationError,
    UnrecognizedFormatError,
)

# =============================================================================
# Models
# =============================================================================
from .models import (
    AssessmentRequest,
    AssessmentResult,
    ClientCategory,
    ClientProfile,
    ClientType,
    GeographicProfile,
    PaymentMethod,
    RiskLevel,
    RiskScore,
    TransactionProfile,
)

# =============================================================================
# Registry
# =============================================================================
from .registry import RiskRegistry, load_default_registry, load_registry

# =============================================================================
# Engine
# =============================================================================
from .engine import RiskEngine, classify_total, evaluate

# =============================================================================
# Import / Export
# =============================================================================
from .export import export_compact, export_full_envelope
from .ingest import (
    FullResult,
    ImportReconciler,
    ReconstructedResult,
    RequestOnly,
    SecureJsonParser,
    import_payload,
)

__all__ = [
    "__version__",
    # Exceptions
    "InvalidFileMetadataError",
    "MalformedInputError",
    "PayloadImportError",
    "PayloadTooLargeError",
    "PerspicuusError",
    "RegistryError",
    "RegistryLoadError",
    "RegistryValidationError",
    "RegistryVersionMismatch",
    "SchemaViolationError",
    "UnrecognizedFormatError",
    # Models
    "AssessmentRequest",
    "AssessmentResult",
    "ClientCategory",
    "ClientProfile",
    "ClientType",
    "GeographicProfile",
    "PaymentMethod",
    "RiskLevel",
    "RiskScore",
    "TransactionProfile",
    # Registry
    "RiskRegistry",
    "load_default_registry",
    "load_registry",
    # Engine
    "RiskEngine",
    "classify_total",
    "evaluate",
    # Import / Export
    "export_compact",
    "export_full_envelope",
    "FullResult",
    "ImportReconciler",
    "ReconstructedResult",
    "RequestOnly",
    "SecureJsonParser",
    "import_payload",
]
