"""
Import Reconciler

Recognizes which known export shape a payload has and normalizes it.
Shapes are tried in priority order and the first that validates wins:

1. Full envelope from this application -> FullResult (with the request if present)
2. Bare request                        -> RequestOnly
3. Compact result                      -> ReconstructedResult (lossy, flagged)

If none match, UnrecognizedFormatError is raised with the reason each
shape was rejected. Reconciliation is read-only and keeps no state.
"""
from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..config import APPLICATION_ID, DEFAULT_MAX_IMPORT_BYTES, DEFAULT_MAX_JSON_DEPTH
from ..exceptions import SchemaViolationError, UnrecognizedFormatError
from ..models.request import (
    SUPPLEMENT_SECTIONS,
    AssessmentRequest,
    ClientProfile,
    GeographicProfile,
    TransactionProfile,
)
from ..models.result import AssessmentResult, RiskScore
from .schemas import CompactResultSchema, FullEnvelopeSchema, RequestSchema
from .secure_parser import SecureJsonParser, sanitize_text, validate_file_metadata

logger = logging.getLogger(__name__)

RECONSTRUCTION_WARNING = "recommendations unavailable, reconstructed from compact format"


# =============================================================================
# Outcomes
# =============================================================================

@dataclass(frozen=True)
class RequestOnly:
    """A request to re-open for editing; nothing has been scored yet."""
    request: AssessmentRequest

    kind = "request"


@dataclass(frozen=True)
class FullResult:
    """A complete result from a full export, with its request when exported."""
    result: AssessmentResult
    request: Optional[AssessmentRequest] = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    kind = "full"


@dataclass(frozen=True)
class ReconstructedResult:
    """A best-effort result rebuilt from the compact format."""
    result: AssessmentResult
    warning: str = RECONSTRUCTION_WARNING

    kind = "reconstructed"


ImportOutcome = Union[RequestOnly, FullResult, ReconstructedResult]


# =============================================================================
# Compact Factor Partitioning
# =============================================================================

# Accent-folded, lower-case substrings. Product is checked first: sector
# labels such as "bâtiments résidentiels" would otherwise match residence.
PRODUCT_VOCABULARY = (
    "secteur",
    "montant",
    "paiement",
    "cryptomonnaie",
    "virement",
    "montage juridique",
)
GEOGRAPHIC_VOCABULARY = (
    "resident en",
    "compte bancaire",
    "zone de chalandise",
    "gafi",
)
CLIENT_VOCABULARY = (
    "politiquement",
    "pep",
    "sanction",
    "notoriete",
    "reticence",
    "mineur",
    "client age",
    "societe",
    "relation",
)


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def categorize_factor(factor: str) -> str:
    """'product', 'geographic' or 'client'; unmatched factors count as client."""
    folded = _fold(factor)
    for category, vocabulary in (
        ("product", PRODUCT_VOCABULARY),
        ("geographic", GEOGRAPHIC_VOCABULARY),
        ("client", CLIENT_VOCABULARY),
    ):
        if any(word in folded for word in vocabulary):
            return category
    return "client"


def partition_factors(factors: list[str]) -> dict[str, list[str]]:
    buckets: dict[str, list[str]] = {"geographic": [], "product": [], "client": []}
    for factor in factors:
        buckets[categorize_factor(factor)].append(factor)
    return buckets


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_request(schema: RequestSchema) -> AssessmentRequest:
    c = schema.client
    g = schema.geographic
    t = schema.transaction
    supplements = {
        name: getattr(schema, name).model_dump(mode="json", exclude_unset=True)
        for name in SUPPLEMENT_SECTIONS
        if getattr(schema, name) is not None
    }
    return AssessmentRequest(
        client=ClientProfile(
            client_type=c.type_client,
            category=c.category,
            sector_code=c.code_naf,
            incorporation_date=c.date_creation,
            birth_year=c.annee_naissance,
            politically_exposed=c.pep,
            sanctioned=c.sanctions,
            adverse_media=c.notoriete_defavorable,
            identification_reluctance=c.reticence_identification,
            relationship_years=c.relation_etablie,
        ),
        geographic=GeographicProfile(
            residence_country=g.pays_residence,
            account_country=g.pays_compte,
            distance_km=g.distance_etablissement,
        ),
        transaction=TransactionProfile(
            amount=t.montant,
            payment_method=t.mode_paiement,
            complex_structure=t.complexite_montage,
            distribution_channel=t.canal_distribution,
        ),
        supplements=supplements,
    )


def _clean(texts: list[str]) -> list[str]:
    return [sanitize_text(text) for text in texts]


def _convert_full(schema: FullEnvelopeSchema) -> FullResult:
    results = schema.risk_assessment_results
    overall = results.overall
    result = AssessmentResult(
        geographic=RiskScore.create(
            results.geographic_risk.score, _clean(results.geographic_risk.justifications)
        ),
        product=RiskScore.create(
            results.product_service_risk.score, _clean(results.product_service_risk.justifications)
        ),
        client=RiskScore.create(results.client_risk.score, _clean(results.client_risk.justifications)),
        total=overall.total_score,
        risk_level=overall.risk_level,
        recommendations=tuple(_clean(results.recommendations)),
    )
    request = None
    if schema.evaluation_request is not None:
        request = _convert_request(schema.evaluation_request)
    return FullResult(
        result=result,
        request=request,
        metadata=MappingProxyType(schema.metadata.model_dump(exclude_none=True)),
    )


def _convert_compact(schema: CompactResultSchema) -> ReconstructedResult:
    buckets = partition_factors(_clean(schema.key_factors))
    result = AssessmentResult(
        geographic=RiskScore.create(schema.scores.geographic, buckets["geographic"]),
        product=RiskScore.create(schema.scores.product_service, buckets["product"]),
        client=RiskScore.create(schema.scores.client, buckets["client"]),
        total=schema.total_score,
        risk_level=schema.risk_level,
    )
    return ReconstructedResult(result=result)


# =============================================================================
# Reconciler
# =============================================================================

class ImportReconciler:
    """
    Turns an imported payload into an ImportOutcome.

    Usage:
        reconciler = ImportReconciler()
        outcome = reconciler.import_payload(raw_bytes, filename="export.json")
        if isinstance(outcome, RequestOnly):
            ...

    Args:
        max_size: Size ceiling in bytes for raw payloads
        application_id: Identifier full envelopes must carry
        max_depth: Deepest allowed nesting of objects and arrays
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_IMPORT_BYTES,
        application_id: str = APPLICATION_ID,
        max_depth: int = DEFAULT_MAX_JSON_DEPTH,
    ):
        self.parser = SecureJsonParser(max_size, max_depth)
        self.application_id = application_id

    def reconcile(self, data: Any) -> ImportOutcome:
        """
        Recognize already-decoded data.

        Raises:
            MalformedInputError: Nested deeper than the parser allows
            UnrecognizedFormatError: No known shape matches
        """
        self.parser.check_depth(data)
        attempts: list[dict[str, str]] = []
        last_error: Optional[Exception] = None

        try:
            envelope = self.parser.validate(data, FullEnvelopeSchema)
        except SchemaViolationError as e:
            attempts.append({"format": "full", "reason": e.message})
            last_error = e
        else:
            application = envelope.metadata.application
            if application == self.application_id:
                logger.info("Recognized full export envelope (version %s)", envelope.metadata.version)
                return _convert_full(envelope)
            reason = f"metadata.application {application[:60]!r} is not {self.application_id!r}"
            attempts.append({"format": "full", "reason": reason})

        try:
            request = self.parser.validate(data, RequestSchema)
        except SchemaViolationError as e:
            attempts.append({"format": "request", "reason": e.message})
            last_error = e
        else:
            logger.info("Recognized bare assessment request")
            return RequestOnly(request=_convert_request(request))

        try:
            compact = self.parser.validate(data, CompactResultSchema)
        except SchemaViolationError as e:
            attempts.append({"format": "compact", "reason": e.message})
            last_error = e
        else:
            logger.warning("Reconstructed result from compact format; recommendations unavailable")
            return _convert_compact(compact)

        raise UnrecognizedFormatError(
            message="Payload matches no known export format",
            details={"attempts": attempts},
        ) from last_error

    def import_payload(
        self,
        payload: Union[bytes, bytearray, str],
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> ImportOutcome:
        """
        Validate file metadata (when given), decode and reconcile.

        Raises:
            InvalidFileMetadataError, PayloadTooLargeError, MalformedInputError,
            UnrecognizedFormatError
        """
        if filename is not None:
            validate_file_metadata(
                filename, content_type, size=len(payload), max_size=self.parser.max_size
            )
        return self.reconcile(self.parser.decode(payload))


def import_payload(
    payload: Union[bytes, bytearray, str],
    max_size: int = DEFAULT_MAX_IMPORT_BYTES,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> ImportOutcome:
    """Import one payload with a fresh reconciler."""
    return ImportReconciler(max_size=max_size).import_payload(payload, filename, content_type)
