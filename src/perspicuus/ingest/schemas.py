"""
Perspicuus Import Schemas

Pydantic models for the JSON shapes the import pipeline accepts:

- RequestSchema: a bare assessment request (client, geographic, transaction
  sections plus optional questionnaire supplements)
- FullEnvelopeSchema: the full export (metadata, optional request, results)
- CompactResultSchema: the compact export (flat scores and key factors)

Flags are strict booleans and counts strict integers, so "true" or "5" given
as strings are rejected rather than coerced. Unknown keys are ignored, except
in the questionnaire supplements, which keep them.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

from ..engine.classifier import classify_total
from ..models.enums import (
    ClientCategory,
    ClientSegment,
    ClientType,
    InvestmentVehicleType,
    NPOActivityType,
    NPOCategory,
    NPOFundingSource,
    PaymentMethod,
    PPECategory,
    PPEFunctionType,
    RiskLevel,
    WealthManagementServiceType,
    WealthSource,
)


MIN_BIRTH_YEAR = 1900


def parse_iso_datetime(value: str) -> datetime:
    """ISO-8601 date or datetime, accepting a trailing Z for UTC."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


# =============================================================================
# Request Sections
# =============================================================================

class ClientSectionSchema(BaseModel):
    """Client section (wire names)."""
    type_client: ClientType
    category: Optional[ClientCategory] = None
    code_naf: Optional[StrictStr] = None
    date_creation: Optional[date] = None
    annee_naissance: Optional[StrictInt] = None
    pep: StrictBool
    sanctions: StrictBool
    relation_etablie: int = Field(..., strict=True, ge=0)
    notoriete_defavorable: StrictBool
    reticence_identification: StrictBool

    @field_validator("date_creation", mode="before")
    @classmethod
    def parse_date_creation(cls, v: Any) -> Any:
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("date_creation must be an ISO-8601 date string")
        try:
            return parse_iso_datetime(v).date()
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 date: {v[:40]!r}")

    @field_validator("annee_naissance")
    @classmethod
    def validate_birth_year(cls, v: Optional[int]) -> Optional[int]:
        current_year = date.today().year
        if v is not None and not MIN_BIRTH_YEAR <= v <= current_year:
            raise ValueError(f"Birth year must be between {MIN_BIRTH_YEAR} and {current_year}")
        return v

    model_config = {"extra": "ignore"}


class GeographicSectionSchema(BaseModel):
    """Geographic section (wire names)."""
    pays_residence: StrictStr = Field(..., min_length=1)
    pays_compte: StrictStr = Field(..., min_length=1)
    distance_etablissement: float = Field(..., strict=True, ge=0, allow_inf_nan=False)

    model_config = {"extra": "ignore"}


class TransactionSectionSchema(BaseModel):
    """Transaction section (wire names)."""
    montant: float = Field(..., strict=True, ge=0, allow_inf_nan=False)
    mode_paiement: PaymentMethod
    complexite_montage: StrictBool
    canal_distribution: Optional[StrictStr] = None

    model_config = {"extra": "ignore"}


# =============================================================================
# Questionnaire Supplements
# =============================================================================
#
# Known fields are typed; any other key is kept as-is.

NonNegativeNumber = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


class WealthManagementSectionSchema(BaseModel):
    client_segment: Optional[ClientSegment] = None
    assets_under_management: Optional[NonNegativeNumber] = None
    wealth_sources: Optional[list[WealthSource]] = None
    investment_vehicles: Optional[list[InvestmentVehicleType]] = None
    service_types: Optional[list[WealthManagementServiceType]] = None
    geographic_exposure: Optional[list[StrictStr]] = None
    complexity_level: Optional[RiskLevel] = None
    liquidity_needs: Optional[StrictStr] = None
    risk_tolerance: Optional[RiskLevel] = None

    model_config = {"extra": "allow"}


class NPOSectionSchema(BaseModel):
    category: Optional[NPOCategory] = None
    activity_types: Optional[list[NPOActivityType]] = None
    funding_sources: Optional[list[NPOFundingSource]] = None
    annual_budget: Optional[NonNegativeNumber] = None
    geographic_scope: Optional[list[StrictStr]] = None
    transparency_score: Optional[
        Annotated[float, Field(strict=True, ge=0, le=10, allow_inf_nan=False)]
    ] = None
    financial_reporting_quality: Optional[RiskLevel] = None
    registration_number: Optional[StrictStr] = None
    legal_status: Optional[StrictStr] = None

    model_config = {"extra": "allow"}


class TravelRuleSectionSchema(BaseModel):
    transaction_type: Optional[StrictStr] = None
    cross_border: Optional[StrictBool] = None
    originator_complete: Optional[StrictBool] = None
    beneficiary_complete: Optional[StrictBool] = None
    threshold_exceeded: Optional[StrictBool] = None
    jurisdiction_compliance: Optional[dict[StrictStr, StrictBool]] = None
    missing_information: Optional[list[StrictStr]] = None

    model_config = {"extra": "allow"}


class PPESectionSchema(BaseModel):
    pep_category: Optional[PPECategory] = None
    pep_functions: Optional[list[PPEFunctionType]] = None
    family_member: Optional[StrictBool] = None
    close_associate: Optional[StrictBool] = None
    risk_rating: Optional[RiskLevel] = None
    source_of_wealth_verified: Optional[StrictBool] = None
    enhanced_monitoring: Optional[StrictBool] = None

    model_config = {"extra": "allow"}


# =============================================================================
# Request
# =============================================================================

class RequestSchema(BaseModel):
    """A bare assessment request."""
    client: ClientSectionSchema
    geographic: GeographicSectionSchema
    transaction: TransactionSectionSchema

    # Questionnaire supplements, carried but not scored
    wealthManagementInfo: Optional[WealthManagementSectionSchema] = None
    npoInfo: Optional[NPOSectionSchema] = None
    travelRuleInfo: Optional[TravelRuleSectionSchema] = None
    ppeInfo: Optional[PPESectionSchema] = None

    model_config = {"extra": "ignore"}


# =============================================================================
# Full Envelope
# =============================================================================

class ExportMetadataSchema(BaseModel):
    application: StrictStr
    version: StrictStr
    generated_at: StrictStr
    disclaimer: Optional[StrictStr] = None
    registry: Optional[dict[str, Any]] = None

    @field_validator("generated_at")
    @classmethod
    def validate_generated_at(cls, v: str) -> str:
        try:
            parse_iso_datetime(v)
        except ValueError:
            raise ValueError(f"generated_at is not an ISO-8601 timestamp: {v[:40]!r}")
        return v

    model_config = {"extra": "ignore"}


class ScoreSectionSchema(BaseModel):
    score: StrictInt
    justifications: list[StrictStr] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class OverallSchema(BaseModel):
    risk_level: RiskLevel
    risk_level_fr: StrictStr
    total_score: StrictInt
    scoring_system: Optional[StrictStr] = None
    max_possible_score: Optional[StrictInt] = None

    model_config = {"extra": "ignore"}


class ResultsSchema(BaseModel):
    overall: OverallSchema
    geographic_risk: ScoreSectionSchema
    product_service_risk: ScoreSectionSchema
    client_risk: ScoreSectionSchema
    recommendations: list[StrictStr] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_totals(self) -> "ResultsSchema":
        _check_consistency(
            self.overall.total_score,
            self.overall.risk_level,
            (self.geographic_risk.score, self.product_service_risk.score, self.client_risk.score),
        )
        return self

    model_config = {"extra": "ignore"}


class FullEnvelopeSchema(BaseModel):
    """The full export format."""
    metadata: ExportMetadataSchema
    evaluation_request: Optional[RequestSchema] = None
    risk_assessment_results: ResultsSchema

    model_config = {"extra": "ignore"}


# =============================================================================
# Compact Result
# =============================================================================

class CompactScoresSchema(BaseModel):
    geographic: StrictInt
    product_service: StrictInt
    client: StrictInt

    model_config = {"extra": "ignore"}


class CompactResultSchema(BaseModel):
    """The compact export format."""
    timestamp: Optional[StrictStr] = None
    risk_level: RiskLevel
    total_score: StrictInt
    scores: CompactScoresSchema
    key_factors: list[StrictStr] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_totals(self) -> "CompactResultSchema":
        _check_consistency(
            self.total_score,
            self.risk_level,
            (self.scores.geographic, self.scores.product_service, self.scores.client),
        )
        return self

    model_config = {"extra": "ignore"}


def _check_consistency(total: int, level: RiskLevel, sub_scores: tuple[int, int, int]) -> None:
    if total != sum(sub_scores):
        raise ValueError(f"total_score {total} does not equal the sum of sub-scores {sum(sub_scores)}")
    expected = classify_total(total)
    if level != expected:
        raise ValueError(
            f"risk_level {level.value} does not match total_score {total} (expected {expected.value})"
        )
