"""
Perspicuus Models

Domain models for LCBFT risk assessment:

    from perspicuus.models import (
        # Enums
        RiskLevel, ClientType, ClientCategory, PaymentMethod,
        # Request
        ClientProfile, GeographicProfile, TransactionProfile, AssessmentRequest,
        # Result
        RiskScore, AssessmentResult,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    ClientCategory,
    ClientSegment,
    ClientType,
    CountryTier,
    InvestmentVehicleType,
    NPOActivityType,
    NPOCategory,
    NPOFundingSource,
    PaymentMethod,
    PPECategory,
    PPEFunctionType,
    RiskLevel,
    SectorTier,
    WealthManagementServiceType,
    WealthSource,
)

# =============================================================================
# Request
# =============================================================================
from .request import (
    SUPPLEMENT_SECTIONS,
    AssessmentRequest,
    ClientProfile,
    GeographicProfile,
    TransactionProfile,
)

# =============================================================================
# Result
# =============================================================================
from .result import AssessmentResult, RiskScore

__all__ = [
    # Enums
    "ClientCategory",
    "ClientSegment",
    "ClientType",
    "CountryTier",
    "InvestmentVehicleType",
    "NPOActivityType",
    "NPOCategory",
    "NPOFundingSource",
    "PaymentMethod",
    "PPECategory",
    "PPEFunctionType",
    "RiskLevel",
    "SectorTier",
    "WealthManagementServiceType",
    "WealthSource",
    # Request
    "SUPPLEMENT_SECTIONS",
    "AssessmentRequest",
    "ClientProfile",
    "GeographicProfile",
    "TransactionProfile",
    # Result
    "AssessmentResult",
    "RiskScore",
]
