"""
Assessment Request Models

The three input sections an analyst fills in for one assessment:

- ClientProfile: who the client is
- GeographicProfile: where the client lives and banks
- TransactionProfile: what the transaction pattern looks like

All models are frozen. `to_dict()` produces the wire field names used by
exported files, so a serialized request can be re-imported unchanged.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .enums import ClientCategory, ClientType, PaymentMethod


# Optional questionnaire sections carried alongside a request. They are
# preserved through import and export but do not take part in scoring.
SUPPLEMENT_SECTIONS = ("wealthManagementInfo", "npoInfo", "travelRuleInfo", "ppeInfo")


# =============================================================================
# Client
# =============================================================================

@dataclass(frozen=True)
class ClientProfile:
    """
    Client identity and risk flags.

    Attributes:
        client_type: Natural or legal person
        category: Questionnaire track, informational
        sector_code: NAF/APE activity code (e.g. "68.31Z")
        incorporation_date: Creation date of a legal person
        birth_year: Birth year of a natural person
        politically_exposed: Politically exposed person (PEP)
        sanctioned: Subject to international sanctions
        adverse_media: Adverse reputation in open sources
        identification_reluctance: Reluctant to disclose the represented party
        relationship_years: Length of the business relationship, whole years
    """
    client_type: ClientType
    category: Optional[ClientCategory] = None
    sector_code: Optional[str] = None
    incorporation_date: Optional[date] = None
    birth_year: Optional[int] = None
    politically_exposed: bool = False
    sanctioned: bool = False
    adverse_media: bool = False
    identification_reluctance: bool = False
    relationship_years: int = 0

    @property
    def is_natural_person(self) -> bool:
        return self.client_type == ClientType.NATURAL_PERSON

    @property
    def is_legal_person(self) -> bool:
        return self.client_type == ClientType.LEGAL_PERSON

    def to_dict(self) -> dict[str, Any]:
        """Serialize to wire field names."""
        result: dict[str, Any] = {
            "type_client": self.client_type.value,
            "pep": self.politically_exposed,
            "sanctions": self.sanctioned,
            "relation_etablie": self.relationship_years,
            "notoriete_defavorable": self.adverse_media,
            "reticence_identification": self.identification_reluctance,
        }
        if self.category is not None:
            result["category"] = self.category.value
        if self.sector_code is not None:
            result["code_naf"] = self.sector_code
        if self.incorporation_date is not None:
            result["date_creation"] = self.incorporation_date.isoformat()
        if self.birth_year is not None:
            result["annee_naissance"] = self.birth_year
        return result


# =============================================================================
# Geography
# =============================================================================

@dataclass(frozen=True)
class GeographicProfile:
    """
    Residence, account domicile and distance from the servicing establishment.

    Country names are matched against the registry by exact string.
    """
    residence_country: str
    account_country: str
    distance_km: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "pays_residence": self.residence_country,
            "pays_compte": self.account_country,
            "distance_etablissement": self.distance_km,
        }


# =============================================================================
# Transaction
# =============================================================================

@dataclass(frozen=True)
class TransactionProfile:
    """
    Transaction pattern under review.

    Attributes:
        amount: Monetary amount in euros
        payment_method: Single payment method
        complex_structure: Legal structure hides the beneficial owner
        distribution_channel: Free-text channel label, informational
    """
    amount: float
    payment_method: PaymentMethod
    complex_structure: bool = False
    distribution_channel: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "montant": self.amount,
            "mode_paiement": self.payment_method.value,
            "complexite_montage": self.complex_structure,
        }
        if self.distribution_channel is not None:
            result["canal_distribution"] = self.distribution_channel
        return result


# =============================================================================
# Request
# =============================================================================

@dataclass(frozen=True)
class AssessmentRequest:
    """
    A complete assessment request: the three sections plus optional
    questionnaire supplements keyed by section name.
    """
    client: ClientProfile
    geographic: GeographicProfile
    transaction: TransactionProfile
    supplements: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        unknown = set(self.supplements) - set(SUPPLEMENT_SECTIONS)
        if unknown:
            raise ValueError(f"Unknown supplement sections: {sorted(unknown)}")
        frozen = {
            name: MappingProxyType(copy.deepcopy(dict(section)))
            for name, section in self.supplements.items()
        }
        object.__setattr__(self, "supplements", MappingProxyType(frozen))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "client": self.client.to_dict(),
            "geographic": self.geographic.to_dict(),
            "transaction": self.transaction.to_dict(),
        }
        for name in SUPPLEMENT_SECTIONS:
            if name in self.supplements:
                result[name] = copy.deepcopy(dict(self.supplements[name]))
        return result
