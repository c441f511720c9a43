"""
Pytest configuration and fixtures for Perspicuus tests.

Provides helper factories for requests and synthetic registries, and
fixtures for the packaged registry and a date-pinned engine.
"""
import json
from datetime import date
from typing import Any, Optional

import pytest

from perspicuus.engine import RiskEngine
from perspicuus.models import (
    AssessmentRequest,
    ClientProfile,
    ClientType,
    GeographicProfile,
    PaymentMethod,
    SectorTier,
    TransactionProfile,
)
from perspicuus.registry import RiskRegistry, load_default_registry


REFERENCE_DATE = date(2025, 6, 1)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_client(
    client_type: ClientType = ClientType.NATURAL_PERSON,
    relationship_years: int = 3,
    **kwargs: Any,
) -> ClientProfile:
    """Create a ClientProfile with no risk flags by default."""
    return ClientProfile(
        client_type=client_type,
        relationship_years=relationship_years,
        **kwargs,
    )


def make_geo(
    residence_country: str = "France",
    account_country: str = "France",
    distance_km: float = 10,
) -> GeographicProfile:
    """Create a domestic GeographicProfile by default."""
    return GeographicProfile(
        residence_country=residence_country,
        account_country=account_country,
        distance_km=distance_km,
    )


def make_transaction(
    amount: float = 10_000,
    payment_method: PaymentMethod = PaymentMethod.WIRE,
    complex_structure: bool = False,
    distribution_channel: Optional[str] = None,
) -> TransactionProfile:
    """Create a small domestic wire by default."""
    return TransactionProfile(
        amount=amount,
        payment_method=payment_method,
        complex_structure=complex_structure,
        distribution_channel=distribution_channel,
    )


def make_request(
    client: Optional[ClientProfile] = None,
    geographic: Optional[GeographicProfile] = None,
    transaction: Optional[TransactionProfile] = None,
    **supplements: Any,
) -> AssessmentRequest:
    return AssessmentRequest(
        client=client or make_client(),
        geographic=geographic or make_geo(),
        transaction=transaction or make_transaction(),
        supplements=supplements,
    )


def make_registry(**kwargs: Any) -> RiskRegistry:
    """Synthetic registry with a few well-known entries."""
    defaults: dict[str, Any] = {
        "id": "TEST-REGISTRY",
        "version": "test",
        "very_high_countries": ["Blackland", "Greyblack"],
        "high_countries": ["Greyland", "Plainland"],
        "aggravated_countries": ["Greyblack", "Greyland"],
        "sanctioned_countries": ["Blackland"],
        "eu_members": ["France", "Allemagne"],
        "sectors": {
            SectorTier.VERY_HIGH: {"92.00Z": "Jeux d'argent"},
            SectorTier.HIGH: {"68.31Z": "Agences immobilières"},
            SectorTier.MODERATE: {"41.1": "Promotion immobilière"},
        },
    }
    defaults.update(kwargs)
    return RiskRegistry.create(**defaults)


def wire_request(**overrides: Any) -> dict[str, Any]:
    """A valid bare request in wire format, as a plain dict."""
    data: dict[str, Any] = {
        "client": {
            "type_client": "Personne physique",
            "annee_naissance": 1980,
            "pep": False,
            "sanctions": False,
            "relation_etablie": 3,
            "notoriete_defavorable": False,
            "reticence_identification": False,
        },
        "geographic": {
            "pays_residence": "France",
            "pays_compte": "France",
            "distance_etablissement": 12,
        },
        "transaction": {
            "montant": 25000,
            "mode_paiement": "Virement bancaire",
            "complexite_montage": False,
        },
    }
    for section, values in overrides.items():
        data[section] = {**data[section], **values}
    return data


def to_bytes(data: Any) -> bytes:
    return json.dumps(data, ensure_ascii=False).encode("utf-8")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def registry() -> RiskRegistry:
    return make_registry()


@pytest.fixture
def default_registry() -> RiskRegistry:
    return load_default_registry()


@pytest.fixture
def engine(default_registry: RiskRegistry) -> RiskEngine:
    return RiskEngine(registry=default_registry, reference_date=REFERENCE_DATE)
