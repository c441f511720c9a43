"""
Immutable Risk Registry

The lookup tables the scoring rules consult, frozen after construction so
one registry can be shared by any number of concurrent evaluations.

Lookups are by exact string. A country or sector absent from every list is
not an error: it gets the conservative default (no tier, no flags).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..canon import content_hash as canonical_hash
from ..models.enums import CountryTier, SectorTier


@dataclass(frozen=True)
class CountryProfile:
    """
    Risk flags of one country.

    Attributes:
        name: Country name as looked up
        tier: Risk tier (STANDARD when the country is on no list)
        aggravated: On both the FATF and the EU lists
        sanctioned: Under international sanctions
        eu_member: EU member state
    """
    name: str
    tier: CountryTier = CountryTier.STANDARD
    aggravated: bool = False
    sanctioned: bool = False
    eu_member: bool = False

    @property
    def is_high_risk(self) -> bool:
        return self.tier != CountryTier.STANDARD

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tier": self.tier.value,
            "aggravated": self.aggravated,
            "sanctioned": self.sanctioned,
            "eu_member": self.eu_member,
        }


@dataclass(frozen=True)
class SectorMatch:
    """A sector code found in the registry."""
    code: str
    label: str
    tier: SectorTier


@dataclass(frozen=True, eq=False)
class RiskRegistry:
    """
    Country and sector tables, immutable.

    Build with `RiskRegistry.create(...)`, or load a pack with
    `perspicuus.registry.load_registry`.
    """
    id: str
    name: str
    version: str
    jurisdiction: str
    home_jurisdiction: str
    very_high_countries: frozenset[str] = frozenset()
    high_countries: frozenset[str] = frozenset()
    aggravated_countries: frozenset[str] = frozenset()
    sanctioned_countries: frozenset[str] = frozenset()
    eu_members: frozenset[str] = frozenset()
    sectors: Mapping[SectorTier, Mapping[str, str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    content_hash: str = ""

    @classmethod
    def create(
        cls,
        *,
        id: str = "CUSTOM",
        name: str = "Custom registry",
        version: str = "0",
        jurisdiction: str = "FR",
        home_jurisdiction: str = "France",
        very_high_countries: Iterable[str] = (),
        high_countries: Iterable[str] = (),
        aggravated_countries: Iterable[str] = (),
        sanctioned_countries: Iterable[str] = (),
        eu_members: Iterable[str] = (),
        sectors: Optional[Mapping[SectorTier, Mapping[str, str]]] = None,
    ) -> RiskRegistry:
        """Build a registry from plain collections and compute its content hash."""
        sector_tables = MappingProxyType({
            tier: MappingProxyType(dict((sectors or {}).get(tier, {})))
            for tier in SectorTier
        })
        contents = {
            "id": id,
            "version": version,
            "jurisdiction": jurisdiction,
            "home_jurisdiction": home_jurisdiction,
            "countries": {
                "very_high": frozenset(very_high_countries),
                "high": frozenset(high_countries),
                "aggravated": frozenset(aggravated_countries),
                "sanctioned": frozenset(sanctioned_countries),
                "eu_members": frozenset(eu_members),
            },
            "sectors": {tier.value: dict(table) for tier, table in sector_tables.items()},
        }
        return cls(
            id=id,
            name=name,
            version=version,
            jurisdiction=jurisdiction,
            home_jurisdiction=home_jurisdiction,
            very_high_countries=contents["countries"]["very_high"],
            high_countries=contents["countries"]["high"],
            aggravated_countries=contents["countries"]["aggravated"],
            sanctioned_countries=contents["countries"]["sanctioned"],
            eu_members=contents["countries"]["eu_members"],
            sectors=sector_tables,
            content_hash=canonical_hash(contents),
        )

    # -------------------------------------------------------------------------
    # Countries
    # -------------------------------------------------------------------------

    def country_tier(self, country: str) -> CountryTier:
        if country in self.very_high_countries:
            return CountryTier.VERY_HIGH
        if country in self.high_countries:
            return CountryTier.HIGH
        return CountryTier.STANDARD

    def is_aggravated(self, country: str) -> bool:
        return country in self.aggravated_countries

    def is_home(self, country: str) -> bool:
        return country == self.home_jurisdiction

    def country_profile(self, country: str) -> CountryProfile:
        """Flags for a country; unknown names get the all-false default."""
        return CountryProfile(
            name=country,
            tier=self.country_tier(country),
            aggravated=self.is_aggravated(country),
            sanctioned=country in self.sanctioned_countries,
            eu_member=country in self.eu_members,
        )

    # -------------------------------------------------------------------------
    # Sectors
    # -------------------------------------------------------------------------

    def sector_lookup(self, code: str) -> Optional[SectorMatch]:
        """First tier containing the code, checked very-high, high, moderate."""
        for tier in (SectorTier.VERY_HIGH, SectorTier.HIGH, SectorTier.MODERATE):
            table = self.sectors.get(tier, {})
            if code in table:
                return SectorMatch(code=code, label=table[code], tier=tier)
        return None

    @property
    def sector_count(self) -> int:
        return sum(len(table) for table in self.sectors.values())

    def describe(self) -> dict[str, Any]:
        """Summary for display and export provenance."""
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "jurisdiction": self.jurisdiction,
            "home_jurisdiction": self.home_jurisdiction,
            "hash": self.content_hash,
        }
