"""
Perspicuus Risk Registry Schemas

Pydantic models for validating risk registry YAML/JSON packs.

A registry pack holds the static lookup tables the scoring rules consult:
country tiers, the aggravated (FATF + EU) list, sanctioned countries,
EU membership and sector tiers. The schemas map to the immutable
RiskRegistry in perspicuus.registry.registry.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Countries
# =============================================================================

class CountryListsSchema(BaseModel):
    """Country name lists. Names are matched exactly at lookup time."""
    very_high: list[str] = Field(default_factory=list, description="FATF black list")
    high: list[str] = Field(default_factory=list, description="FATF grey / EU high-risk lists")
    aggravated: list[str] = Field(
        default_factory=list,
        description="Listed by both FATF and the EU; one extra point when tiered",
    )
    sanctioned: list[str] = Field(default_factory=list, description="Under international sanctions")
    eu_members: list[str] = Field(default_factory=list, description="EU member states")

    @field_validator("very_high", "high", "aggravated", "sanctioned", "eu_members")
    @classmethod
    def validate_names(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name.strip():
                raise ValueError("Country names must be non-empty")
        if len(set(v)) != len(v):
            raise ValueError("Country list contains duplicates")
        return v

    @model_validator(mode="after")
    def validate_tiers(self) -> "CountryListsSchema":
        overlap = set(self.very_high) & set(self.high)
        if overlap:
            raise ValueError(f"Countries listed in both very_high and high: {sorted(overlap)}")
        untiered = set(self.aggravated) - set(self.very_high) - set(self.high)
        if untiered:
            raise ValueError(f"Aggravated countries must be tiered: {sorted(untiered)}")
        return self

    model_config = {"extra": "forbid"}


# =============================================================================
# Sectors
# =============================================================================

class SectorEntrySchema(BaseModel):
    """A NAF/APE activity code and its label."""
    code: str = Field(..., min_length=1, description="NAF/APE code (e.g. '68.31Z')")
    label: str = Field(..., min_length=1, description="Activity label used in justifications")

    model_config = {"extra": "forbid"}


class SectorTiersSchema(BaseModel):
    """Sector entries per tier, checked very_high, then high, then moderate."""
    very_high: list[SectorEntrySchema] = Field(default_factory=list)
    high: list[SectorEntrySchema] = Field(default_factory=list)
    moderate: list[SectorEntrySchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_codes(self) -> "SectorTiersSchema":
        codes = [e.code for e in (*self.very_high, *self.high, *self.moderate)]
        duplicates = {c for c in codes if codes.count(c) > 1}
        if duplicates:
            raise ValueError(f"Sector codes listed more than once: {sorted(duplicates)}")
        return self

    model_config = {"extra": "forbid"}


# =============================================================================
# Pack
# =============================================================================

class RegistryPackSchema(BaseModel):
    """
    Top-level schema for a registry pack YAML/JSON file.
    """
    # Metadata
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    id: str = Field(..., min_length=1, description="Unique identifier (e.g. 'FR-LCBFT-DEFAULT')")
    name: str = Field(..., description="Human-readable name")
    version: str = Field(..., description="Version string (e.g. '2024.1')")
    jurisdiction: str = Field(..., description="Jurisdiction code (e.g. 'FR')")
    home_jurisdiction: str = Field(
        ..., min_length=1,
        description="Country name of the establishment; accounts held there are not foreign",
    )
    description: Optional[str] = None

    countries: CountryListsSchema = Field(default_factory=CountryListsSchema)
    sectors: SectorTiersSchema = Field(default_factory=SectorTiersSchema)

    @field_validator("jurisdiction")
    @classmethod
    def validate_jurisdiction(cls, v: str) -> str:
        return v.upper()

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_registry_pack(data: dict[str, Any]) -> RegistryPackSchema:
    """
    Validate a registry pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return RegistryPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """True if the pack's schema major version matches this release."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]
