"""
Perspicuus Risk Registries

Static country and sector tables consumed by the scoring rules, loaded from
versioned YAML packs and frozen into a RiskRegistry.

Usage:
    from perspicuus.registry import load_default_registry, load_registry

    registry = load_default_registry()
    registry.country_tier("Iran")          # CountryTier.VERY_HIGH
    registry.sector_lookup("68.31Z")       # SectorMatch(tier=HIGH, ...)

    custom = load_registry("my_registry.yaml")
"""
from __future__ import annotations

from .loader import (
    DEFAULT_REGISTRY_PATH,
    RegistryLoader,
    load_default_registry,
    load_registry,
    load_registry_from_string,
)
from .registry import CountryProfile, RiskRegistry, SectorMatch
from .schema import SCHEMA_VERSION, RegistryPackSchema, validate_registry_pack

__all__ = [
    # Loader
    "DEFAULT_REGISTRY_PATH",
    "RegistryLoader",
    "load_default_registry",
    "load_registry",
    "load_registry_from_string",
    # Registry
    "CountryProfile",
    "RiskRegistry",
    "SectorMatch",
    # Schema
    "SCHEMA_VERSION",
    "RegistryPackSchema",
    "validate_registry_pack",
]
