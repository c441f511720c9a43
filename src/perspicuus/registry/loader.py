"""
Perspicuus Risk Registry Loader

Loads and validates registry packs from YAML or JSON files and converts the
validated schema into an immutable RiskRegistry.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import RegistryLoadError, RegistryValidationError, RegistryVersionMismatch
from ..models.enums import SectorTier
from .registry import RiskRegistry
from .schema import (
    SCHEMA_VERSION,
    RegistryPackSchema,
    SectorEntrySchema,
    check_schema_version,
    validate_registry_pack,
)

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path(__file__).parent / "data" / "lcbft_fr.yaml"


# =============================================================================
# Schema to Model Converter
# =============================================================================

def _sector_table(entries: list[SectorEntrySchema]) -> dict[str, str]:
    return {entry.code: entry.label for entry in entries}


def _convert_registry_pack(schema: RegistryPackSchema) -> RiskRegistry:
    """Convert RegistryPackSchema to RiskRegistry."""
    return RiskRegistry.create(
        id=schema.id,
        name=schema.name,
        version=schema.version,
        jurisdiction=schema.jurisdiction,
        home_jurisdiction=schema.home_jurisdiction,
        very_high_countries=schema.countries.very_high,
        high_countries=schema.countries.high,
        aggravated_countries=schema.countries.aggravated,
        sanctioned_countries=schema.countries.sanctioned,
        eu_members=schema.countries.eu_members,
        sectors={
            SectorTier.VERY_HIGH: _sector_table(schema.sectors.very_high),
            SectorTier.HIGH: _sector_table(schema.sectors.high),
            SectorTier.MODERATE: _sector_table(schema.sectors.moderate),
        },
    )


def _validate(data: Any, source: str, strict_version: bool = True) -> RiskRegistry:
    if not isinstance(data, dict):
        raise RegistryValidationError(
            message="Registry pack must be a mapping at the top level",
            details={"path": source},
        )

    if strict_version and not check_schema_version(data):
        pack_version = data.get("schema_version", "unknown")
        raise RegistryVersionMismatch(
            message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
            details={
                "pack_version": pack_version,
                "expected_version": SCHEMA_VERSION,
            },
        )

    try:
        schema = validate_registry_pack(data)
    except ValidationError as e:
        raise RegistryValidationError(
            message=f"Registry pack validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_url=False), "path": source},
        ) from e

    registry = _convert_registry_pack(schema)
    logger.info(
        "Loaded risk registry %s v%s (%d sectors, hash %s)",
        registry.id, registry.version, registry.sector_count, registry.content_hash[:16],
    )
    return registry


# =============================================================================
# Loader
# =============================================================================

class RegistryLoader:
    """
    Loads risk registry packs from disk.

    Usage:
        loader = RegistryLoader()
        registry = loader.load("path/to/registry.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Args:
            strict_version: If True, reject packs with incompatible schema versions
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> RiskRegistry:
        """
        Load a registry pack from a file.

        Raises:
            RegistryLoadError: If file cannot be read or parsed
            RegistryValidationError: If validation fails
            RegistryVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise RegistryLoadError(
                message=f"Failed to load registry pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        return _validate(data, str(path), self.strict_version)

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)


def load_registry(path: Union[str, Path]) -> RiskRegistry:
    """Load a registry pack from a file."""
    return RegistryLoader().load(path)


def load_registry_from_string(content: str, format: str = "yaml") -> RiskRegistry:
    """
    Load a registry pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise RegistryLoadError(
            message=f"Failed to parse registry pack: {e}",
            details={"format": format},
        ) from e
    return _validate(data, "<string>")


@lru_cache(maxsize=None)
def _load_cached(path: str) -> RiskRegistry:
    return load_registry(path)


def load_default_registry(path: Optional[Union[str, Path]] = None) -> RiskRegistry:
    """
    The registry used when none is injected.

    Resolution order: explicit path, PERSPICUUS_REGISTRY_PATH, packaged
    French registry. Loaded once per path and shared afterwards.
    """
    if path is None:
        from ..config import Settings

        path = Settings.from_env().registry_path or DEFAULT_REGISTRY_PATH
    return _load_cached(str(Path(path).resolve()))
