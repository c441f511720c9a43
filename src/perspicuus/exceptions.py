"""
Perspicuus Exception Hierarchy

Domain-specific exceptions for LCBFT risk assessment and secure import.
All exceptions include error codes for tracking and logging.

The scoring pipeline itself never raises: every well-typed request yields a
score. Errors come from the two boundaries that handle untrusted or external
data: importing JSON payloads and loading risk registry packs.

Exception codes follow the pattern: PS_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PerspicuusError(Exception):
    """
    Base exception for all Perspicuus errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (PS_*)
        details: Additional context about the error
    """
    message: str
    code: str = "PS_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging and CLI output."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Import Errors
# =============================================================================

@dataclass
class PayloadImportError(PerspicuusError):
    """Base class for every failure of the import pipeline."""
    code: str = "PS_IMPORT_ERROR"


@dataclass
class PayloadTooLargeError(PayloadImportError):
    """Payload exceeds the size ceiling; it was never decoded."""
    code: str = "PS_IMPORT_PAYLOAD_TOO_LARGE"


@dataclass
class MalformedInputError(PayloadImportError):
    """Payload is not syntactically valid JSON."""
    code: str = "PS_IMPORT_MALFORMED"


@dataclass
class SchemaViolationError(PayloadImportError):
    """Valid JSON with the wrong shape, types or value ranges."""
    code: str = "PS_IMPORT_SCHEMA_VIOLATION"


@dataclass
class UnrecognizedFormatError(PayloadImportError):
    """Valid JSON that matches none of the known export formats."""
    code: str = "PS_IMPORT_UNRECOGNIZED"


@dataclass
class InvalidFileMetadataError(PayloadImportError):
    """Rejected file name, MIME type or size, checked before reading content."""
    code: str = "PS_IMPORT_FILE_METADATA"


# =============================================================================
# Registry Errors
# =============================================================================

@dataclass
class RegistryError(PerspicuusError):
    """Base class for risk registry failures."""
    code: str = "PS_REGISTRY_ERROR"


@dataclass
class RegistryLoadError(RegistryError):
    """Failed to read a registry pack from disk."""
    code: str = "PS_REGISTRY_LOAD_ERROR"


@dataclass
class RegistryValidationError(RegistryError):
    """Registry pack failed schema validation."""
    code: str = "PS_REGISTRY_VALIDATION_ERROR"


@dataclass
class RegistryVersionMismatch(RegistryError):
    """Registry pack schema version is incompatible."""
    code: str = "PS_REGISTRY_VERSION_MISMATCH"
