"""
Runtime configuration.

Settings come from environment variables in the PERSPICUUS_ namespace:

    PERSPICUUS_MAX_IMPORT_BYTES   Size ceiling for imported payloads (default 10 MiB)
    PERSPICUUS_REGISTRY_PATH      Replacement registry pack (YAML or JSON)
    PERSPICUUS_LOG_LEVEL          CLI log level (default INFO)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


APPLICATION_ID = "Perspicuus LCBFT"
EXPORT_VERSION = "1.0.0"
DISCLAIMER = (
    "Outil d'aide à la décision - "
    "Ne constitue pas un engagement de conformité réglementaire"
)

DEFAULT_MAX_IMPORT_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_MAX_JSON_DEPTH = 32


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, resolved once from the environment."""
    max_import_bytes: int = DEFAULT_MAX_IMPORT_BYTES
    registry_path: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        max_bytes = int(os.getenv("PERSPICUUS_MAX_IMPORT_BYTES", str(DEFAULT_MAX_IMPORT_BYTES)))
        if max_bytes <= 0:
            raise ValueError("PERSPICUUS_MAX_IMPORT_BYTES must be positive")
        return cls(
            max_import_bytes=max_bytes,
            registry_path=os.getenv("PERSPICUUS_REGISTRY_PATH") or None,
            log_level=os.getenv("PERSPICUUS_LOG_LEVEL", "INFO").upper(),
        )
