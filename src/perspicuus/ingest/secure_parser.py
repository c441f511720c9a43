"""
Secure JSON Parser

Size-bounded, injection-safe JSON decoding with schema validation.

Order of checks:
1. Size ceiling, before any decoding (PayloadTooLargeError)
2. UTF-8 and JSON syntax (MalformedInputError)
3. Forbidden keys (__proto__, constructor, prototype) dropped at any depth
4. Schema validation (SchemaViolationError)

A call returns a fully validated value or raises; it never returns a
partially populated object.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..config import DEFAULT_MAX_IMPORT_BYTES, DEFAULT_MAX_JSON_DEPTH
from ..exceptions import (
    InvalidFileMetadataError,
    MalformedInputError,
    PayloadTooLargeError,
    SchemaViolationError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

FORBIDDEN_KEYS = frozenset({"__proto__", "constructor", "prototype"})

JSON_CONTENT_TYPES = frozenset({"application/json"})

# Pre-compiled patterns for free-text sanitization
SCRIPT_BLOCK_PATTERN = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]*>")
JAVASCRIPT_URL_PATTERN = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER_PATTERN = re.compile(r"on\w+\s*=", re.IGNORECASE)


# =============================================================================
# Decoding
# =============================================================================

def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _format_errors(e: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "<root>",
            "message": err["msg"],
        }
        for err in e.errors(include_url=False)
    ]


class SecureJsonParser:
    """
    Decodes and validates untrusted JSON payloads.

    Usage:
        parser = SecureJsonParser()
        request = parser.parse(raw_bytes, RequestSchema)

    Args:
        max_size: Size ceiling in bytes
        max_depth: Deepest allowed nesting of objects and arrays
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_IMPORT_BYTES,
        max_depth: int = DEFAULT_MAX_JSON_DEPTH,
    ):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self.max_size = max_size
        self.max_depth = max_depth

    def check_depth(self, data: Any) -> None:
        # Iterative walk: the decoded value may be deeper than the interpreter stack allows
        stack = [(data, 1)]
        while stack:
            value, depth = stack.pop()
            if isinstance(value, dict):
                children = value.values()
            elif isinstance(value, list):
                children = value
            else:
                continue
            if depth > self.max_depth:
                raise MalformedInputError(
                    message=f"Invalid JSON: nesting deeper than {self.max_depth} levels",
                    details={"max_depth": self.max_depth},
                )
            stack.extend((child, depth + 1) for child in children)

    def _check_size(self, payload: Union[bytes, bytearray, str]) -> bytes:
        # A str has at least as many UTF-8 bytes as characters
        if len(payload) > self.max_size:
            self._too_large(len(payload))
        raw = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        if len(raw) > self.max_size:
            self._too_large(len(raw))
        return raw

    def _too_large(self, size: int) -> None:
        raise PayloadTooLargeError(
            message=f"Payload exceeds the {self.max_size} byte limit",
            details={"size": size, "max_size": self.max_size},
        )

    def decode(self, payload: Union[bytes, bytearray, str]) -> Any:
        """
        Decode a JSON payload with forbidden keys removed.

        Raises:
            PayloadTooLargeError: Payload over the size ceiling
            MalformedInputError: Not UTF-8, not valid JSON, or nested too deeply
        """
        raw = self._check_size(payload)

        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError(
                message="Payload is not valid UTF-8",
                details={"position": e.start},
            ) from e

        dropped: list[str] = []

        def drop_forbidden_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
            obj = {}
            for key, value in pairs:
                if key in FORBIDDEN_KEYS:
                    dropped.append(key)
                    continue
                obj[key] = value
            return obj

        try:
            data = json.loads(
                text,
                object_pairs_hook=drop_forbidden_keys,
                parse_constant=_reject_constant,
            )
        except json.JSONDecodeError as e:
            raise MalformedInputError(
                message=f"Invalid JSON: {e.msg}",
                details={"line": e.lineno, "column": e.colno},
            ) from e
        except ValueError as e:
            raise MalformedInputError(message=f"Invalid JSON: {e}") from e
        except RecursionError as e:
            raise MalformedInputError(message="Invalid JSON: nesting too deep") from e

        self.check_depth(data)
        if dropped:
            logger.warning("Dropped forbidden keys from payload: %s", sorted(set(dropped)))
        return data

    def validate(self, data: Any, schema: Type[ModelT]) -> ModelT:
        """
        Validate already-decoded data against a schema.

        Raises:
            SchemaViolationError: Wrong shape, types or ranges
        """
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            errors = _format_errors(e)
            summary = "; ".join(f"{err['field']}: {err['message']}" for err in errors[:5])
            raise SchemaViolationError(
                message=f"{schema.__name__} validation failed ({e.error_count()} errors): {summary}",
                details={"schema": schema.__name__, "errors": errors},
            ) from e

    def parse(self, payload: Union[bytes, bytearray, str], schema: Type[ModelT]) -> ModelT:
        """Decode then validate."""
        return self.validate(self.decode(payload), schema)


def parse_json(
    payload: Union[bytes, bytearray, str],
    schema: Type[ModelT],
    max_size: int = DEFAULT_MAX_IMPORT_BYTES,
) -> ModelT:
    return SecureJsonParser(max_size).parse(payload, schema)


# =============================================================================
# File Metadata
# =============================================================================

def validate_file_metadata(
    filename: str,
    content_type: Optional[str] = None,
    size: Optional[int] = None,
    max_size: int = DEFAULT_MAX_IMPORT_BYTES,
) -> None:
    """
    Check an uploaded file's declared metadata before reading it.

    Raises:
        InvalidFileMetadataError: Not JSON, too large, or a traversal name
    """
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime not in JSON_CONTENT_TYPES and not filename.lower().endswith(".json"):
        raise InvalidFileMetadataError(
            message="Only JSON files are accepted",
            details={"filename": filename[:100], "content_type": content_type},
        )

    if size is not None and size > max_size:
        raise InvalidFileMetadataError(
            message=f"File exceeds the {max_size} byte limit",
            details={"filename": filename[:100], "size": size, "max_size": max_size},
        )

    if "../" in filename or "..\\" in filename:
        raise InvalidFileMetadataError(
            message="Invalid file name",
            details={"filename": filename[:100], "constraint": "no path traversal"},
        )


# =============================================================================
# Text Sanitization
# =============================================================================

def sanitize_text(text: str) -> str:
    """Strip script blocks, markup, javascript: URLs and inline event handlers."""
    text = SCRIPT_BLOCK_PATTERN.sub("", text)
    text = TAG_PATTERN.sub("", text)
    text = JAVASCRIPT_URL_PATTERN.sub("", text)
    text = EVENT_HANDLER_PATTERN.sub("", text)
    return text.strip()
