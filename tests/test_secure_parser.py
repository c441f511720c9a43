"""
Adversarial input tests for the secure JSON parser.

Tests that verify:
1. Oversize payloads are rejected before any decoding
2. Malformed and non-standard JSON is rejected
3. Prototype-pollution keys are dropped at every depth
4. Schema violations are reported with field paths, never coerced,
   including in the questionnaire supplements
5. Uploaded file metadata and imported free text are sanitized
"""
from __future__ import annotations

from datetime import date

import pytest

from perspicuus.exceptions import (
    InvalidFileMetadataError,
    MalformedInputError,
    PayloadTooLargeError,
    SchemaViolationError,
)
from perspicuus.ingest import secure_parser
from perspicuus.ingest.schemas import RequestSchema
from perspicuus.ingest.secure_parser import (
    SecureJsonParser,
    parse_json,
    sanitize_text,
    validate_file_metadata,
)
from perspicuus.models import ClientSegment, NPOCategory, PPECategory

from tests.conftest import to_bytes, wire_request


# =============================================================================
# Size Ceiling
# =============================================================================

class TestSizeCeiling:
    """Payload size is checked before the decoder runs."""

    def test_eleven_mebibytes_rejected_without_decoding(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail_if_called(*args, **kwargs):
            raise AssertionError("decoder must not run on oversize payloads")

        monkeypatch.setattr(secure_parser.json, "loads", fail_if_called)
        payload = b" " * (11 * 1024 * 1024)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            SecureJsonParser().decode(payload)
        assert exc_info.value.details["size"] == len(payload)
        assert exc_info.value.details["max_size"] == 10 * 1024 * 1024

    def test_oversize_text_rejected(self) -> None:
        with pytest.raises(PayloadTooLargeError):
            SecureJsonParser(max_size=16).decode('{"key": "' + "x" * 32 + '"}')

    def test_limit_counts_encoded_bytes(self) -> None:
        parser = SecureJsonParser(max_size=10)
        with pytest.raises(PayloadTooLargeError):
            parser.decode('"' + "é" * 5 + '"')  # 7 characters, 12 bytes

    def test_payload_at_limit_accepted(self) -> None:
        payload = b'{"a": 1}'
        assert SecureJsonParser(max_size=len(payload)).decode(payload) == {"a": 1}

    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            SecureJsonParser(max_size=0)


# =============================================================================
# Syntax
# =============================================================================

class TestMalformedInput:

    @pytest.mark.parametrize("payload", [
        b"",
        b"{",
        b'{"a":}',
        b"{'a': 1}",
        b'{"a": 1,}',
        b"NaN",
        b'{"a": Infinity}',
        b'{"a": -Infinity}',
        b"\xff\xfe\x00",
    ])
    def test_rejected(self, payload: bytes) -> None:
        with pytest.raises(MalformedInputError):
            SecureJsonParser().decode(payload)

    def test_deep_nesting_rejected(self) -> None:
        depth = 100_000
        with pytest.raises(MalformedInputError):
            SecureJsonParser().decode(b"[" * depth + b"]" * depth)

    def test_nesting_at_limit_accepted(self) -> None:
        parser = SecureJsonParser(max_depth=3)
        assert parser.decode(b'{"a": [{"b": 1}]}') == {"a": [{"b": 1}]}

    def test_nesting_past_limit_rejected(self) -> None:
        parser = SecureJsonParser(max_depth=3)
        with pytest.raises(MalformedInputError) as exc_info:
            parser.decode(b'{"a": [{"b": []}]}')
        assert exc_info.value.details["max_depth"] == 3

    def test_scalars_do_not_count_toward_depth(self) -> None:
        assert SecureJsonParser(max_depth=1).decode(b'[1, "a", null]') == [1, "a", None]

    def test_non_positive_depth_rejected(self) -> None:
        with pytest.raises(ValueError):
            SecureJsonParser(max_depth=0)

    def test_syntax_error_position_reported(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            SecureJsonParser().decode(b'{\n  "a": tru\n}')
        assert exc_info.value.details["line"] == 2

    def test_byte_order_mark_accepted(self) -> None:
        assert SecureJsonParser().decode(b'\xef\xbb\xbf{"a": 1}') == {"a": 1}


# =============================================================================
# Forbidden Keys
# =============================================================================

class TestForbiddenKeys:
    """__proto__, constructor and prototype never reach the application."""

    def test_top_level_proto_dropped(self) -> None:
        data = SecureJsonParser().decode(b'{"__proto__": {"polluted": true}}')
        assert data == {}
        assert not hasattr(object, "polluted")
        assert not hasattr({}, "polluted")

    def test_nested_keys_dropped(self) -> None:
        payload = b'{"a": {"constructor": {"prototype": 1}, "b": 2}, "c": [{"prototype": 3}]}'
        assert SecureJsonParser().decode(payload) == {"a": {"b": 2}, "c": [{}]}

    def test_polluted_request_still_validates(self) -> None:
        data = wire_request()
        data["__proto__"] = {"isAdmin": True}
        data["client"]["constructor"] = {"prototype": {"pep": True}}
        parsed = parse_json(to_bytes(data), RequestSchema)
        assert parsed.client.pep is False
        assert not hasattr(parsed, "__proto__")

    def test_only_forbidden_keys_is_schema_violation(self) -> None:
        with pytest.raises(SchemaViolationError):
            parse_json(b'{"__proto__": {"polluted": true}}', RequestSchema)
        assert not hasattr(object, "polluted")


# =============================================================================
# Schema Validation
# =============================================================================

class TestSchemaValidation:
    """Wrong types and out-of-range values are rejected, never coerced."""

    def _violation(self, **overrides) -> SchemaViolationError:
        with pytest.raises(SchemaViolationError) as exc_info:
            parse_json(to_bytes(wire_request(**overrides)), RequestSchema)
        return exc_info.value

    def test_valid_request(self) -> None:
        parsed = parse_json(to_bytes(wire_request()), RequestSchema)
        assert parsed.geographic.pays_residence == "France"
        assert parsed.transaction.montant == 25000

    def test_string_boolean_rejected(self) -> None:
        error = self._violation(client={"pep": "true"})
        assert error.details["errors"][0]["field"] == "client.pep"
        assert error.details["schema"] == "RequestSchema"

    def test_negative_amount_rejected(self) -> None:
        error = self._violation(transaction={"montant": -1})
        assert error.details["errors"][0]["field"] == "transaction.montant"

    def test_string_amount_rejected(self) -> None:
        self._violation(transaction={"montant": "25000"})

    def test_negative_distance_rejected(self) -> None:
        self._violation(geographic={"distance_etablissement": -0.5})

    def test_empty_country_rejected(self) -> None:
        self._violation(geographic={"pays_residence": ""})

    @pytest.mark.parametrize("year", [1899, date.today().year + 1, "1980"])
    def test_birth_year_out_of_range(self, year) -> None:
        error = self._violation(client={"annee_naissance": year})
        assert error.details["errors"][0]["field"] == "client.annee_naissance"

    def test_birth_year_lower_bound_accepted(self) -> None:
        parsed = parse_json(to_bytes(wire_request(client={"annee_naissance": 1900})), RequestSchema)
        assert parsed.client.annee_naissance == 1900

    @pytest.mark.parametrize("value", [-1, 2.5, "3"])
    def test_relationship_length_must_be_non_negative_integer(self, value) -> None:
        self._violation(client={"relation_etablie": value})

    def test_unknown_payment_method_rejected(self) -> None:
        self._violation(transaction={"mode_paiement": "Bitcoin"})

    def test_unknown_client_type_rejected(self) -> None:
        self._violation(client={"type_client": "Association"})

    def test_missing_section_rejected(self) -> None:
        data = wire_request()
        del data["transaction"]
        with pytest.raises(SchemaViolationError) as exc_info:
            parse_json(to_bytes(data), RequestSchema)
        assert "transaction" in str(exc_info.value)

    @pytest.mark.parametrize("value,expected", [
        ("2024-03-01", date(2024, 3, 1)),
        ("2024-03-01T00:00:00.000Z", date(2024, 3, 1)),
        ("2024-03-01T10:30:00+02:00", date(2024, 3, 1)),
    ])
    def test_creation_date_formats(self, value: str, expected: date) -> None:
        data = wire_request(client={"type_client": "Personne morale", "date_creation": value})
        assert parse_json(to_bytes(data), RequestSchema).client.date_creation == expected

    def test_invalid_creation_date_rejected(self) -> None:
        self._violation(client={"date_creation": "hier"})

    @pytest.mark.parametrize("value", [0, 1700000000, 2024.5, True, ["2024-03-01"]])
    def test_non_string_creation_date_rejected(self, value) -> None:
        error = self._violation(client={"date_creation": value})
        assert error.details["errors"][0]["field"] == "client.date_creation"

    def test_null_creation_date_accepted(self) -> None:
        parsed = parse_json(to_bytes(wire_request(client={"date_creation": None})), RequestSchema)
        assert parsed.client.date_creation is None

    def test_unknown_keys_ignored(self) -> None:
        data = wire_request(client={"commentaire": "RAS"})
        data["extra_section"] = {"x": 1}
        parse_json(to_bytes(data), RequestSchema)

    def test_message_lists_errors(self) -> None:
        error = self._violation(client={"pep": "yes", "sanctions": "no"})
        assert "2 errors" in error.message
        assert str(error).startswith("[PS_IMPORT_SCHEMA_VIOLATION]")


class TestSupplementSchemas:
    """Questionnaire supplements: known fields typed, other keys kept."""

    def _parse(self, **supplements) -> RequestSchema:
        data = wire_request()
        data.update(supplements)
        return parse_json(to_bytes(data), RequestSchema)

    def _violation(self, **supplements) -> SchemaViolationError:
        with pytest.raises(SchemaViolationError) as exc_info:
            self._parse(**supplements)
        return exc_info.value

    def test_valid_sections(self) -> None:
        parsed = self._parse(
            wealthManagementInfo={
                "client_segment": "Ultra haute fortune",
                "assets_under_management": 25_000_000,
                "wealth_sources": ["Héritage familial", "Cession d'entreprise"],
                "risk_tolerance": "ELEVE",
            },
            npoInfo={
                "category": "Fondation",
                "activity_types": ["Aide humanitaire"],
                "funding_sources": ["Dons privés", "Fonds européens"],
                "transparency_score": 10,
            },
            travelRuleInfo={
                "cross_border": True,
                "jurisdiction_compliance": {"FR": True, "CH": False},
                "missing_information": ["beneficiary_address"],
            },
            ppeInfo={"pep_category": "PEP_ETRANGER", "pep_functions": ["Parlementaire"]},
        )
        assert parsed.wealthManagementInfo.client_segment == ClientSegment.ULTRA_HIGH_NET_WORTH
        assert parsed.npoInfo.category == NPOCategory.FOUNDATION
        assert parsed.travelRuleInfo.jurisdiction_compliance == {"FR": True, "CH": False}
        assert parsed.ppeInfo.pep_category == PPECategory.FOREIGN

    def test_unknown_keys_kept(self) -> None:
        parsed = self._parse(npoInfo={"objet": "humanitaire", "annual_budget": 1000})
        assert parsed.npoInfo.model_dump(mode="json", exclude_unset=True) == {
            "objet": "humanitaire",
            "annual_budget": 1000,
        }

    @pytest.mark.parametrize("section,values,field", [
        ("npoInfo", {"annual_budget": "1000"}, "npoInfo.annual_budget"),
        ("npoInfo", {"annual_budget": -1}, "npoInfo.annual_budget"),
        ("npoInfo", {"transparency_score": 11}, "npoInfo.transparency_score"),
        ("npoInfo", {"category": "Club"}, "npoInfo.category"),
        ("npoInfo", {"activity_types": ["Aide humanitaire", "Loisirs"]}, "npoInfo.activity_types.1"),
        ("wealthManagementInfo", {"assets_under_management": -5}, "wealthManagementInfo.assets_under_management"),
        ("wealthManagementInfo", {"risk_tolerance": "HAUT"}, "wealthManagementInfo.risk_tolerance"),
        ("wealthManagementInfo", {"geographic_exposure": "Suisse"}, "wealthManagementInfo.geographic_exposure"),
        ("travelRuleInfo", {"cross_border": "true"}, "travelRuleInfo.cross_border"),
        ("travelRuleInfo", {"jurisdiction_compliance": {"FR": 1}}, "travelRuleInfo.jurisdiction_compliance.FR"),
        ("ppeInfo", {"pep_category": "PEP_LOCAL"}, "ppeInfo.pep_category"),
        ("ppeInfo", {"family_member": "oui"}, "ppeInfo.family_member"),
    ])
    def test_wrong_field_rejected(self, section: str, values: dict, field: str) -> None:
        error = self._violation(**{section: values})
        assert error.details["errors"][0]["field"] == field

    def test_section_must_be_object(self) -> None:
        self._violation(ppeInfo=["Ministre"])


# =============================================================================
# File Metadata
# =============================================================================

class TestFileMetadata:

    @pytest.mark.parametrize("filename,content_type", [
        ("export.json", None),
        ("EXPORT.JSON", "text/plain"),
        ("data.txt", "application/json"),
        ("data", "application/json; charset=utf-8"),
    ])
    def test_accepted(self, filename: str, content_type) -> None:
        validate_file_metadata(filename, content_type)

    @pytest.mark.parametrize("filename,content_type", [
        ("export.txt", "text/plain"),
        ("export.exe", None),
        ("report.pdf", "application/pdf"),
    ])
    def test_non_json_rejected(self, filename: str, content_type) -> None:
        with pytest.raises(InvalidFileMetadataError, match="Only JSON"):
            validate_file_metadata(filename, content_type)

    @pytest.mark.parametrize("filename", ["../../etc/passwd.json", "..\\secrets.json"])
    def test_path_traversal_rejected(self, filename: str) -> None:
        with pytest.raises(InvalidFileMetadataError, match="Invalid file name"):
            validate_file_metadata(filename, "application/json")

    def test_declared_size_checked(self) -> None:
        with pytest.raises(InvalidFileMetadataError):
            validate_file_metadata("export.json", size=2048, max_size=1024)


# =============================================================================
# Text Sanitization
# =============================================================================

class TestSanitizeText:

    @pytest.mark.parametrize("text,expected", [
        ("<script>alert(1)</script>Bonjour", "Bonjour"),
        ("<SCRIPT type='x'>steal()</SCRIPT> ok", "ok"),
        ("<b>Gras</b>", "Gras"),
        ('<img src=x onerror="alert(1)">', ""),
        ("javascript:alert(1)", "alert(1)"),
        ("texte onclick=foo", "texte foo"),
        ("  Virement international  ", "Virement international"),
    ])
    def test_sanitize(self, text: str, expected: str) -> None:
        assert sanitize_text(text) == expected
