import json

import pytest

from lexisense.analysis.exceptions import SchemaValidationError
from lexisense.analysis.models import KeyDate, Party, Risk
from lexisense.analysis.validator import validate


def _valid_payload() -> dict[str, object]:
    return {
        "summary": "Supply agreement for industrial parts.",
        "parties": [
            {"name": "Acme Corp", "role": "Provider"},
            {"name": "Beta LLC", "role": "Customer"},
        ],
        "dates": [{"label": "Effective date", "date": "2024-01-15"}],
        "risks": [{"severity": "high", "description": "Unlimited liability"}],
    }


def _with(**overrides: object) -> str:
    payload = _valid_payload()
    payload.update(overrides)
    return json.dumps(payload)


class TestValidInput:
    def test_builds_partial_analysis(self) -> None:
        result = validate(json.dumps(_valid_payload()))
        assert result.summary == "Supply agreement for industrial parts."
        assert result.parties == [
            Party(name="Acme Corp", role="Provider"),
            Party(name="Beta LLC", role="Customer"),
        ]
        assert result.dates == [KeyDate(label="Effective date", date="2024-01-15")]
        assert result.risks == [Risk(severity="high", description="Unlimited liability")]

    def test_empty_lists_are_valid(self) -> None:
        result = validate(_with(parties=[], dates=[], risks=[]))
        assert result.parties == []
        assert result.dates == []
        assert result.risks == []

    def test_strips_markdown_code_fences(self) -> None:
        raw = "```json\n" + json.dumps(_valid_payload()) + "\n```"
        assert validate(raw).summary == "Supply agreement for industrial parts."

    def test_is_deterministic(self) -> None:
        raw = json.dumps(_valid_payload())
        assert validate(raw) == validate(raw)

    def test_does_not_trim_values(self) -> None:
        result = validate(_with(parties=[{"name": " Acme Corp ", "role": "Provider"}]))
        assert result.parties[0].name == " Acme Corp "


class TestRejectedInput:
    def test_wrong_summary_type(self) -> None:
        with pytest.raises(SchemaValidationError):
            validate('{"summary": 123}')

    def test_wrong_summary_type_with_all_fields(self) -> None:
        with pytest.raises(SchemaValidationError, match="'summary' must be a string"):
            validate(_with(summary=123))

    def test_not_json(self) -> None:
        with pytest.raises(SchemaValidationError, match="Invalid JSON"):
            validate("not json")

    def test_array_instead_of_object(self) -> None:
        with pytest.raises(SchemaValidationError, match="must be an object"):
            validate("[]")

    def test_primitive_instead_of_object(self) -> None:
        with pytest.raises(SchemaValidationError, match="must be an object"):
            validate('"summary"')

    @pytest.mark.parametrize("field", ["summary", "parties", "dates", "risks"])
    def test_missing_required_field(self, field: str) -> None:
        payload = _valid_payload()
        del payload[field]
        with pytest.raises(SchemaValidationError, match=f"Missing required top-level field: {field}"):
            validate(json.dumps(payload))

    def test_parties_not_a_list(self) -> None:
        with pytest.raises(SchemaValidationError, match="'parties' must be a list"):
            validate(_with(parties={"name": "Acme Corp", "role": "Provider"}))

    def test_party_not_an_object(self) -> None:
        with pytest.raises(SchemaValidationError, match="Party at index 0 must be an object"):
            validate(_with(parties=["Acme Corp"]))

    def test_party_missing_role(self) -> None:
        with pytest.raises(SchemaValidationError, match="missing 'role'"):
            validate(_with(parties=[{"name": "Acme Corp"}]))

    def test_party_name_wrong_type(self) -> None:
        with pytest.raises(SchemaValidationError, match="'name' must be a string"):
            validate(_with(parties=[{"name": None, "role": "Provider"}]))

    @pytest.mark.parametrize("value", ["15/01/2024", "2024-1-15", "2024-01-15T00:00:00", ""])
    def test_date_not_iso_format(self, value: str) -> None:
        with pytest.raises(SchemaValidationError, match="YYYY-MM-DD"):
            validate(_with(dates=[{"label": "Effective date", "date": value}]))

    def test_date_not_a_calendar_date(self) -> None:
        with pytest.raises(SchemaValidationError, match="not a calendar date"):
            validate(_with(dates=[{"label": "Effective date", "date": "2024-02-30"}]))

    def test_risk_severity_outside_enum(self) -> None:
        with pytest.raises(SchemaValidationError, match="'severity' must be one of"):
            validate(_with(risks=[{"severity": "critical", "description": "x"}]))

    def test_risk_severity_is_case_sensitive(self) -> None:
        with pytest.raises(SchemaValidationError, match="'severity' must be one of"):
            validate(_with(risks=[{"severity": "High", "description": "x"}]))

    @pytest.mark.parametrize(
        ("field", "payload", "leaked"),
        [
            ("dates", [{"label": "Termination", "date": "Secret Clause 31/12"}], "Secret Clause"),
            ("dates", [{"label": "Termination", "date": "2024-02-30"}], "2024-02-30"),
            ("risks", [{"severity": "Confidential", "description": "x"}], "Confidential"),
        ],
    )
    def test_error_message_omits_model_output(
        self, field: str, payload: list[dict[str, str]], leaked: str
    ) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            validate(_with(**{field: payload}))
        assert leaked not in str(exc_info.value)

    def test_one_bad_entry_rejects_whole_record(self) -> None:
        risks = [
            {"severity": "low", "description": "ok"},
            {"severity": "low", "description": 5},
        ]
        with pytest.raises(SchemaValidationError, match="Risk at index 1"):
            validate(_with(risks=risks))
