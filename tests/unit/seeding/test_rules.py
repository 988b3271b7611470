"""
Unit tests for the Rule model.
"""

import uuid

import pytest
from pydantic import ValidationError

from painterqueue.seeding.rules import Rule

RULE_ID = "6f1c1a52-9b2f-4a8e-8d3c-0a7b5d1e2f30"


def rule_data(**overrides):
    data = {
        "id": RULE_ID,
        "name": "No varnish",
        "internalDescription": "Varnish is applied by the framer.",
        "description": "Paintings are delivered unvarnished.",
        "page": 2,
    }
    data.update(overrides)
    return data


class TestRule:
    """Test rule validation."""

    def test_valid(self):
        rule = Rule.model_validate(rule_data())

        assert rule.id == uuid.UUID(RULE_ID)
        assert rule.internal_description == "Varnish is applied by the framer."
        assert rule.page == 2
        assert rule.created is None

    def test_keys_ignore_case(self):
        """Test seed files may use any casing for property names."""
        rule = Rule.model_validate({
            "Id": RULE_ID,
            "NAME": "n",
            "InternalDescription": "i",
            "Description": "d",
            "Page": 5,
            "Created": "2026-01-01T00:00:00Z",
        })

        assert rule.name == "n"
        assert rule.internal_description == "i"
        assert rule.page == 5
        assert rule.created.year == 2026

    def test_snake_case_keys(self):
        data = rule_data()
        data["internal_description"] = data.pop("internalDescription")

        assert Rule.model_validate(data).internal_description == "Varnish is applied by the framer."

    def test_page_defaults_to_zero(self):
        data = rule_data()
        del data["page"]
        assert Rule.model_validate(data).page == 0

    @pytest.mark.parametrize("overrides", [
        {"name": ""},
        {"name": "x" * 61},
        {"internalDescription": "x" * 1025},
        {"description": ""},
        {"page": -1},
        {"page": 1000},
        {"id": "not-a-uuid"},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValidationError):
            Rule.model_validate(rule_data(**overrides))

    def test_dump_uses_alias(self):
        dumped = Rule.model_validate(rule_data()).model_dump(by_alias=True)
        assert "internalDescription" in dumped
