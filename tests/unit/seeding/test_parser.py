"""
Unit tests for seed file parsing.
"""

import io
import json

import pytest
from pydantic import ValidationError

from painterqueue.seeding.parser import parse_json_list
from painterqueue.seeding.rules import Rule

RULES = [
    {
        "id": "6f1c1a52-9b2f-4a8e-8d3c-0a7b5d1e2f30",
        "name": "No varnish",
        "internalDescription": "Framer varnishes.",
        "description": "Delivered unvarnished.",
        "page": 1,
    },
    {
        "id": "0d5e3b7a-2c4f-4e1a-9b8d-7f6a5c4b3e21",
        "name": "Signed",
        "internalDescription": "Signature bottom right.",
        "description": "Every painting is signed.",
        "page": 1,
    },
]


def stream_of(document) -> io.BytesIO:
    return io.BytesIO(json.dumps(document).encode("utf-8"))


class TestParseJsonList:
    """Test parsing JSON arrays into models."""

    def test_parse(self):
        rules = parse_json_list(stream_of(RULES), Rule)

        assert [rule.name for rule in rules] == ["No varnish", "Signed"]
        assert all(isinstance(rule, Rule) for rule in rules)

    def test_empty_array(self):
        assert parse_json_list(io.BytesIO(b"[]"), Rule) == []

    def test_null_document(self):
        with pytest.raises(ValueError, match="Deserialized list was null."):
            parse_json_list(io.BytesIO(b"null"), Rule)

    def test_none_stream(self):
        with pytest.raises(ValueError):
            parse_json_list(None, Rule)

    def test_malformed_json(self):
        with pytest.raises(ValueError):
            parse_json_list(io.BytesIO(b"[{"), Rule)

    def test_invalid_element(self):
        with pytest.raises(ValidationError):
            parse_json_list(stream_of([{"name": "missing everything else"}]), Rule)

    def test_not_an_array(self):
        with pytest.raises(ValidationError):
            parse_json_list(stream_of(RULES[0]), Rule)


class TestHandEditedSeedFiles:
    """Test seed files as people write them."""

    def test_comments_and_trailing_commas(self):
        document = b"""
        // Rules shown on the order page
        [
          {
            "id": "6f1c1a52-9b2f-4a8e-8d3c-0a7b5d1e2f30",
            "name": "No varnish", /* framer handles it */
            "internalDescription": "Framer varnishes.",
            "description": "Delivered unvarnished.",
            "page": 1,
          },
        ]
        """

        rules = parse_json_list(io.BytesIO(document), Rule)

        assert len(rules) == 1
        assert rules[0].name == "No varnish"
        assert rules[0].page == 1

    def test_byte_order_mark(self):
        document = "\ufeff" + json.dumps(RULES)

        rules = parse_json_list(io.BytesIO(document.encode("utf-8")), Rule)

        assert [rule.name for rule in rules] == ["No varnish", "Signed"]
