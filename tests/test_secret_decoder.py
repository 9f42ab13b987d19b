"""Tests for decoding secret payloads into environment pairs."""
import json

import pytest

from agent_envlauncher.secrets.domains.decoder import decode_secret


class TestJSONObjectPayloads:

    def test_object_of_strings_is_returned_as_is(self):
        raw = '{"DB_USER":"admin","DB_PASSWORD":"secure123"}'
        assert decode_secret(raw) == {"DB_USER": "admin", "DB_PASSWORD": "secure123"}

    @pytest.mark.parametrize("obj", [
        {},
        {"API_KEY": "xyz"},
        {"A": "", "B": "with spaces", "C": "unicode ✓"},
        {"secret": "explicit"},
    ])
    def test_serialized_object_decodes_to_itself(self, obj):
        assert decode_secret(json.dumps(obj)) == obj

    def test_whitespace_around_object_is_accepted(self):
        assert decode_secret('  {"K": "v"}\n') == {"K": "v"}

    def test_returns_new_dict_each_call(self):
        raw = '{"K": "v"}'
        first = decode_secret(raw)
        first["K"] = "changed"
        assert decode_secret(raw) == {"K": "v"}


class TestFallback:

    @pytest.mark.parametrize("raw", [
        "",
        "plain-text-password",
        "{not json",
        '["a", "b"]',
        '"just a string"',
        "42",
        "null",
        "true",
        '{"PORT": 5432}',
        '{"NESTED": {"a": "b"}}',
        '{"OK": "yes", "BAD": null}',
        '{"LIST": ["x"]}',
    ])
    def test_non_string_object_payload_falls_back(self, raw):
        assert decode_secret(raw) == {"secret": raw}

    def test_empty_string(self):
        assert decode_secret("") == {"secret": ""}
