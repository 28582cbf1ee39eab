"""Tests for raw input validation and the data-source read."""

import pytest

from aadusers.core.data_source import parse_identifiers, read_users
from aadusers.core.errors import EmptyResultError, SchemaError, UserLookupError
from aadusers.core.result_sink import MemorySink
from aadusers.core.validate import is_non_empty_string, is_uuid


class TestParseIdentifiers:

    def test_single_list(self):
        ids = parse_identifiers({"user_principal_names": ["a@x.com", "b@x.com"], "object_ids": None})

        assert ids.kind == "user_principal_names"
        assert ids.values == ("a@x.com", "b@x.com")

    def test_none_supplied(self):
        with pytest.raises(SchemaError, match="exactly one of"):
            parse_identifiers({"object_ids": [], "ignore_missing": True})

    def test_more_than_one_supplied(self):
        with pytest.raises(SchemaError) as exc:
            parse_identifiers({
                "object_ids": ["11111111-1111-1111-1111-111111111111"],
                "mail_nicknames": ["alice"],
            })

        assert "object_ids, mail_nicknames" in str(exc.value)

    def test_object_ids_must_be_uuids(self):
        with pytest.raises(SchemaError) as exc:
            parse_identifiers({"object_ids": ["11111111-1111-1111-1111-111111111111", "not-a-uuid"]})

        assert exc.value.key == "object_ids.1"

    def test_object_id_with_trailing_newline_rejected(self):
        with pytest.raises(SchemaError) as exc:
            parse_identifiers({"object_ids": ["11111111-1111-1111-1111-111111111111\n"]})

        assert exc.value.key == "object_ids.0"

    def test_blank_strings_rejected(self):
        with pytest.raises(SchemaError) as exc:
            parse_identifiers({"mail_nicknames": ["alice", "  "]})

        assert exc.value.key == "mail_nicknames.1"

    def test_bare_string_rejected(self):
        with pytest.raises(SchemaError):
            parse_identifiers({"user_principal_names": "a@x.com"})


class TestValidators:

    @pytest.mark.parametrize("value,ok", [
        ("11111111-1111-1111-1111-111111111111", True),
        ("ABCDEF01-2345-6789-abcd-ef0123456789", True),
        ("11111111111111111111111111111111", False),
        ("{11111111-1111-1111-1111-111111111111}", False),
        ("11111111-1111-1111-1111-111111111111\n", False),
        ("", False),
        (None, False),
    ])
    def test_is_uuid(self, value, ok):
        assert is_uuid(value) is ok

    def test_is_non_empty_string(self):
        assert is_non_empty_string("x")
        assert not is_non_empty_string("")
        assert not is_non_empty_string(3)


class TestReadUsers:

    def test_reads_and_commits(self, directory):
        sink = MemorySink()

        out = read_users({"mail_nicknames": ["alice", "bob"]}, directory, sink)

        assert out["id"] == sink.id
        assert out["mail_nicknames"] == ["alice", "bob"]
        assert out["users"][1]["display_name"] == "Bob Example"
        assert set(sink.data) == {"object_ids", "user_principal_names", "mail_nicknames", "users"}

    def test_ignore_missing_defaults_false(self, directory):
        with pytest.raises(UserLookupError):
            read_users({"mail_nicknames": ["alice", "ghost"]}, directory)

    def test_ignore_missing_passed_through(self, directory):
        with pytest.raises(EmptyResultError):
            read_users({"mail_nicknames": ["ghost"], "ignore_missing": True}, directory)

    def test_ignore_missing_must_be_bool(self, directory):
        with pytest.raises(SchemaError):
            read_users({"mail_nicknames": ["alice"], "ignore_missing": "yes"}, directory)

        assert directory.calls == []
