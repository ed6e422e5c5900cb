"""Tests for rejson.commands -- keywords and argument vectors."""

import json

import pytest

from rejson.commands import (
    Command,
    ExistenceModifier,
    encode_delete,
    encode_get,
    encode_payload,
    encode_set,
    encode_type,
)
from rejson.errors import InvalidArgument
from rejson.path import Path


def test_command_keywords():
    assert Command.DEL.raw == b"JSON.DEL"
    assert Command.GET.raw == b"JSON.GET"
    assert Command.SET.raw == b"JSON.SET"
    assert Command.TYPE.raw == b"JSON.TYPE"


def test_existence_modifier_tokens():
    assert ExistenceModifier.DEFAULT.raw == b""
    assert ExistenceModifier.NOT_EXISTS.raw == b"NX"
    assert ExistenceModifier.MUST_EXIST.raw == b"XX"


class TestDelete:
    def test_defaults_to_root(self):
        assert encode_delete("doc") == [b"doc", b"."]

    def test_explicit_path(self):
        assert encode_delete("doc", Path(".arr[-1]")) == [b"doc", b".arr[-1]"]

    def test_two_paths_rejected(self):
        with pytest.raises(InvalidArgument):
            encode_delete("doc", Path(".a"), Path(".b"))


class TestGet:
    def test_no_path_adds_nothing(self):
        assert encode_get("doc") == [b"doc"]

    def test_several_paths_in_order(self):
        args = encode_get("doc", Path(".foo"), ".baz", Path(".arr"))
        assert args == [b"doc", b".foo", b".baz", b".arr"]


class TestSet:
    def test_default_flag_not_sent(self):
        args = encode_set("doc", {"a": 1})
        assert args[:2] == [b"doc", b"."]
        assert json.loads(args[2]) == {"a": 1}
        assert len(args) == 3

    def test_not_exists_flag(self):
        args = encode_set("doc", 42, Path(".n"), flag=ExistenceModifier.NOT_EXISTS)
        assert args == [b"doc", b".n", b"42", b"NX"]

    def test_must_exist_flag(self):
        args = encode_set("doc", None, flag=ExistenceModifier.MUST_EXIST)
        assert args == [b"doc", b".", b"null", b"XX"]

    def test_unicode_payload_is_utf8(self):
        args = encode_set("doc", "café")
        assert json.loads(args[2].decode("utf-8")) == "café"

    def test_two_paths_rejected(self):
        with pytest.raises(InvalidArgument):
            encode_set("doc", 1, Path(".a"), Path(".a"))


class TestType:
    def test_defaults_to_root(self):
        assert encode_type("doc") == [b"doc", b"."]

    def test_two_paths_rejected(self):
        with pytest.raises(InvalidArgument):
            encode_type("doc", ".a", ".b")


@pytest.mark.parametrize("doc", [
    None,
    True,
    False,
    0,
    -17,
    3.25,
    "",
    "text",
    [],
    {},
    {"foo": "bar", "baz": 42, "arr": [0, 1, 2], "sub": {"k1": "v1", "n": None}},
    [[1, [2, [3]]], {"deep": {"er": [True, 1.5]}}],
])
def test_payload_decodes_to_equal_value(doc):
    assert json.loads(encode_payload(doc)) == doc
