from __future__ import annotations

import copy

import pytest

from node_editor.core.domain_impl.json import json_path_core
from node_editor.core.domain_impl.json.json_path_core import NOT_FOUND
from node_editor.core.domain_impl.json.json_path_core import apply
from node_editor.core.domain_impl.json.json_path_core import format_path
from node_editor.core.domain_impl.json.json_path_core import parse_path_text
from node_editor.core.domain_impl.json.json_path_core import resolve
from node_editor.core.exceptions import InvalidPathError
from node_editor.core.exceptions import MalformedInputError
from node_editor.core.exceptions import PathTypeConflictError


# --- resolve ---

def test_resolve_empty_path_returns_root(order_document: dict) -> None:
    assert resolve(order_document, []) is order_document
    assert resolve(order_document, None) is order_document
    assert resolve(7, ()) == 7


def test_resolve_walks_keys_and_indexes(order_document: dict) -> None:
    assert resolve(order_document, ["customer", 0, "name"]) == "Ada"
    assert resolve(order_document, ("customer", 1, "tags")) == []
    assert resolve(order_document, ["customer", 0, "tags", 0]) == "vip"


def test_resolve_returns_stored_null(order_document: dict) -> None:
    assert resolve(order_document, ["meta", "notes"]) is None


def test_resolve_missing_key_is_not_found() -> None:
    assert resolve({"a": 1}, ["b", "c"]) is NOT_FOUND


def test_resolve_descending_into_primitive_is_not_found() -> None:
    assert resolve({"a": 1}, ["a", "c"]) is NOT_FOUND
    assert resolve({"a": "text"}, ["a", 0]) is NOT_FOUND


def test_resolve_through_null_is_not_found(order_document: dict) -> None:
    assert resolve(order_document, ["meta", "notes", "x"]) is NOT_FOUND
    assert resolve(None, ["a"]) is NOT_FOUND


def test_resolve_segment_kind_must_match_container(order_document: dict) -> None:
    assert resolve(order_document, ["customer", "0"]) is NOT_FOUND
    assert resolve({"0": "zero"}, [0]) is NOT_FOUND
    assert resolve(order_document, ["customer", 2]) is NOT_FOUND


def test_resolve_rejects_invalid_segments() -> None:
    with pytest.raises(InvalidPathError):
        resolve([1, 2], [-1])
    with pytest.raises(InvalidPathError):
        resolve([1, 2], [True])
    with pytest.raises(InvalidPathError):
        resolve({"a": 1}, "a")


def test_resolve_is_idempotent_and_does_not_mutate(order_document: dict) -> None:
    before = copy.deepcopy(order_document)
    first = resolve(order_document, ["customer", 0])
    second = resolve(order_document, ["customer", 0])
    assert first == second
    assert order_document == before


def test_resolve_or_default_and_path_exists(order_document: dict) -> None:
    assert json_path_core.resolve_or_default(order_document, ["nope"], "fallback") == "fallback"
    assert json_path_core.resolve_or_default(order_document, ["meta", "notes"], "fallback") is None
    assert json_path_core.path_exists(order_document, ["meta", "notes"])
    assert not json_path_core.path_exists(order_document, ["meta", "missing"])


# --- apply ---

def test_apply_empty_path_replaces_root(order_document: dict) -> None:
    replacement = {"fresh": True}
    assert apply(order_document, [], replacement) is replacement
    assert apply(None, [], 5) == 5


def test_apply_synthesizes_array_when_next_segment_is_index() -> None:
    assert apply({}, ["a", 0], "x") == {"a": ["x"]}


def test_apply_synthesizes_object_when_next_segment_is_key() -> None:
    assert apply({}, ["a", "b"], 1) == {"a": {"b": 1}}


def test_apply_on_null_root_starts_fresh_container() -> None:
    assert apply(None, ["a"], 1) == {"a": 1}
    assert apply(None, [0, "k"], "v") == [{"k": "v"}]


def test_apply_replaces_null_intermediate(order_document: dict) -> None:
    result = apply(order_document, ["meta", "notes", 1], "second")
    assert result["meta"]["notes"] == [None, "second"]


def test_apply_overwrites_leaf_with_new_type(order_document: dict) -> None:
    result = apply(order_document, ["total"], {"amount": 12.5, "currency": "EUR"})
    assert result["total"] == {"amount": 12.5, "currency": "EUR"}


def test_apply_appends_and_pads_arrays() -> None:
    assert apply({"a": [1]}, ["a", 1], 2) == {"a": [1, 2]}
    assert apply({"a": [1]}, ["a", 3], 4) == {"a": [1, None, None, 4]}


def test_apply_does_not_mutate_input_root(order_document: dict) -> None:
    before = copy.deepcopy(order_document)
    result = apply(order_document, ["customer", 0, "tags", 0], "gold")
    assert order_document == before
    assert result["customer"][0]["tags"] == ["gold"]


def test_apply_shares_untouched_siblings(order_document: dict) -> None:
    result = apply(order_document, ["customer", 0, "name"], "Grace")
    assert result is not order_document
    assert result["customer"] is not order_document["customer"]
    assert result["customer"][0] is not order_document["customer"][0]
    assert result["customer"][1] is order_document["customer"][1]
    assert result["meta"] is order_document["meta"]


@pytest.mark.parametrize(
    "path, value",
    [
        (["customer", 0, "email"], "new@example.com"),
        (["customer", 1, "tags", 0], "first"),
        (["meta", "extra", "deep", 0], True),
        (["brand", "new"], [1, 2, 3]),
        (["customer", 5], {"name": "Sol"}),
    ],
)
def test_resolve_after_apply_returns_value(order_document: dict, path: list, value: object) -> None:
    assert resolve(apply(order_document, path, value), path) == value


def test_apply_leaves_disjoint_paths_unchanged(order_document: dict) -> None:
    result = apply(order_document, ["customer", 1, "email"], "lin@example.com")
    for other in (["meta"], ["total"], ["customer", 0]):
        assert resolve(result, other) == resolve(order_document, other)


def test_apply_strict_rejects_descent_into_primitive() -> None:
    root = {"a": 1}
    with pytest.raises(PathTypeConflictError) as excinfo:
        apply(root, ["a", "b"], 2)
    assert excinfo.value.index == 1
    assert excinfo.value.found_type == "int"
    assert root == {"a": 1}


def test_apply_strict_rejects_wrong_container_kind(order_document: dict) -> None:
    with pytest.raises(PathTypeConflictError):
        apply(order_document, ["customer", "first"], 1)
    with pytest.raises(PathTypeConflictError) as excinfo:
        apply([1, 2], ["a"], 1)
    assert excinfo.value.index == 0


def test_apply_permissive_replaces_conflicting_value() -> None:
    assert apply({"a": 1}, ["a", "b"], 2, strict=False) == {"a": {"b": 2}}
    assert apply({"a": "s"}, ["a", 0], 2, strict=False) == {"a": [2]}
    assert apply("scalar", ["k"], 1, strict=False) == {"k": 1}


def test_apply_rejects_invalid_segment() -> None:
    with pytest.raises(InvalidPathError) as excinfo:
        apply({}, ["a", 1.5], 1)
    assert excinfo.value.position == 1


# --- format / parse ---

def test_format_path_root_marker() -> None:
    assert format_path([]) == "$"
    assert format_path(None) == "$"


def test_format_path_brackets() -> None:
    assert format_path(["customer", 0]) == '$["customer"][0]'
    assert format_path(("a", "b", 12)) == '$["a"]["b"][12]'


def test_format_path_escapes_key_literals() -> None:
    assert format_path(['say "hi"']) == '$["say \\"hi\\""]'
    assert format_path(["café"]) == '$["café"]'


def test_parse_path_text_bracket_form() -> None:
    assert parse_path_text('$["customer"][0]') == ("customer", 0)
    assert parse_path_text('$["say \\"hi\\""]') == ('say "hi"',)
    assert parse_path_text("$") == ()
    assert parse_path_text("") == ()


def test_parse_path_text_slash_form() -> None:
    assert parse_path_text("customer/0/name") == ("customer", 0, "name")
    assert parse_path_text("/meta/") == ("meta",)


def test_parse_path_text_reads_formatted_paths() -> None:
    path = ("a b", 3, "[x]", 0)
    assert parse_path_text(format_path(path)) == path


@pytest.mark.parametrize("text", ['$["a"', "$[a]", '$["a"]x', "$[-1]"])
def test_parse_path_text_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedInputError):
        parse_path_text(text)
