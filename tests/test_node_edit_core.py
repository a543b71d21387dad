from __future__ import annotations

from node_editor.core.domain_impl.infra.settings_service import EditorSettings
from node_editor.core.domain_impl.json.document_store_core import DocumentStore
from node_editor.core.domain_impl.ui.node_edit_core import NodeData
from node_editor.core.domain_impl.ui.node_edit_core import NodeEditSession
from node_editor.core.domain_impl.ui.node_edit_core import NodeRow
from node_editor.core.domain_impl.ui.node_edit_core import json_type_name
from node_editor.core.domain_impl.ui.node_edit_core import node_rows_for_value
from node_editor.core.domain_impl.ui.node_edit_core import normalize_node_rows


def _session(document: dict, path: tuple, **settings) -> NodeEditSession:
    store = DocumentStore(document)
    node = NodeData(path=path, rows=node_rows_for_value(store.resolve(path)))
    return NodeEditSession(store, node, EditorSettings(**settings))


def test_json_type_name() -> None:
    assert [json_type_name(v) for v in (None, True, 1, 1.5, "s", {}, [])] == [
        "null",
        "boolean",
        "number",
        "number",
        "string",
        "object",
        "array",
    ]


def test_node_rows_for_object_and_scalar() -> None:
    rows = node_rows_for_value({"name": "Ada", "tags": ["vip"]})
    assert rows == [NodeRow("name", "Ada", "string"), NodeRow("tags", ["vip"], "array")]
    assert node_rows_for_value(3) == [NodeRow(None, 3, "number")]


def test_normalize_node_rows() -> None:
    assert normalize_node_rows([]) == "{}"
    assert normalize_node_rows(None) == "{}"
    assert normalize_node_rows([NodeRow(None, "plain")]) == "plain"
    assert normalize_node_rows([NodeRow(None, None, "null")]) == "null"
    rows = [NodeRow("name", "Ada"), NodeRow("tags", ["vip"], "array"), NodeRow("age", 36, "number")]
    assert normalize_node_rows(rows) == '{\n  "name": "Ada",\n  "age": 36\n}'


def test_preview_and_path_text(order_document: dict) -> None:
    session = _session(order_document, ("customer", 0))
    assert session.path_text() == '$["customer"][0]'
    assert session.preview_text().startswith('{\n  "name": "Ada"')


def test_preview_falls_back_to_rows_when_path_missing(order_document: dict) -> None:
    store = DocumentStore(order_document)
    node = NodeData(path=("gone",), rows=[NodeRow("label", "stale", "string")])
    session = NodeEditSession(store, node)
    assert session.preview_text() == '{\n  "label": "stale"\n}'


def test_open_edit_seeds_buffer(order_document: dict) -> None:
    session = _session(order_document, ("meta", "version"))
    session.open_edit()
    assert session.is_editing
    assert session.buffer == "3"

    missing = _session(order_document, ("nowhere",))
    missing.open_edit()
    assert missing.buffer == "{}"


def test_save_commits_value_at_node_path(order_document: dict) -> None:
    session = _session(order_document, ("customer", 1))
    session.open_edit()
    session.set_buffer('{"name": "Lin", "email": "lin@example.com"}')
    assert session.save()
    assert not session.is_editing
    assert session.error is None
    assert session.store.resolve(["customer", 1, "email"]) == "lin@example.com"
    assert session.store.resolve(["customer", 0, "name"]) == "Ada"
    assert [row.key for row in session.node.rows] == ["name", "email"]
    assert order_document["customer"][1]["email"] is None


def test_save_at_root_replaces_document(order_document: dict) -> None:
    session = _session(order_document, ())
    session.open_edit()
    session.set_buffer("[1, 2]")
    assert session.save()
    assert session.store.root == [1, 2]


def test_save_with_invalid_json_keeps_editing(order_document: dict) -> None:
    session = _session(order_document, ("total",))
    session.open_edit()
    session.set_buffer("{oops")
    assert not session.save()
    assert session.is_editing
    assert session.error.startswith("Invalid JSON")
    assert session.store.version == 0


def test_save_reports_path_conflict_in_strict_mode() -> None:
    store = DocumentStore({"a": 1})
    session = NodeEditSession(store, NodeData(path=("a", "b")))
    session.open_edit()
    session.set_buffer("2")
    assert not session.save()
    assert "position 1" in session.error
    assert store.root == {"a": 1}

    permissive = NodeEditSession(store, NodeData(path=("a", "b")), EditorSettings(strict_paths=False))
    permissive.open_edit()
    permissive.set_buffer("2")
    assert permissive.save()
    assert store.root == {"a": {"b": 2}}


def test_cancel_resets_buffer_and_error(order_document: dict) -> None:
    session = _session(order_document, ("total",))
    session.open_edit()
    session.set_buffer("{oops")
    session.save()
    session.cancel()
    assert not session.is_editing
    assert session.error is None
    assert session.buffer == "12.5"


def test_select_resets_or_reseeds(order_document: dict) -> None:
    session = _session(order_document, ("total",))
    session.set_buffer("leftover")
    session.select(NodeData(path=("meta", "active")))
    assert session.buffer == ""

    session.open_edit()
    session.select(NodeData(path=("meta", "version")))
    assert session.buffer == "3"


def test_preview_follows_commits_from_other_callers(order_document: dict) -> None:
    session = _session(order_document, ("meta",))
    session.store.commit(["meta", "active"], False)
    assert '"active": false' in session.preview_text()


def test_save_unchanged_buffer_with_joiner_and_bom_characters() -> None:
    document = {"user": {"emoji": "\U0001F468\u200d\U0001F469\u200d\U0001F467"}, "a": "x\ufeffy"}
    session = _session(document, ("user",))
    session.open_edit()
    assert session.save() is True
    assert session.error is None
    assert session.store.root == document
    assert session.store.version == 1

    root_session = _session({"a": "x\ufeffy"}, ())
    root_session.open_edit()
    assert root_session.save() is True
    assert root_session.store.root == {"a": "x\ufeffy"}
