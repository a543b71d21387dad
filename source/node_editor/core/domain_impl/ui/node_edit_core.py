"""Node inspection and edit-buffer flow for a single selected graph node."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.infra.settings_service import EditorSettings
from node_editor.core.domain_impl.json import json_io_core
from node_editor.core.domain_impl.json import json_path_core
from node_editor.core.domain_impl.json.document_store_core import DocumentStore
from node_editor.core.exceptions import MalformedInputError
from node_editor.core.exceptions import PathTypeConflictError

_LOG = logging.getLogger(__name__)

CONTAINER_TYPES = ("object", "array")


@dataclass(slots=True)
class NodeRow:
    """One displayed line of a graph node: a key (optional), its value and JSON type."""

    key: str | None = None
    value: Any = None
    type: str = "string"


@dataclass(slots=True)
class NodeData:
    path: tuple = ()
    rows: list[NodeRow] = field(default_factory=list)


def json_type_name(value: Any) -> str:
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case dict():
            return "object"
        case list():
            return "array"
        case _:
            return type(value).__name__


def node_rows_for_value(value: Any) -> list[NodeRow]:
    """Build graph-node rows for ``value``: one per member of an object, else one keyless row."""
    if isinstance(value, dict):
        return [NodeRow(key=str(key), value=item, type=json_type_name(item)) for key, item in value.items()]
    return [NodeRow(key=None, value=value, type=json_type_name(value))]


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def normalize_node_rows(rows: Any, indent: Any=None) -> str:
    """Fallback preview text built from node rows, dropping nested containers."""
    if not rows:
        return app_constants.EMPTY_OBJECT_TEXT
    if len(rows) == 1 and not rows[0].key:
        return _scalar_text(rows[0].value)
    obj = {}
    for row in rows:
        if row.type in CONTAINER_TYPES:
            continue
        if row.key:
            obj[str(row.key)] = row.value
    return json_io_core.build_pretty_json_payload(obj, indent)


class NodeEditSession:
    """Preview, edit buffer and save/cancel state for the selected node.

    The session never keeps a copy of the document; every read goes through
    the store so the preview follows commits made elsewhere.
    """

    def __init__(self, store: DocumentStore, node: NodeData | None = None, settings: EditorSettings | None = None) -> None:
        self.store = store
        self.node = node if node is not None else NodeData()
        self.settings = settings if settings is not None else EditorSettings()
        self.is_editing = False
        self.buffer = ""
        self.error: str | None = None

    @property
    def path(self) -> tuple:
        return json_path_core.normalize_path(self.node.path)

    def current_value(self) -> Any:
        return self.store.resolve(self.path)

    def preview_text(self) -> str:
        value = self.current_value()
        if value is json_path_core.NOT_FOUND:
            return normalize_node_rows(self.node.rows, self.settings.indent)
        return json_io_core.build_pretty_json_payload(value, self.settings.indent)

    def path_text(self) -> str:
        return json_path_core.format_path(self.path)

    def _seed_buffer(self) -> None:
        value = self.current_value()
        if value is json_path_core.NOT_FOUND:
            self.buffer = app_constants.EMPTY_OBJECT_TEXT
        else:
            self.buffer = json_io_core.build_editor_json_payload(value, self.settings.indent)
        self.error = None

    def select(self, node: NodeData) -> None:
        self.node = node
        if self.is_editing:
            self._seed_buffer()
        else:
            self.buffer = ""
            self.error = None

    def open_edit(self) -> None:
        self.is_editing = True
        self._seed_buffer()

    def set_buffer(self, text: Any) -> None:
        self.buffer = str(text or "")

    def save(self) -> bool:
        """Commit the buffer at the node path; on failure keep editing and set ``error``."""
        try:
            new_value = json_io_core.parse_editor_text(self.buffer, max_chars=self.settings.max_input_chars)
            self.store.commit(self.path, new_value, strict=self.settings.strict_paths)
        except (MalformedInputError, PathTypeConflictError) as exc:
            _LOG.debug('expected_error', exc_info=exc)
            self.error = str(exc)
            return False
        self.node = replace(self.node, rows=node_rows_for_value(new_value))
        self.is_editing = False
        self.error = None
        return True

    def crash_fields(self) -> dict:
        # Location and state only; node values stay out of crash logs.
        return {
            "node_path": self.path_text(),
            "document_version": self.store.version,
            "editing": self.is_editing,
            "buffer_chars": len(self.buffer),
        }

    def cancel(self) -> None:
        self._seed_buffer()
        self.is_editing = False
