"""Document store domain module."""

from __future__ import annotations

import logging
from typing import Any, Callable

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.infra.settings_service import EditorSettings
from node_editor.core.domain_impl.json import json_io_core
from node_editor.core.domain_impl.json.document_store_core import DocumentStore
from node_editor.core.domain_impl.json.document_store_core import TextBufferView
from node_editor.core.exceptions import EXPECTED_ERRORS

_LOG = logging.getLogger(__name__)


def open_document(path: str) -> tuple[DocumentStore | None, str]:
    """Load ``path`` into a fresh store; returns ``(store, error_text)``."""
    data, error_text = json_io_core.try_load_document(path)
    if error_text:
        return None, error_text
    return DocumentStore(data), ""


def build_file_sync_observer(
    path: str,
    settings: EditorSettings,
    status_fn: Callable[[str], Any] | None = None,
) -> Callable[[Any, int], None]:
    """Build a store observer that writes every published root back to ``path``."""

    def _observer(root: Any, version: int) -> None:
        try:
            json_io_core.save_document(path, root, indent=settings.indent)
        except EXPECTED_ERRORS as exc:
            _LOG.warning("document save failed for %s", path, exc_info=exc)
            if callable(status_fn):
                status_fn(f"Save failed: {exc}")
            return
        if callable(status_fn):
            status_fn(f"{app_constants.STATUS_SAVED} (v{version})")

    return _observer


class DocumentService:
    DocumentStore = DocumentStore
    TextBufferView = TextBufferView
    open_document = staticmethod(open_document)
    build_file_sync_observer = staticmethod(build_file_sync_observer)


DOCUMENT = DocumentService()
