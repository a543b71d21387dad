"""JSON domain pillar: document_store_core.

Single owner of the root document. Commits run resolve-apply-publish inside
one lock so concurrent edits against different paths never drop each other,
and registered views are re-derived after every publish.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable

from node_editor.core.domain_impl.json import json_io_core
from node_editor.core.domain_impl.json import json_path_core
from node_editor.core.exceptions import EXPECTED_ERRORS
from node_editor.core.exceptions import StaleDocumentError

_LOG = logging.getLogger(__name__)

DocumentObserver = Callable[[Any, int], None]


class DocumentStore:
    """Holds the current root and publishes replacements by reference swap."""

    def __init__(self, root: Any = None) -> None:
        self._lock = threading.Lock()
        self._root = root
        self._version = 0
        self._observers: list[DocumentObserver] = []

    @property
    def root(self) -> Any:
        return self._root

    @property
    def version(self) -> int:
        return self._version

    @property
    def text(self) -> str:
        return json_io_core.build_compact_json_text(self._root)

    def get_root(self) -> Any:
        return self._root

    def snapshot(self) -> tuple[Any, int]:
        with self._lock:
            return self._root, self._version

    def resolve(self, path: Iterable[Any] | None) -> Any:
        return json_path_core.resolve(self._root, path)

    def subscribe(self, observer: DocumentObserver) -> Callable[[], None]:
        """Register ``observer(root, version)``; returns an unsubscribe callable."""
        if not callable(observer):
            raise TypeError("observer must be callable")
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    def replace_root(self, new_root: Any, *, expected_version: int | None = None) -> int:
        """Publish ``new_root``; with ``expected_version`` this is a compare-and-swap."""
        with self._lock:
            if expected_version is not None and int(expected_version) != self._version:
                raise StaleDocumentError(expected_version, self._version)
            self._root = new_root
            self._version += 1
            version = self._version
            observers = list(self._observers)
        self._notify(observers, new_root, version)
        return version

    def commit(self, path: Iterable[Any] | None, new_value: Any, *, strict: bool = True) -> Any:
        """Apply ``new_value`` at ``path`` against the current root and publish it."""
        segments = json_path_core.normalize_path(path)
        with self._lock:
            new_root = json_path_core.apply(self._root, segments, new_value, strict=strict)
            self._root = new_root
            self._version += 1
            version = self._version
            observers = list(self._observers)
        _LOG.debug("commit path=%s version=%d", json_path_core.format_path(segments), version)
        self._notify(observers, new_root, version)
        return new_root

    def load_text(self, text: Any) -> int:
        return self.replace_root(json_io_core.parse_document_text(text))

    @staticmethod
    def _notify(observers: list[DocumentObserver], root: Any, version: int) -> None:
        # A failing view must not undo or block an already published root.
        for observer in observers:
            try:
                observer(root, version)
            except EXPECTED_ERRORS as exc:
                _LOG.warning("document observer %r failed", observer, exc_info=exc)


class TextBufferView:
    """Pretty-printed text mirror of the store, kept in sync after each publish."""

    def __init__(self, store: DocumentStore, indent: Any = None) -> None:
        self.indent = indent
        self.contents = ""
        self.version = -1
        self.refresh(store.root, store.version)
        self._unsubscribe = store.subscribe(self.refresh)

    def refresh(self, root: Any, version: int) -> None:
        # Notifications run outside the store lock and may arrive out of order.
        if int(version) < self.version:
            return
        self.contents = json_io_core.build_pretty_json_payload(root, self.indent)
        self.version = int(version)

    def close(self) -> None:
        self._unsubscribe()
