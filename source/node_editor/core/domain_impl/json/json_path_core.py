"""JSON domain pillar: json_path_core.

Path-addressed read and copy-on-write replace for JSON documents. A path is a
sequence of segments where ``str`` addresses an object member and a
non-negative ``int`` addresses an array item; the empty path is the root.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, TypeAlias

from node_editor.core import constants as app_constants
from node_editor.core.exceptions import InvalidPathError
from node_editor.core.exceptions import MalformedInputError
from node_editor.core.exceptions import PathTypeConflictError

PathSegment: TypeAlias = str | int
Path: TypeAlias = tuple[PathSegment, ...]


class _NotFound:
    """Marker returned by ``resolve`` when a path has no value."""

    __slots__ = ()
    _instance = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()
_MISSING = object()


def is_valid_segment(segment: Any) -> bool:
    # bool subclasses int but is never an index.
    if isinstance(segment, bool):
        return False
    if isinstance(segment, int):
        return segment >= 0
    return isinstance(segment, str)


def normalize_path(path: Iterable[Any] | None) -> Path:
    """Return ``path`` as an immutable tuple, rejecting invalid segments."""
    if path is None:
        return ()
    if isinstance(path, (str, bytes)):
        raise InvalidPathError(path, 0)
    segments = tuple(path)
    for position, segment in enumerate(segments):
        if not is_valid_segment(segment):
            raise InvalidPathError(segment, position)
    return segments


# --- Resolve ---

def resolve(root: Any, path: Iterable[Any] | None) -> Any:
    """Return the value at ``path`` or ``NOT_FOUND``.

    Walks segments left to right and stops at the first segment the current
    value cannot hold: a key on a non-object, an index on a non-array, an
    absent key or an out-of-range index. Nothing is coerced or skipped and
    ``root`` is never modified.
    """
    cursor = root
    for segment in normalize_path(path):
        if isinstance(segment, str):
            if not isinstance(cursor, dict) or segment not in cursor:
                return NOT_FOUND
            cursor = cursor[segment]
            continue
        if not isinstance(cursor, list) or segment >= len(cursor):
            return NOT_FOUND
        cursor = cursor[segment]
    return cursor


def resolve_or_default(root: Any, path: Iterable[Any] | None, default: Any = None) -> Any:
    value = resolve(root, path)
    if value is NOT_FOUND:
        return default
    return value


def path_exists(root: Any, path: Iterable[Any] | None) -> bool:
    return resolve(root, path) is not NOT_FOUND


# --- Apply ---

def _accepts(container: Any, segment: PathSegment) -> bool:
    if isinstance(segment, str):
        return isinstance(container, dict)
    return isinstance(container, list)


def _empty_container_for(segment: PathSegment) -> dict | list:
    # The segment about to be applied decides the container kind.
    if isinstance(segment, int):
        return []
    return {}


def _child_of(container: dict | list, segment: PathSegment) -> Any:
    if isinstance(container, dict):
        return container.get(segment, _MISSING)
    if segment < len(container):
        return container[segment]
    return _MISSING


def _assign(container: dict | list, segment: PathSegment, value: Any) -> None:
    if isinstance(container, dict):
        container[segment] = value
        return
    if segment < len(container):
        container[segment] = value
        return
    # Gaps before an index past the end become JSON null.
    container.extend([None] * (segment - len(container)))
    container.append(value)


def apply(root: Any, path: Iterable[Any] | None, new_value: Any, *, strict: bool = True) -> Any:
    """Return a new root with the subtree at ``path`` replaced by ``new_value``.

    Every container along the path is shallow-copied before it is written, so
    the caller's ``root`` is left untouched and sibling subtrees are shared
    with the result. Missing intermediate slots (absent or ``None``) are
    filled with an array when the following segment is an index and an object
    otherwise. A ``None`` root follows the same rule, so ``apply(None, [0], v)``
    returns ``[v]`` rather than an object.

    A present value that cannot hold the following segment (a primitive, or
    the wrong container kind) raises ``PathTypeConflictError`` when
    ``strict`` is true. With ``strict=False`` the conflicting value is
    replaced by a freshly synthesized container.
    """
    segments = normalize_path(path)
    if not segments:
        return new_value

    first = segments[0]
    if root is None:
        result = _empty_container_for(first)
    elif _accepts(root, first):
        result = root.copy()
    elif strict:
        raise PathTypeConflictError(segments, 0, root)
    else:
        result = _empty_container_for(first)

    parent = result
    for index, segment in enumerate(segments[:-1]):
        next_segment = segments[index + 1]
        child = _child_of(parent, segment)
        if child is _MISSING or child is None:
            child = _empty_container_for(next_segment)
        elif _accepts(child, next_segment):
            child = child.copy()
        elif strict:
            raise PathTypeConflictError(segments, index + 1, child)
        else:
            child = _empty_container_for(next_segment)
        _assign(parent, segment, child)
        parent = child

    _assign(parent, segments[-1], new_value)
    return result


# --- Format / parse ---

def format_segment(segment: Any) -> str:
    if isinstance(segment, int) and not isinstance(segment, bool):
        return f"[{segment}]"
    return f"[{json.dumps(str(segment), ensure_ascii=False)}]"


def format_path(path: Iterable[Any] | None) -> str:
    """Render ``path`` as ``$["customer"][0]``; the empty path renders as ``$``."""
    marker = app_constants.PATH_ROOT_MARKER
    if not path:
        return marker
    return marker + "".join(format_segment(segment) for segment in path)


_INDEX_RE = re.compile(r"[0-9]+")
_DECODER = json.JSONDecoder()


def _parse_bracket_path(text: str) -> Path:
    segments = []
    pos = len(app_constants.PATH_ROOT_MARKER)
    while pos < len(text):
        if text[pos] != "[":
            raise MalformedInputError(f"Expected '[' at column {pos + 1}.", column=pos + 1)
        pos += 1
        if text.startswith('"', pos):
            try:
                segment, pos = _DECODER.raw_decode(text, pos)
            except json.JSONDecodeError as exc:
                raise MalformedInputError(f"Invalid key literal at column {pos + 1}.", column=pos + 1) from exc
        else:
            match = _INDEX_RE.match(text, pos)
            if match is None:
                raise MalformedInputError(f"Expected key or index at column {pos + 1}.", column=pos + 1)
            segment = int(match.group(0))
            pos = match.end()
        if not text.startswith("]", pos):
            raise MalformedInputError(f"Expected ']' at column {pos + 1}.", column=pos + 1)
        pos += 1
        segments.append(segment)
    return tuple(segments)


def parse_path_text(text: Any) -> Path:
    """Parse ``$["a"][0]`` or slash form ``a/0`` into a path tuple.

    In slash form all-digit tokens become indexes; keys made of digits need
    the bracket form.
    """
    raw = str(text or "").strip()
    if not raw or raw == app_constants.PATH_ROOT_MARKER:
        return ()
    if raw.startswith(app_constants.PATH_ROOT_MARKER):
        return _parse_bracket_path(raw)
    segments = []
    for token in raw.split("/"):
        if not token:
            continue
        segments.append(int(token) if token.isascii() and token.isdigit() else token)
    return tuple(segments)

__all__ = [name for name in globals() if not name.startswith("_")]
