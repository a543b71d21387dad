"""JSON domain pillar: json_io_core.

Text codec for the document store and the edit buffer, plus file load/save.
"""

import gzip
import json
import logging
from typing import Any

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.infra import file_write_service
from node_editor.core.exceptions import EXPECTED_ERRORS
from node_editor.core.exceptions import MalformedInputError

_LOG = logging.getLogger(__name__)


# --- Editor payload validation ---

def _contains_disallowed_controls(text: str) -> bool:
    allowed = set(app_constants.EDITOR_ALLOWED_CONTROL_CHARS)
    for char in text:
        if ord(char) < 32 and char not in allowed:
            return True
    return False


def _contains_utf16_surrogate(text: str) -> bool:
    for char in text:
        code = ord(char)
        if 0xD800 <= code <= 0xDFFF:
            return True
    return False


def _contains_hidden_unicode(text: str) -> bool:
    hidden = set(app_constants.EDITOR_HIDDEN_UNICODE_CHARS)
    return any(char in hidden for char in text)


def validate_editor_text_payload(payload: Any, max_chars: Any=None) -> tuple[bool, str]:
    """Validate text payload before it is parsed by edit flows."""
    text = str(payload or "")
    if not text:
        return True, ""
    limit = int(max_chars or app_constants.EDITOR_INPUT_MAX_CHARS)
    if len(text) >= limit:
        return False, f"Input exceeds safety limit ({limit:,} characters)."
    if _contains_utf16_surrogate(text):
        return False, "Input contains non-UTF text code points."
    if _contains_disallowed_controls(text):
        return False, "Input contains unsupported binary control bytes."
    if _contains_hidden_unicode(text):
        return False, "Input contains hidden Unicode characters."
    return True, ""


# --- Text codec ---

def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-finite number {token} is not valid JSON.")


def loads_strict(text: str) -> Any:
    # NaN/Infinity are not part of the JSON data model.
    return json.loads(text, parse_constant=_reject_constant)


def parse_editor_text(payload: Any, max_chars: Any=None) -> Any:
    """Parse edit-buffer text into a JSON value or raise ``MalformedInputError``."""
    text = str(payload or "")
    is_valid, reason = validate_editor_text_payload(text, max_chars=max_chars)
    if not is_valid:
        raise MalformedInputError(reason)
    if not text.strip():
        raise MalformedInputError("Invalid JSON: input is empty.")
    try:
        return loads_strict(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            line=exc.lineno,
            column=exc.colno,
        ) from exc
    except ValueError as exc:
        raise MalformedInputError(f"Invalid JSON: {exc}") from exc


def parse_document_text(text: Any) -> Any:
    """Parse stored document text; unreadable or empty text falls back to ``{}``."""
    raw = str(text or "").strip() or app_constants.EMPTY_OBJECT_TEXT
    try:
        return loads_strict(raw)
    except ValueError as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return {}


def build_pretty_json_payload(data: Any, indent: Any=None) -> str:
    """Build indented text for display buffers and saved files."""
    use_indent = int(indent or app_constants.JSON_INDENT_DEFAULT)
    return json.dumps(data, indent=use_indent, ensure_ascii=False, allow_nan=False)


def _escape_editor_code_point(char: str) -> str:
    hidden = app_constants.EDITOR_HIDDEN_UNICODE_CHARS
    if char in hidden or 0xD800 <= ord(char) <= 0xDFFF:
        return f"\\u{ord(char):04x}"
    return char


def build_editor_json_payload(data: Any, indent: Any=None) -> str:
    """Build edit-buffer text that passes ``validate_editor_text_payload`` as-is.

    json.dumps only emits these code points inside string literals, so a
    ``\\uXXXX`` escape keeps the text equal to ``data`` once parsed.
    """
    text = build_pretty_json_payload(data, indent)
    return "".join(_escape_editor_code_point(char) for char in text)


def build_compact_json_text(data: Any) -> str:
    """Build compact canonical text kept alongside the store root."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


# --- Files ---

def is_gzip_document_path(path: Any) -> bool:
    return str(path or "").lower().endswith(app_constants.GZIP_DOCUMENT_SUFFIXES)


def load_document(path: Any) -> Any:
    """Load a JSON document from a .json or gzip-compressed path."""
    use_path = str(path or "")
    if is_gzip_document_path(use_path):
        with gzip.open(use_path, "rb") as handle:
            raw = handle.read().decode("utf-8")
        return loads_strict(raw)
    with open(use_path, "r", encoding="utf-8-sig") as handle:
        return loads_strict(handle.read())


def save_document(path: Any, data: Any, indent: Any=None) -> None:
    """Write the document atomically; gzip paths get compact deterministic bytes."""
    use_path = str(path or "")
    if not use_path:
        raise ValueError("Save destination path is required.")
    if is_gzip_document_path(use_path):
        payload = gzip.compress(build_compact_json_text(data).encode("utf-8"), compresslevel=9, mtime=0)
        file_write_service.write_bytes_file_atomic(use_path, payload)
        return
    file_write_service.write_text_file_atomic(use_path, build_pretty_json_payload(data, indent) + "\n")


def try_load_document(path: Any) -> tuple[Any, str]:
    """Load ``path`` and return ``(data, error_text)`` for UI flows."""
    try:
        return load_document(path), ""
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return None, f"Invalid JSON document: {exc}"
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return None, str(exc)

__all__ = [name for name in globals() if not name.startswith("__")]
