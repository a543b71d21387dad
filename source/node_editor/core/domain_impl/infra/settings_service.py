"""User settings load/save helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.infra import file_write_service
from node_editor.core.exceptions import EXPECTED_ERRORS

_LOG = logging.getLogger(__name__)

_TRUE_TOKENS = ("1", "true", "yes", "on")
_FALSE_TOKENS = ("0", "false", "no", "off")


@dataclass(slots=True)
class EditorSettings:
    """Edit-panel preferences persisted in the runtime data directory."""

    indent: int = app_constants.JSON_INDENT_DEFAULT
    strict_paths: bool = True
    max_input_chars: int = app_constants.EDITOR_INPUT_MAX_CHARS


def _coerce_bool(value: Any, default: bool) -> bool:
    # Accepts bool/int or 0/1-style text.
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(int(value))
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return default


def settings_from_mapping(data: Any) -> EditorSettings:
    settings = EditorSettings()
    if not isinstance(data, dict):
        return settings
    indent = data.get("indent")
    if isinstance(indent, int) and not isinstance(indent, bool):
        if app_constants.JSON_INDENT_MIN <= indent <= app_constants.JSON_INDENT_MAX:
            settings.indent = indent
    settings.strict_paths = _coerce_bool(data.get("strict_paths"), settings.strict_paths)
    max_chars = data.get("max_input_chars")
    if isinstance(max_chars, int) and not isinstance(max_chars, bool) and max_chars > 0:
        settings.max_input_chars = max_chars
    return settings


def load_settings(path: Any) -> EditorSettings:
    """Load settings from ``path``; missing or unreadable files yield defaults."""
    use_path = str(path or "")
    if not use_path or not os.path.isfile(use_path):
        return EditorSettings()
    try:
        with open(use_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return EditorSettings()
    return settings_from_mapping(data)


def save_settings(path: Any, settings: EditorSettings) -> bool:
    try:
        payload = json.dumps(asdict(settings), ensure_ascii=False)
        file_write_service.write_text_file_atomic(path, payload)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False
    return True
