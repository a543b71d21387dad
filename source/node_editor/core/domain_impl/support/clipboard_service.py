"""Clipboard helpers for Tk-root text copy flows."""
from typing import Any

from node_editor.core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


def copy_text_to_clipboard(payload: Any, root: Any, expected_errors: Any=EXPECTED_ERRORS) -> bool:
    """Copy non-empty text payload into root clipboard; return success bool."""
    text = str(payload or "").strip()
    if not text:
        return False
    if root is None:
        return False
    try:
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update_idletasks()
        return True
    except expected_errors as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False
