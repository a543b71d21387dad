"""Atomic file write helpers for document and settings persistence."""

import os
import sys
import tempfile
import time
from typing import Any

from node_editor.core.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


def is_retryable_file_write_error(exc: Any, platform_name: Any=None) -> Any:
    if isinstance(exc, PermissionError):
        return True
    if not isinstance(exc, OSError):
        return False
    platform_name = str(platform_name or sys.platform)
    if platform_name == "win32":
        return getattr(exc, "winerror", None) in (5, 32, 33)
    return getattr(exc, "errno", None) in (13,)


def _write_atomic(path: Any, write_fn: Any, retries: Any, base_delay: Any, is_retryable_fn: Any, sleep_fn: Any) -> None:
    # Write via temp file + os.replace so readers never see partial content.
    target_path = os.path.abspath(path)
    target_dir = os.path.dirname(target_path) or os.getcwd()
    os.makedirs(target_dir, exist_ok=True)
    retries = max(1, int(retries))
    retryable = is_retryable_fn if callable(is_retryable_fn) else is_retryable_file_write_error
    sleeper = sleep_fn if callable(sleep_fn) else time.sleep
    for attempt in range(retries):
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=".node_editor_tmp_",
                suffix=".tmp",
                dir=target_dir,
                text=False,
            )
            with os.fdopen(fd, "wb") as fh:
                write_fn(fh)
                fh.flush()
                try:
                    os.fsync(fh.fileno())
                except OSError as exc:
                    _LOG.debug('expected_error', exc_info=exc)
            os.replace(temp_path, target_path)
            return
        except EXPECTED_ERRORS as exc:
            try:
                if temp_path and os.path.exists(temp_path):
                    os.remove(temp_path)
            except OSError as cleanup_exc:
                _LOG.debug('expected_error', exc_info=cleanup_exc)
            if attempt + 1 < retries and retryable(exc):
                sleeper(base_delay * (attempt + 1))
                continue
            raise


def write_text_file_atomic(
    path: Any,
    text: Any,
    encoding: Any="utf-8",
    retries: Any=5,
    base_delay: Any=0.08,
    is_retryable_fn: Any=None,
    sleep_fn: Any=None,
) -> None:
    payload = str(text).encode(encoding)
    _write_atomic(path, lambda fh: fh.write(payload), retries, base_delay, is_retryable_fn, sleep_fn)


def write_bytes_file_atomic(
    path: Any,
    payload: bytes,
    retries: Any=5,
    base_delay: Any=0.08,
    is_retryable_fn: Any=None,
    sleep_fn: Any=None,
) -> None:
    _write_atomic(path, lambda fh: fh.write(payload), retries, base_delay, is_retryable_fn, sleep_fn)


def trim_text_file_for_append(path: Any, max_bytes: Any, keep_bytes: Any) -> None:
    """Keep an append-only log under ``max_bytes`` by retaining its tail."""
    try:
        size = os.path.getsize(path)
    except OSError:
        return
    if size <= int(max_bytes):
        return
    keep = max(0, int(keep_bytes))
    with open(path, "rb") as fh:
        fh.seek(max(0, size - keep))
        tail = fh.read()
    write_bytes_file_atomic(path, tail)
