"""Crash log entries for uncaught inspector callback errors.

Each entry records where in the document the user was (node path, store
version, edit state) but never the node's value.
"""

import logging
import platform
import traceback
from datetime import datetime
from typing import Any

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.infra import file_write_service
from node_editor.core.exceptions import EXPECTED_ERRORS

_LOG = logging.getLogger(__name__)

_FIELD_VALUE_LIMIT = 200
_CAUSE_DEPTH = 3


def _one_line(value: Any) -> str:
    text = " ".join(str(value).split())
    if len(text) > _FIELD_VALUE_LIMIT:
        return f"{text[:_FIELD_VALUE_LIMIT]}..."
    return text


def _exception_chain_summary(exc_value: Any) -> str:
    links = []
    current = exc_value
    while current is not None and len(links) < _CAUSE_DEPTH:
        if any(current is seen for seen in links):
            break
        links.append(current)
        current = current.__cause__ or current.__context__
    return " <= ".join(
        f"{type(exc).__name__}:{_one_line(exc)}" if str(exc) else type(exc).__name__
        for exc in links
    )


def format_crash_entry(
    context: str,
    exc_type: Any,
    exc_value: Any,
    exc_tb: Any,
    document_fields: dict | None = None,
    now: datetime | None = None,
) -> str:
    """Render one crash entry: header lines, document fields, then the traceback."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        "---",
        f"time={stamp}",
        f"context={context}",
        f"version={app_constants.APP_VERSION}",
        f"python={platform.python_version()}",
        f"error={_exception_chain_summary(exc_value)}",
    ]
    for key, value in (document_fields or {}).items():
        lines.append(f"{key}={_one_line(value)}")
    lines.append("".join(traceback.format_exception(exc_type, exc_value, exc_tb)).rstrip())
    return "\n".join(lines) + "\n"


def append_crash_log(
    path: Any,
    context: str,
    exc_type: Any,
    exc_value: Any,
    exc_tb: Any,
    document_fields: dict | None = None,
) -> bool:
    try:
        file_write_service.trim_text_file_for_append(
            path,
            app_constants.CRASH_LOG_MAX_BYTES,
            app_constants.CRASH_LOG_KEEP_BYTES,
        )
        entry = format_crash_entry(context, exc_type, exc_value, exc_tb, document_fields)
        with open(path, "a", encoding="utf-8") as fh:
            fh.write("\n" + entry)
    except EXPECTED_ERRORS as exc:
        _LOG.warning("crash log write failed", exc_info=exc)
        return False
    return True
