"""Runtime settings and crash-hook wiring for the inspector window."""

from __future__ import annotations

import logging
from typing import Any

from node_editor.core.domain_impl.infra import runtime_paths_service
from node_editor.core.domain_impl.infra import settings_service
from node_editor.core.domain_impl.support import crash_logging_service
from node_editor.core.exceptions import EXPECTED_ERRORS

_LOG = logging.getLogger(__name__)


def load_runtime_settings(runtime_dir: Any=None) -> settings_service.EditorSettings:
    use_dir = runtime_dir or runtime_paths_service.runtime_data_dir(create=True)
    return settings_service.load_settings(runtime_paths_service.settings_path(use_dir))


def save_runtime_settings(settings: settings_service.EditorSettings, runtime_dir: Any=None) -> bool:
    use_dir = runtime_dir or runtime_paths_service.runtime_data_dir(create=True)
    return settings_service.save_settings(runtime_paths_service.settings_path(use_dir), settings)


def install_tk_crash_hook(
    tk_root: Any,
    runtime_dir: Any=None,
    showerror_fn: Any=None,
    document_fields_fn: Any=None,
) -> str:
    """Route uncaught Tk callback errors to the crash log; returns the log path.

    ``document_fields_fn`` is called at crash time for the node/document
    fields written with the entry.
    """
    use_dir = runtime_dir or runtime_paths_service.runtime_data_dir(create=True)
    crash_path = runtime_paths_service.crash_log_path(use_dir)
    notice_shown = False

    def _document_fields():
        if not callable(document_fields_fn):
            return None
        try:
            return document_fields_fn()
        except EXPECTED_ERRORS as exc:
            _LOG.debug('expected_error', exc_info=exc)
            return None

    def _report_callback_exception(exc_type, exc_value, exc_tb):
        nonlocal notice_shown
        crash_logging_service.append_crash_log(
            crash_path, "tk_callback", exc_type, exc_value, exc_tb, _document_fields()
        )
        if not notice_shown and callable(showerror_fn):
            notice_shown = True
            showerror_fn(
                "Unexpected Error",
                f"An unexpected error occurred.\nA crash log was written to:\n{crash_path}",
            )

    tk_root.report_callback_exception = _report_callback_exception
    return crash_path
