"""Runtime data path resolution helpers."""

import os
import sys
from typing import Any

from node_editor.core import constants as app_constants
from node_editor.core.exceptions import EXPECTED_ERRORS


def _normalized_home(expected_errors: Any) -> str:
    try:
        return os.path.abspath(os.path.expanduser("~"))
    except expected_errors:
        return os.path.abspath(os.getcwd())


def _safe_windows_base(base: Any, expected_errors: Any) -> str:
    # Env-derived base must stay rooted under user home.
    home = _normalized_home(expected_errors)
    raw = str(base or "").strip()
    if not raw:
        return home
    try:
        candidate = os.path.abspath(raw)
    except expected_errors:
        return home
    try:
        if os.path.commonpath([home, candidate]) == home:
            return candidate
    except expected_errors:
        return home
    return home


def runtime_data_dir(
    runtime_dir_name: Any=None,
    create: Any=False,
    platform_name: Any=None,
    env: Any=None,
    expected_errors: Any=EXPECTED_ERRORS,
) -> Any:
    """Resolve runtime data directory path with platform-aware base fallback."""
    use_name = str(runtime_dir_name or app_constants.RUNTIME_DIR_NAME)
    use_platform = str(platform_name or sys.platform)
    use_env = os.environ if env is None else env
    base = None
    match use_platform:
        case "win32":
            env_base = str(use_env.get("LOCALAPPDATA", "")).strip() or str(use_env.get("APPDATA", "")).strip()
            base = _safe_windows_base(env_base, expected_errors)
        case _:
            base = None
    if not base:
        try:
            home = os.path.expanduser("~")
            match use_platform:
                case "win32":
                    base = home
                case _:
                    base = os.path.join(home, ".local", "state")
        except expected_errors:
            base = os.getcwd()
    target = os.path.join(base, use_name)
    if create:
        try:
            os.makedirs(target, exist_ok=True)
        except expected_errors:
            return os.getcwd()
    return target


def settings_path(runtime_dir: Any) -> str:
    return os.path.join(str(runtime_dir), app_constants.SETTINGS_FILENAME)


def crash_log_path(runtime_dir: Any) -> str:
    return os.path.join(str(runtime_dir), app_constants.CRASH_LOG_FILENAME)
