"""JSON domain package exports."""

from __future__ import annotations

from . import document_store_core
from . import json_io_core
from . import json_path_core

__all__ = [
    "document_store_core",
    "json_io_core",
    "json_path_core",
]
