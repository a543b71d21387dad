"""Path-addressed inspection and editing of JSON document nodes."""

from node_editor.core.constants import APP_VERSION as __version__
from node_editor.core.domain_impl.json.document_store_core import DocumentStore
from node_editor.core.domain_impl.json.json_path_core import NOT_FOUND
from node_editor.core.domain_impl.json.json_path_core import apply
from node_editor.core.domain_impl.json.json_path_core import format_path
from node_editor.core.domain_impl.json.json_path_core import resolve

__all__ = [
    "DocumentStore",
    "NOT_FOUND",
    "__version__",
    "apply",
    "format_path",
    "resolve",
]
