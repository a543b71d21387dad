"""JSON path and text codec domain module."""

from node_editor.core.domain_impl.json import json_io_core
from node_editor.core.domain_impl.json import json_path_core


class JsonEngine:
    json_io_core = json_io_core
    json_path_core = json_path_core
    resolve = staticmethod(json_path_core.resolve)
    apply = staticmethod(json_path_core.apply)
    format_path = staticmethod(json_path_core.format_path)
    parse_path_text = staticmethod(json_path_core.parse_path_text)
    parse_editor_text = staticmethod(json_io_core.parse_editor_text)


JSON = JsonEngine()
