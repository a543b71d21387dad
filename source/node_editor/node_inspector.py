import argparse
import logging
import sys
import tkinter as tk
from tkinter import messagebox, ttk

from node_editor.core import constants as app_constants
from node_editor.core.domain_impl.json.json_path_core import NOT_FOUND
from node_editor.core.domain_impl.support import clipboard_service
from node_editor.core.domain_impl.ui.node_edit_core import NodeData
from node_editor.core.domain_impl.ui.node_edit_core import NodeEditSession
from node_editor.core.domain_impl.ui.node_edit_core import node_rows_for_value
from node_editor.core.exceptions import EXPECTED_ERRORS
from node_editor.services.document_service import DOCUMENT
from node_editor.services.json_engine import JSON
from node_editor.services import runtime_service

_LOG = logging.getLogger(__name__)


class NodeInspector:
    """Content preview, JSON path line and edit drawer for one document node."""

    def __init__(self, root, store, node, settings, document_path=None):
        self.root = root
        self.root.title(app_constants.APP_TITLE)
        self.store = store
        self.session = NodeEditSession(store, node, settings)
        self.document_path = document_path
        self.drawer = None
        self.edit_text = None
        self.error_label = None
        self.status = None
        self._build()
        self._unsubscribe = store.subscribe(lambda _root, _version: self.refresh_preview())
        if document_path:
            self._unsubscribe_file = store.subscribe(
                DOCUMENT.build_file_sync_observer(document_path, settings, self.set_status)
            )
        else:
            self._unsubscribe_file = None
        self.refresh_preview()

    def _build(self):
        frame = ttk.Frame(self.root, padding=10)
        frame.pack(fill="both", expand=True)

        header = ttk.Frame(frame)
        header.pack(fill="x")
        ttk.Label(header, text="Content").pack(side="left")
        ttk.Button(header, text="Close", command=self.close).pack(side="right")
        ttk.Button(header, text="Edit", command=self.open_edit).pack(side="right", padx=(0, 6))

        self.preview = tk.Text(frame, height=14, width=72, wrap="none")
        self.preview.pack(fill="both", expand=True, pady=(4, 8))
        self.preview.configure(state="disabled")

        path_row = ttk.Frame(frame)
        path_row.pack(fill="x")
        ttk.Label(path_row, text="JSON Path").pack(side="left")
        ttk.Button(path_row, text="Copy", command=self.copy_path).pack(side="right")
        self.path_var = tk.StringVar(value=self.session.path_text())
        ttk.Entry(frame, textvariable=self.path_var, state="readonly").pack(fill="x", pady=(4, 0))

        self.status = ttk.Label(frame, text="")
        self.status.pack(fill="x", pady=(6, 0))

    def set_status(self, msg):
        if self.status is not None:
            self.status.config(text=msg)

    def refresh_preview(self):
        text = self.session.preview_text()
        self.preview.configure(state="normal")
        self.preview.delete("1.0", "end")
        self.preview.insert("1.0", text)
        self.preview.configure(state="disabled")
        self.path_var.set(self.session.path_text())

    def copy_path(self):
        if clipboard_service.copy_text_to_clipboard(self.session.path_text(), self.root):
            self.set_status(app_constants.STATUS_COPIED_PATH)

    def open_edit(self):
        self.session.open_edit()
        if self.drawer is None or not self.drawer.winfo_exists():
            self._build_drawer()
        self._load_buffer_into_drawer()
        self.drawer.deiconify()
        self.drawer.lift()

    def _build_drawer(self):
        self.drawer = tk.Toplevel(self.root)
        self.drawer.title("Edit Content")
        self.drawer.protocol("WM_DELETE_WINDOW", self.cancel_edit)
        body = ttk.Frame(self.drawer, padding=10)
        body.pack(fill="both", expand=True)
        self.edit_text = tk.Text(body, height=20, width=64, wrap="none", undo=True)
        self.edit_text.pack(fill="both", expand=True)
        self.error_label = ttk.Label(body, text="", foreground="#c0392b")
        self.error_label.pack(fill="x", pady=(4, 4))
        buttons = ttk.Frame(body)
        buttons.pack(fill="x")
        ttk.Button(buttons, text="Save", command=self.save_edit).pack(side="left")
        ttk.Button(buttons, text="Cancel", command=self.cancel_edit).pack(side="left", padx=(6, 0))

    def _load_buffer_into_drawer(self):
        self.edit_text.delete("1.0", "end")
        self.edit_text.insert("1.0", self.session.buffer)
        self.error_label.config(text=self.session.error or "")

    def save_edit(self):
        self.session.set_buffer(self.edit_text.get("1.0", "end-1c"))
        if not self.session.save():
            self.error_label.config(text=self.session.error or "Invalid JSON")
            return
        self.set_status(app_constants.STATUS_EDITED)
        self.drawer.withdraw()

    def cancel_edit(self):
        self.session.cancel()
        if self.drawer is not None:
            self._load_buffer_into_drawer()
            self.drawer.withdraw()

    def close(self):
        self._unsubscribe()
        if self._unsubscribe_file is not None:
            self._unsubscribe_file()
        self.root.destroy()


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="node-inspector", description="Inspect and edit one node of a JSON document.")
    parser.add_argument("file", help="JSON document (.json or .json.gz)")
    parser.add_argument("--path", default="", help='node path: $["customer"][0] or customer/0 (default: root)')
    parser.add_argument("--permissive", action="store_true", help="replace values that conflict with the path instead of failing")
    parser.add_argument("--indent", type=int, default=None, help="indent width for previews and saved files")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def node_from_args(store, args):
    path = JSON.parse_path_text(args.path)
    value = store.resolve(path)
    rows = [] if value is NOT_FOUND else node_rows_for_value(value)
    return NodeData(path=path, rows=rows)


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = runtime_service.load_runtime_settings()
    if args.permissive:
        settings.strict_paths = False
    if args.indent is not None:
        if not app_constants.JSON_INDENT_MIN <= args.indent <= app_constants.JSON_INDENT_MAX:
            print(f"--indent must be between {app_constants.JSON_INDENT_MIN} and {app_constants.JSON_INDENT_MAX}", file=sys.stderr)
            return 2
        settings.indent = args.indent

    store, error_text = DOCUMENT.open_document(args.file)
    if store is None:
        print(f"Load failed: {error_text}", file=sys.stderr)
        return 1
    try:
        node = node_from_args(store, args)
    except ValueError as exc:
        print(f"Invalid --path: {exc}", file=sys.stderr)
        return 2

    try:
        root = tk.Tk()
    except tk.TclError as exc:
        print(f"Cannot open a window: {exc}", file=sys.stderr)
        return 1
    inspector = NodeInspector(root, store, node, settings, document_path=args.file)
    runtime_service.install_tk_crash_hook(
        root,
        showerror_fn=messagebox.showerror,
        document_fields_fn=inspector.session.crash_fields,
    )
    try:
        root.mainloop()
    except EXPECTED_ERRORS as exc:
        _LOG.error("inspector stopped", exc_info=exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
