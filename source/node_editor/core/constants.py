APP_VERSION = "0.4.0"
APP_TITLE = "JSON Node Editor"

RUNTIME_DIR_NAME = "JsonNodeEditor"
SETTINGS_FILENAME = "node_editor_settings.json"
CRASH_LOG_FILENAME = "node_editor_crash.log"
CRASH_LOG_MAX_BYTES = 512 * 1024
CRASH_LOG_KEEP_BYTES = 256 * 1024

# Rendered for an empty path and as the prefix of every bracket path.
PATH_ROOT_MARKER = "$"

JSON_INDENT_DEFAULT = 2
JSON_INDENT_MIN = 1
JSON_INDENT_MAX = 8
EMPTY_OBJECT_TEXT = "{}"

EDITOR_INPUT_MAX_CHARS = 2_000_000
EDITOR_ALLOWED_CONTROL_CHARS = ("\t", "\n", "\r")
EDITOR_HIDDEN_UNICODE_CHARS = (
    "\u200b",
    "\u200c",
    "\u200d",
    "\u2060",
    "\ufeff",
    "\u202a",
    "\u202b",
    "\u202c",
    "\u202d",
    "\u202e",
)

GZIP_DOCUMENT_SUFFIXES = (".json.gz", ".gz")

STATUS_EDITED = "Edited"
STATUS_SAVED = "Saved"
STATUS_COPIED_PATH = "Copied to clipboard"
