"""
Website content editing core: document model, path updates and sessions.
"""
from simplebiz.content.arrays import ArrayOperation, mutate_array
from simplebiz.content.document import (
    DEFAULT_CONTENT,
    default_content,
    materialize,
    validate_content,
)
from simplebiz.content.errors import (
    ContentError,
    DocumentNotFound,
    InvalidOperation,
    InvalidStateTransition,
    TransportFailure,
    UploadRejected,
    VersionConflict,
)
from simplebiz.content.paths import get_path, set_path
from simplebiz.content.session import (
    EditingSession,
    EditorState,
    FieldEditor,
    SaveResult,
    persist_array_mutation,
    persist_path_update,
)

__all__ = [
    "ArrayOperation",
    "mutate_array",
    "DEFAULT_CONTENT",
    "default_content",
    "materialize",
    "validate_content",
    "ContentError",
    "DocumentNotFound",
    "InvalidOperation",
    "InvalidStateTransition",
    "TransportFailure",
    "UploadRejected",
    "VersionConflict",
    "get_path",
    "set_path",
    "EditingSession",
    "EditorState",
    "FieldEditor",
    "SaveResult",
    "persist_array_mutation",
    "persist_path_update",
]
