"""
Editing sessions over a website content document.

An ``EditingSession`` keeps a local draft of the document apart from the last
persisted copy. Each save re-fetches the stored document and applies only the
changed path to it, so edits made elsewhere to other fields survive. Two saves
to the same path are last-write-wins unless the session was opened with
``detect_conflicts=True``, in which case a write against a changed document
fails with VersionConflict.
"""
import logging
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Any

from simplebiz.content.arrays import ArrayOperation, mutate_array
from simplebiz.content.document import default_content, materialize
from simplebiz.content.errors import ContentError, InvalidStateTransition
from simplebiz.content.paths import MISSING, get_path, set_path
from simplebiz.content.store import ContentCache, DocumentStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class EditorState(str, PyEnum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"


@dataclass
class SaveResult:
    """Outcome of a save: the persisted content, or the error that stopped it."""

    ok: bool
    content: dict[str, Any] | None = None
    error: ContentError | None = None

    @property
    def message(self) -> str | None:
        return str(self.error) if self.error else None


async def persist_path_update(
    store: DocumentStore,
    website_id: Hashable,
    path: Sequence[str],
    value: Any,
    expected_version: int | None = None,
) -> dict[str, Any]:
    """Fetch the stored document, set ``path`` to ``value`` and write it back."""
    current = materialize(await store.fetch(website_id))
    updated = set_path(current, path, value)
    return await store.write(website_id, updated, expected_version=expected_version)


async def persist_array_mutation(
    store: DocumentStore,
    website_id: Hashable,
    path: Sequence[str],
    operation: ArrayOperation | str,
    value: Any = None,
    index: int | None = None,
    expected_version: int | None = None,
) -> dict[str, Any]:
    """Fetch the stored document, mutate the array at ``path`` and write it back."""
    current = materialize(await store.fetch(website_id))
    updated = mutate_array(current, path, operation, value=value, index=index)
    return await store.write(website_id, updated, expected_version=expected_version)


def _log_notifier(message: str) -> None:
    logger.error(f"Website save failed: {message}")


class EditingSession:
    """Holds the draft document for one website and saves it path by path."""

    def __init__(
        self,
        store: DocumentStore,
        website_id: Hashable,
        cache: ContentCache | None = None,
        notify: Notifier | None = None,
        detect_conflicts: bool = False,
    ):
        self.store = store
        self.website_id = website_id
        self.cache = cache if cache is not None else ContentCache()
        self.notify = notify or _log_notifier
        self.detect_conflicts = detect_conflicts

        self.persisted: dict[str, Any] | None = None
        self.draft: dict[str, Any] = default_content()
        self.version: int | None = None

    async def load(self) -> dict[str, Any]:
        """Fetch the stored document and re-seed the draft from it."""
        raw, version = await self.store.fetch_versioned(self.website_id)
        self._reseed(materialize(raw), version)
        return self.draft

    def _reseed(self, content: dict[str, Any], version: int | None) -> None:
        self.persisted = content
        self.draft = content
        self.version = version
        self.cache.put(self.website_id, content)

    @property
    def dirty(self) -> bool:
        return self.persisted is not None and self.draft != self.persisted

    def editor(self, path: Sequence[str]) -> "FieldEditor":
        return FieldEditor(self, path)

    def update_draft(self, path: Sequence[str], value: Any) -> dict[str, Any]:
        self.draft = set_path(self.draft, path, value)
        return self.draft

    def _expected_version(self) -> int | None:
        return self.version if self.detect_conflicts else None

    def _restore(self, path: Sequence[str], previous: Any) -> None:
        if previous is not MISSING:
            self.draft = set_path(self.draft, path, previous)
            return
        parent = get_path(self.draft, path[:-1], default=None) if len(path) > 1 else self.draft
        if not isinstance(parent, Mapping) or path[-1] not in parent:
            return
        trimmed = {key: value for key, value in parent.items() if key != path[-1]}
        self.draft = trimmed if len(path) == 1 else set_path(self.draft, path[:-1], trimmed)

    async def _save(
        self,
        path: Sequence[str],
        draft_update: Callable[[dict[str, Any]], dict[str, Any]],
        persist,
    ) -> SaveResult:
        try:
            previous = get_path(self.draft, path, default=MISSING)
            self.draft = draft_update(self.draft)
            applied = True
        except ContentError:
            # Checked again against the stored document below.
            applied = False

        try:
            expected = self._expected_version()
            written = await persist(expected)
        except ContentError as e:
            if applied:
                self._restore(path, previous)
            self.notify(str(e))
            return SaveResult(ok=False, error=e)
        except Exception:
            if applied:
                self._restore(path, previous)
            raise

        self.cache.invalidate(self.website_id)
        version = expected + 1 if expected is not None else self.version
        self._reseed(materialize(written), version)
        return SaveResult(ok=True, content=self.draft)

    async def save_path(self, path: Sequence[str], value: Any) -> SaveResult:
        """Save ``value`` at ``path`` against the freshly fetched stored document."""
        logger.debug(f"Saving {'.'.join(path)} for website {self.website_id}")
        return await self._save(
            path,
            lambda draft: set_path(draft, path, value),
            lambda expected: persist_path_update(
                self.store, self.website_id, path, value, expected_version=expected
            ),
        )

    async def save_array(
        self,
        path: Sequence[str],
        operation: ArrayOperation | str,
        value: Any = None,
        index: int | None = None,
    ) -> SaveResult:
        """Apply an array operation to the freshly fetched stored array and save it."""
        return await self._save(
            path,
            lambda draft: mutate_array(draft, path, operation, value=value, index=index),
            lambda expected: persist_array_mutation(
                self.store,
                self.website_id,
                path,
                operation,
                value=value,
                index=index,
                expected_version=expected,
            ),
        )


class FieldEditor:
    """
    Edit state for a single field widget.

    VIEWING -> EDITING -> SAVING -> VIEWING on success, back to EDITING on
    failure with the buffered input kept. ``cancel`` returns to VIEWING and
    drops the buffer.
    """

    def __init__(self, session: EditingSession, path: Sequence[str]):
        self.session = session
        self.path = tuple(path)
        self.state = EditorState.VIEWING
        self.buffer: Any = None
        self.error: ContentError | None = None

    @property
    def value(self) -> Any:
        if self.state is EditorState.VIEWING:
            return get_path(self.session.draft, self.path, default=None)
        return self.buffer

    def _require(self, state: EditorState, action: str) -> None:
        if self.state is not state:
            raise InvalidStateTransition(
                f"Cannot {action} {'.'.join(self.path)} while {self.state.value}"
            )

    def begin(self) -> None:
        self._require(EditorState.VIEWING, "edit")
        self.buffer = get_path(self.session.draft, self.path, default=None)
        self.error = None
        self.state = EditorState.EDITING

    def input(self, value: Any) -> None:
        self._require(EditorState.EDITING, "change")
        self.buffer = value

    def cancel(self) -> None:
        self._require(EditorState.EDITING, "cancel")
        self.buffer = None
        self.error = None
        self.state = EditorState.VIEWING

    async def save(self) -> SaveResult:
        self._require(EditorState.EDITING, "save")
        self.state = EditorState.SAVING
        try:
            result = await self.session.save_path(self.path, self.buffer)
        finally:
            # Anything other than a clean save leaves the input editable.
            self.state = EditorState.EDITING

        if result.ok:
            self.state = EditorState.VIEWING
            self.buffer = None
            self.error = None
        else:
            self.error = result.error
        return result
