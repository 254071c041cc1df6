"""
Boundaries the editing core talks to: the document store and a read cache.
"""
import logging
from typing import Any, Hashable, Protocol

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Whole-document storage for website content."""

    async def fetch(self, website_id: Hashable) -> dict[str, Any]:
        """Return the stored content; raise DocumentNotFound if the website is missing."""
        ...

    async def fetch_versioned(self, website_id: Hashable) -> tuple[dict[str, Any], int]:
        """Return the stored content together with its version counter."""
        ...

    async def write(
        self,
        website_id: Hashable,
        content: dict[str, Any],
        expected_version: int | None = None,
    ) -> dict[str, Any]:
        """
        Replace the stored content and return what was persisted.

        When ``expected_version`` is given and differs from the stored
        version, raise VersionConflict instead of writing.
        """
        ...


class ContentCache:
    """Cached reads of website content, keyed by website id."""

    def __init__(self):
        self._entries: dict[Hashable, dict[str, Any]] = {}

    def get(self, website_id: Hashable) -> dict[str, Any] | None:
        return self._entries.get(website_id)

    def put(self, website_id: Hashable, content: dict[str, Any]) -> None:
        self._entries[website_id] = content

    def invalidate(self, website_id: Hashable | None = None) -> None:
        """Drop one cached document, or all of them."""
        if website_id is None:
            self._entries.clear()
        else:
            self._entries.pop(website_id, None)
        logger.debug(f"Invalidated content cache for {website_id or 'all websites'}")

    def __contains__(self, website_id: Hashable) -> bool:
        return website_id in self._entries
