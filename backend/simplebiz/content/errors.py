"""
Error taxonomy for website content editing.
"""


class ContentError(Exception):
    """Base class for content editing failures."""


class InvalidOperation(ContentError):
    """Malformed update request (bad path, bad index, unknown array operation)."""


class DocumentNotFound(ContentError):
    """The target website document does not exist."""

    def __init__(self, website_id=None):
        self.website_id = website_id
        super().__init__(f"Website {website_id} not found" if website_id else "Website not found")


class TransportFailure(ContentError):
    """Reading or writing the document store failed."""


class VersionConflict(ContentError):
    """The stored document changed since the version the caller expected."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Website content changed (expected version {expected}, found {actual})"
        )


class InvalidStateTransition(ContentError):
    """A field editor was driven from a state that does not allow the action."""


class UploadRejected(ContentError):
    """An uploaded file was refused before reaching object storage."""
