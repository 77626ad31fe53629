"""Error taxonomy for the admin core.

Every error carries a single human-readable message (``str(err)``); callers
surface that message and nothing else. The subclasses exist so workflows and
tests can tell the failure modes apart.
"""

from __future__ import annotations


class AdminError(Exception):
    """Base class for all admin core errors."""


class MissingIdentifierError(AdminError, ValueError):
    """Raised when an update or delete targets an entity without a document ID."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"{kind} ID is missing")


class InvalidEntityError(AdminError, ValueError):
    """Raised when an entity fails edit-layer validation."""


class BoundaryTooSmallError(InvalidEntityError):
    """Raised when a territory boundary edit would leave fewer points than allowed."""


class StoreOperationError(AdminError, RuntimeError):
    """Raised when a document store call fails (network, permission, ...)."""

    def __init__(self, message: str, *, operation: str = "", path: str = "") -> None:
        self.operation = operation
        self.path = path
        super().__init__(message)


class PartialCascadeError(StoreOperationError):
    """A multi-document delete loop stopped partway.

    Items in ``completed_ids`` were deleted, ``failed_id`` and everything after
    it were not touched. Nothing is rolled back.
    """

    def __init__(self, failed_id: str, completed_ids: list[str], cause: Exception) -> None:
        self.failed_id = failed_id
        self.completed_ids = list(completed_ids)
        self.cause = cause
        super().__init__(
            str(cause),
            operation=getattr(cause, "operation", ""),
            path=getattr(cause, "path", ""),
        )


class FollowEdgeError(StoreOperationError):
    """The atomic batch writing both sides of a follow edge failed.

    The batch is all-or-nothing, so neither side was written.
    """
