"""Error taxonomy for library panel operations.

Repositories raise these; the service layer converts every
:class:`LibraryPanelError` into a ``ServiceResult`` with ``error.code`` set
to the class ``code``.

INVARIANT: :class:`InvariantViolationError` is deliberately outside the
``LibraryPanelError`` hierarchy. Duplicate rows under a unique lookup mean
storage is corrupt, so it always propagates to the caller.
"""

from __future__ import annotations

from typing import Any, ClassVar


class LibraryPanelError(Exception):
    """Base class for classified, caller-facing failures."""

    code: ClassVar[str] = "LIBRARY_PANEL_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class PanelNotFoundError(LibraryPanelError):
    """No panel matches (uid, org_id), at read or at write time."""

    code = "NOT_FOUND"


class PanelAlreadyExistsError(LibraryPanelError):
    """A uniqueness constraint on the panels table was violated."""

    code = "ALREADY_EXISTS"


class ConnectionNotFoundError(LibraryPanelError):
    """The panel is not connected to the dashboard being disconnected."""

    code = "CONNECTION_NOT_FOUND"


class OperationCancelledError(LibraryPanelError):
    """The caller's deadline passed or its cancel signal fired."""

    code = "CANCELLED"


class InvariantViolationError(RuntimeError):
    """A supposedly-unique lookup returned more than one row."""
