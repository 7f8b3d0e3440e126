"""RequestContext: the explicit actor/organization value for every call.

There is no process-wide identity state. Callers build one context per
request and pass it into every service operation; the store binds it to
the transaction scope so deadlines and cancellation abort the unit of work.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from libpanels.domain.errors import OperationCancelledError

if TYPE_CHECKING:
    import threading


@dataclass(frozen=True)
class RequestContext:
    """Who is calling, for which organization, and until when.

    Attributes:
        user_id: Actor id recorded in ``created_by`` / ``updated_by``.
        org_id: Tenant filter applied to every panel lookup.
        deadline: Absolute ``time.monotonic()`` value after which the
            operation is aborted. ``None`` means no deadline.
        cancel_event: Optional signal; once set, the operation is aborted.
    """

    user_id: int
    org_id: int
    deadline: float | None = None
    cancel_event: threading.Event | None = None

    @classmethod
    def with_timeout(
        cls,
        user_id: int,
        org_id: int,
        timeout: float,
        *,
        cancel_event: threading.Event | None = None,
    ) -> RequestContext:
        """Build a context whose deadline is *timeout* seconds from now."""
        return cls(
            user_id=user_id,
            org_id=org_id,
            deadline=time.monotonic() + timeout,
            cancel_event=cancel_event,
        )

    def check(self) -> None:
        """Raise :class:`OperationCancelledError` if the call must stop."""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise OperationCancelledError("Operation cancelled by caller")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise OperationCancelledError("Operation deadline exceeded")
