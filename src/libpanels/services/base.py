"""BaseService: foundation for libpanels services.

Every service receives a :class:`PanelStore` at construction time.
Services own their transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from libpanels.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from libpanels.domain.errors import LibraryPanelError
    from libpanels.infrastructure.store import PanelStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LibraryPanelService(BaseService):
            def patch_panel(self, ctx, uid, ...) -> ServiceResult:
                with self._store.transaction(ctx) as txn:
                    ...
    """

    def __init__(self, store: PanelStore) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, exc: LibraryPanelError) -> ServiceResult:
        """Convert a classified domain error into a failed ServiceResult."""
        logger.debug("%s failed: %s (%s)", op, exc.message, exc.code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
