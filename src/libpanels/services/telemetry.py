"""Operation timing: the ``@traced`` decorator.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled via ``--verbose``, each service call is timed, logged as an
``op.complete`` structlog event, and its duration is merged into
``ServiceResult.meta``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import ParamSpec, TypeVar

import structlog

from libpanels.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)

log = structlog.get_logger("libpanels.telemetry")

_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and inject ``duration_ms`` into meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.debug("op.complete", op=func.__qualname__, ok=False, duration_ms=_ms(start))
            raise

        duration_ms = _ms(start)
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "duration_ms": duration_ms}
            log.debug("op.complete", op=result.op, ok=result.ok, duration_ms=duration_ms)
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def _ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def enable_telemetry() -> None:
    """Enable verbose telemetry (called by AppContext at startup)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    """Disable verbose telemetry."""
    _verbose_enabled.set(False)
