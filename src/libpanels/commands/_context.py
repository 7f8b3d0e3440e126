"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store and service initialization, the
per-invocation RequestContext, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from libpanels.domain.context import RequestContext
from libpanels.output.formatters import format_result

if TYPE_CHECKING:
    from libpanels.config.settings import LibpanelsSettings
    from libpanels.infrastructure.store import PanelStore
    from libpanels.services.panels import LibraryPanelService
    from libpanels.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is lazily initialized on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(
        self,
        settings: LibpanelsSettings,
        *,
        org_id: int | None = None,
        user_id: int | None = None,
    ) -> None:
        self.settings = settings
        self._store: PanelStore | None = None
        self._org_id = org_id if org_id is not None else settings.actor.org_id
        self._user_id = user_id if user_id is not None else settings.actor.user_id

        from libpanels.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from libpanels.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> PanelStore:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from libpanels.infrastructure.store import PanelStore

            self._store = PanelStore(self.settings)
        return self._store

    @property
    def service(self) -> LibraryPanelService:
        from libpanels.services.panels import LibraryPanelService

        return LibraryPanelService(self.store)

    def request(self) -> RequestContext:
        """Build the RequestContext for this invocation."""
        timeout = self.settings.actor.timeout
        if timeout is not None:
            return RequestContext.with_timeout(self._user_id, self._org_id, timeout)
        return RequestContext(user_id=self._user_id, org_id=self._org_id)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
