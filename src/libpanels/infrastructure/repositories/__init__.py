"""Transaction-bound repositories for panels and dashboard connections."""

from libpanels.infrastructure.repositories.connections import ConnectionRepository
from libpanels.infrastructure.repositories.panels import PanelRepository

__all__ = ["ConnectionRepository", "PanelRepository"]
