"""libpanels: library panel persistence and dashboard connections."""

__version__ = "0.1.0"
