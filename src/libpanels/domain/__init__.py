"""Domain layer: request context, panel types, errors, and IDs.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
