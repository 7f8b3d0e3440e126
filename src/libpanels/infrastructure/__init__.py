"""Infrastructure layer: database engine, schema, store, and repositories.

This layer depends on stdlib and third-party libs (SQLAlchemy).
Repositories translate rows into domain models and raise domain errors;
the service layer turns those errors into ServiceResult payloads.
"""
