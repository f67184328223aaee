"""Infrastructure layer — database engine, stores, and the homeserver repository.

This layer depends on stdlib and third-party libs (SQLAlchemy).
Stores translate between table rows and domain records; they never
return ServiceResult and never catch storage errors.
"""
