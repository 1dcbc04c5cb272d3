"""SQLAlchemy-backed repository implementations.

Import concrete repositories from their own modules; this package does not
re-export them so that domain packages can import their models without
pulling in every repository.
"""
