"""Translate domain errors into HTTP responses."""

from fastapi import HTTPException, status

from workshop.modules.common import ConflictError, NotFoundError, ValidationError, WorkshopError
from workshop.modules.prompts.exceptions import MalformedInterchangeError, MissingRequiredVariablesError


def http_error(exc: WorkshopError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, MissingRequiredVariablesError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "missing": exc.missing},
        )
    if isinstance(exc, (ValidationError, MalformedInterchangeError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


__all__ = ["http_error"]
