"""Error taxonomy shared by the repositories, services and routers.

Every error is an ``HTTPException`` so it can be raised wherever the problem
is detected and FastAPI renders it as ``{"detail": ...}`` at the handler
boundary.
"""
from typing import Dict, Optional

from fastapi import HTTPException, status


class RestaurantError(HTTPException):
    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=self.default_status, detail=detail, headers=headers)


class ValidationError(RestaurantError):
    """Malformed or missing request fields."""
    default_status = status.HTTP_400_BAD_REQUEST


class NotFound(RestaurantError):
    default_status = status.HTTP_404_NOT_FOUND


class ReferenceNotFound(NotFound):
    """A document the request depends on (table, menu, order) does not exist."""


class DuplicateConflict(RestaurantError):
    default_status = status.HTTP_409_CONFLICT


class AuthFailure(RestaurantError):
    default_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class ExpiredToken(AuthFailure):
    pass


class MalformedToken(AuthFailure):
    pass


class PersistenceFailure(RestaurantError):
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class DeadlineExceeded(RestaurantError):
    default_status = status.HTTP_504_GATEWAY_TIMEOUT
