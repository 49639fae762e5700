"""Domain error taxonomy.

Each error carries the HTTP status the global handler renders it with.
"""

from __future__ import annotations


class FitPlanError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__name__


class InvalidArgument(FitPlanError):
    """Bad input shape (unknown kind, empty user id, ...)."""

    status_code = 400


class InvalidFormat(FitPlanError):
    """Malformed user-submitted plan payload."""

    status_code = 422


class InvalidToken(FitPlanError):
    """Identity token could not be verified."""

    status_code = 403


# --- Document store ---


class StoreError(FitPlanError):
    """Backing-store access problem."""

    status_code = 503


class PermissionDenied(StoreError):
    """The store refused the operation."""


class StoreUnavailable(StoreError):
    """The store could not be reached or failed mid-operation."""


class NotFound(StoreError):
    """Document does not exist."""

    status_code = 404


# --- Generation service ---


class GenerationError(FitPlanError):
    """Text generation failed."""

    status_code = 502


class GenerationUnavailable(GenerationError):
    status_code = 503


class GenerationRateLimited(GenerationError):
    status_code = 429
