"""Failure classes raised by the basket workflows.

The web layer maps each class to a status code; every one of them carries a
user facing message and leaves persisted state unchanged.
"""
from typing import List, Optional


class ValidationError(ValueError):
    """User-correctable input problem."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors[:] if errors else [message]


class PersistenceError(RuntimeError):
    """The storage collaborator refused a write."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LookupError):
    """Missing recipe, archive entry or list position."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StaleSelectionError(RuntimeError):
    """The shopping list changed after the fridge check snapshot was taken."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
