"""Domain errors, with a category and a status that tell callers how to react."""

from __future__ import annotations

from enum import Enum


class Category(Enum):
    """What kind of failure occurred."""

    CONFLICT = "conflict"
    FAULT = "fault"
    INTERRUPTED = "interrupted"
    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"


class Status(Enum):
    """Whether retrying the failed operation may succeed."""

    PERMANENT = "permanent"
    TEMPORARY = "temporary"


class DbError(Exception):
    """Base for errors raised by storage implementations.

    Every instance exposes ``category`` and ``status`` so callers can act on a
    failure without knowing the storage backend.
    """

    category: Category
    status: Status


class Error(DbError):
    """Base for errors raised by the domain layer."""


class StorageLayerError(Error):
    """A storage failure re-raised in the domain layer."""

    def __init__(self, message: str, category: Category, status: Status) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.status = status

    def __str__(self) -> str:
        return f"Storage layer error: {self.message}"

    @classmethod
    def wrap(cls, message: str, err: DbError) -> StorageLayerError:
        """Build an error around ``err``, keeping its category and status.

        ``err`` becomes the new error's ``__cause__``.
        """
        wrapped = cls(message, err.category, err.status)
        wrapped.__cause__ = err
        return wrapped


class GrantInterrupted(Error):
    """A storage failure that is always safe to retry."""

    category = Category.INTERRUPTED
    status = Status.TEMPORARY

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Retryable storage layer error: {self.message}"