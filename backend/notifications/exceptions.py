"""Errors raised while preparing or sending a monthly status email."""

from typing import Callable, TypeVar


class MonthlyStatusError(Exception):
    """Base class for monthly status email errors."""


class MissingAddressError(MonthlyStatusError):
    """The user has no resolvable email address."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} doesn't have an email address")


class CollaboratorUnavailableError(MonthlyStatusError):
    """A host platform collaborator failed while gathering signals."""

    def __init__(self, collaborator: str, user_id: str):
        self.collaborator = collaborator
        self.user_id = user_id
        super().__init__(f"{collaborator} unavailable for user {user_id}")


T = TypeVar("T")


def ask_collaborator(collaborator: str, user_id: str, call: Callable[[], T]) -> T:
    """Run a collaborator call, re-raising any failure as CollaboratorUnavailableError."""
    try:
        return call()
    except Exception as e:
        raise CollaboratorUnavailableError(collaborator, user_id) from e
