"""Persistence-specific exceptions.

Only the user document write is guarded, so every conflict surfaces as a
``ConcurrencyConflictError`` from ``UserRepository.commit_guarded``.
"""


class PersistenceError(Exception):
    """Base exception for all persistence errors."""


class ConcurrencyConflictError(PersistenceError):
    """A guarded write lost a race (stale ``update_time`` or create collision).

    Safe to retry from a fresh read.
    """


class FatalPersistenceError(PersistenceError):
    """The write could not be committed; nothing was saved."""
