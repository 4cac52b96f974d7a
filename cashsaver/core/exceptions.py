"""Errors raised by the goal ledger and its collaborators."""


class LedgerError(Exception):
    """Base class for every error the ledger surfaces to callers."""

    pass


class InvalidInputError(LedgerError, ValueError):
    """Raised before any mutation when an argument is rejected.

    Non-positive amounts, an empty title or an inverted date range.
    """

    pass


class NotFoundError(LedgerError, LookupError):
    """Raised when a goal or deposit id is not present in the ledger."""

    pass


class PersistenceFailureError(LedgerError):
    """Raised when the persistent store rejects a commit.

    The in-memory ledger state is left exactly as it was before the call.
    """

    pass
