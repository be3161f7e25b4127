"""Exceptions raised by the Taste Recs package."""


class TasteRecsError(Exception):
    """Base class for package errors."""


class QuizStateError(TasteRecsError):
    """A quiz session was driven out of order (e.g. answered after completion)."""


class ProfileStoreError(TasteRecsError):
    """The stored profile could not be read or written."""
