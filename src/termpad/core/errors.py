"""Exceptions raised by the editor core."""


class InvalidStateError(RuntimeError):
    """An operation was called in a state where it can never be valid.

    This signals a dispatch bug (e.g. editing the input line while it is
    only displaying a message), not a condition to recover from.
    """
