"""Exceptions raised by the projection engine and its service layer."""


class InvalidInputError(ValueError):
    """Raised when projection inputs cannot produce a timeline."""
