"""Exception types raised by the pricing engine."""


class InvalidArgument(ValueError):
    """A parameter, grid bound, index or array shape is invalid.

    Subclasses :class:`ValueError`, so callers that already guard with
    ``except ValueError`` keep working.
    """


class SingularSystemError(InvalidArgument):
    """A zero pivot was met during tridiagonal elimination."""
