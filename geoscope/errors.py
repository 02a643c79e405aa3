"""Exception types raised by the scoring and location components."""


class GeoscopeError(Exception):
    """Base class for all geoscope errors."""


class PreconditionError(GeoscopeError, ValueError):
    """A caller passed a required-but-absent reference or an invalid value."""


class InvariantViolation(GeoscopeError, RuntimeError):
    """An external collaborator broke its contract."""
