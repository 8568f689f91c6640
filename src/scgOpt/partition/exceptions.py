"""Errors raised by the optimal partition core."""


class InvalidArgumentError(ValueError):
    """Raised when the requested partition cannot be computed from the inputs."""
