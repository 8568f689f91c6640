"""
Constants shared by the optimal partition components.
"""

from enum import Enum

from .exceptions import InvalidArgumentError

# Label given to the group holding the smallest values
FIRST_GROUP_NB = 0

# Integer tags stored in the choice table (see dp.ChoiceKind)
NO_SPLIT = 0
TRIVIAL_PREFIX = 1
SPLIT_AT = 2

# Sentinel for choice-table cells that carry no split index
NO_INDEX = -1


class MatrixType(str, Enum):
    """Matrix interpretation selecting the interval cost kernel."""

    SYMMETRIC = "symmetric"
    LAPLACIAN = "laplacian"
    STOCHASTIC = "stochastic"

    @property
    def is_weighted(self) -> bool:
        return self is MatrixType.STOCHASTIC

    @classmethod
    def parse(cls, value) -> "MatrixType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(
                f"Unknown matrix type {value!r}, expected one of: {choices}"
            ) from None
