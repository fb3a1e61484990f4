"""Quadrature-specific exceptions."""

import collections
from typing import Any, List, Sequence

from .utilities.basics import Error, CountedError


class MultipleErrors(Error):
    """Multiple errors that occurred around the same time."""

    _errors: List[Error]

    def __new__(cls, errors: Sequence[Error]) -> Any:
        """Defer to the class of a singular error."""
        if len(errors) == 1:
            return next(iter(errors))
        return super().__new__(cls)

    def __init__(self, errors: Sequence[Error]) -> None:
        """Store distinct errors."""
        self._errors = list(collections.OrderedDict.fromkeys(errors))

    def __str__(self) -> str:
        """Combine all the error messages."""
        return "\n".join(str(e) for e in self._errors)


class DegenerateWeightFactorError(Error):
    """Encountered a weight factor denominator that could be zero.

    This happens when two generators have magnitudes that cannot be distinguished at the working precision, which makes
    the interpolatory weights undefined. This problem can sometimes be mitigated by increasing the working precision. If
    generators truly coincide, the extension levels or the polynomial family should be changed.

    """

    _row: int
    _column: int

    def __init__(self, row: int, column: int) -> None:
        """Store the location of the degenerate factor."""
        super().__init__()
        self._row = row
        self._column = column

    def __str__(self) -> str:
        """Supplement the error with the location."""
        return f"{super().__str__()} Location in the table of weight factors: ({self._row}, {self._column})."


class InvalidRootsError(CountedError):
    """Failed to certify that the roots of a one-dimensional rule lie in the domain of the polynomial family.

    Roots that are not real or that fall outside of the interval on which the weight function is defined make for
    invalid rules. This is often a sign that the requested extension does not exist for the polynomial family.

    """


class InvalidWeightsError(CountedError):
    """Failed to certify that the weights of a one-dimensional rule are positive.

    Rules with non-positive weights are still interpolatory but can be numerically unstable.

    """


class PrecisionLimitError(Error):
    """Failed to construct a rule with the target precision before exceeding the maximum working precision.

    This problem can sometimes be mitigated by increasing the maximum working precision in the configuration or in
    :attr:`options.max_precision`, or by decreasing the target precision.

    """

    _precision: int

    def __init__(self, precision: int) -> None:
        """Store the last working precision that was tried."""
        super().__init__()
        self._precision = precision

    def __str__(self) -> str:
        """Supplement the error with the precision."""
        return f"{super().__str__()} Last working precision: {self._precision} bits."
