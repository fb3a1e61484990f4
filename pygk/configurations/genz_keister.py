"""Configuration of Genz-Keister rule construction with automatic precision increases."""

import time
from typing import Dict, Optional, Sequence, Tuple, Union

from .family import Family
from .. import exceptions, options
from ..generators import compute_generators
from ..rules import QuadratureRule, check_accuracy, compute_max_level, genz_keister_construction
from ..utilities.balls import Ball
from ..utilities.basics import Array, StringRepresentation, format_seconds, output
from ..weight_factors import compute_weight_factors


class GenzKeister(StringRepresentation):
    r"""Configuration for constructing nested, fully symmetric sparse grids according to
    Genz and Keister (1996), "Fully symmetric interpolatory rules for multiple integrals over infinite regions with
    Gaussian weight," Journal of Computational and Applied Mathematics 71(2), 299-309.

    Generators are the roots of a base polynomial followed by the roots of a sequence of Kronrod-type extensions. Along
    with a table of weight factors, they are computed once for each working precision and reused for rules of any level
    and dimension. A rule is accepted when all of its nodes and weights are certified to the target precision. Otherwise
    the working precision is doubled and the rule is constructed again.

    Parameters
    ----------
    levels : `sequence of int, optional`
        Degree of the base polynomial followed by the degrees of each extension. By default, this is
        ``(1, 2, 6, 10, 16)``, the classic sequence for the standard normal distribution, which supports rules up to
        level ``17``. If an extension does not exist, fewer generators are computed and the largest supported level is
        smaller.
    family : `str or Family, optional`
        The polynomial family, which must have a symmetric weight function. By default, this is
        ``'hermite_probabilist'``, for which rules integrate against the standard normal distribution.
    working_precision : `int, optional`
        Initial working precision in bits. By default, :attr:`options.working_precision` is used.
    target_precision : `int, optional`
        Number of bits to which nodes and weights must be certified. By default, :attr:`options.target_precision` is
        used.
    max_precision : `int, optional`
        Largest working precision in bits. By default, :attr:`options.max_precision` is used.

    """

    _levels: Tuple[int, ...]
    _family: Family
    _working_precision: Optional[int]
    _target_precision: Optional[int]
    _max_precision: Optional[int]
    _cache: Dict[int, Tuple[Tuple[Ball, ...], Array]]

    def __init__(
            self, levels: Sequence[int] = (1, 2, 6, 10, 16), family: Union[str, Family] = 'hermite_probabilist',
            working_precision: Optional[int] = None, target_precision: Optional[int] = None,
            max_precision: Optional[int] = None) -> None:
        """Validate the configuration."""
        if isinstance(family, str):
            family = Family(family)

        # validate the configuration
        if not isinstance(levels, (list, tuple)) or len(levels) == 0:
            raise TypeError("levels must be a non-empty sequence of ints.")
        if not all(isinstance(level, int) and level > 0 for level in levels):
            raise ValueError("levels must all be positive ints.")
        if not isinstance(family, Family):
            raise TypeError("family must be a str or Family instance.")
        if not family.symmetric:
            raise ValueError(f"The {family.name} family does not have a symmetric weight function.")
        for name, value in [
                ('working_precision', working_precision), ('target_precision', target_precision),
                ('max_precision', max_precision)]:
            if value is not None and (not isinstance(value, int) or value < 2):
                raise ValueError(f"{name} must be None or an int that is at least 2.")
        if working_precision is not None and max_precision is not None and working_precision > max_precision:
            raise ValueError("working_precision cannot exceed max_precision.")

        # initialize class attributes
        self._levels = tuple(levels)
        self._family = family
        self._working_precision = working_precision
        self._target_precision = target_precision
        self._max_precision = max_precision
        self._cache = {}

    def __str__(self) -> str:
        """Format the configuration as a string."""
        precisions = []
        for name, value in [
                ("working", self._working_precision), ("target", self._target_precision),
                ("maximum", self._max_precision)]:
            precisions.append(f"{name} precision of " + ("the default" if value is None else f"{value} bits"))
        joined = ", ".join(precisions)
        return f"Configured to extend levels {list(self._levels)} of the {self._family.name} family with {joined}."

    @property
    def levels(self) -> Tuple[int, ...]:
        """Degree of the base polynomial followed by the degrees of each extension."""
        return self._levels

    @property
    def family(self) -> Family:
        """The polynomial family."""
        return self._family

    def max_level(self, precision: Optional[int] = None) -> int:
        """Compute the largest level that the generators computed at a working precision support."""
        generators, _ = self._prepare(options.working_precision if precision is None else precision)
        return compute_max_level(len(generators))

    def _prepare(self, precision: int) -> Tuple[Tuple[Ball, ...], Array]:
        """Compute or load generators and weight factors at a working precision."""
        if precision not in self._cache:
            family = None if self._family.name == 'hermite_probabilist' else self._family
            generators = compute_generators(self._levels, precision, self._family, options.validation_level)
            self._cache[precision] = (generators, compute_weight_factors(generators, precision, family))
        return self._cache[precision]

    def _build(self, dimensions: int, level: int) -> QuadratureRule:
        """Build a rule, doubling the working precision until it is certified to the target precision."""
        precision = options.working_precision if self._working_precision is None else self._working_precision
        target_precision = options.target_precision if self._target_precision is None else self._target_precision
        max_precision = options.max_precision if self._max_precision is None else self._max_precision
        while True:
            start_time = time.time()
            generators, weight_factors = self._prepare(precision)
            rule = genz_keister_construction(dimensions, level, generators, weight_factors, precision)
            end_time = time.time()
            if check_accuracy(rule, target_precision):
                output(
                    f"Built the level-{level} rule with {len(rule)} nodes in {dimensions} dimensions at {precision} "
                    f"bits after {format_seconds(end_time - start_time)}."
                )
                return rule
            if 2 * precision > max_precision:
                raise exceptions.PrecisionLimitError(precision)
            output(f"Failed to certify {target_precision} bits at {precision} bits. Doubling the working precision.")
            precision *= 2
