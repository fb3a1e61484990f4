"""Construction of the ordered sequence of one-dimensional generators from nested polynomial extensions."""

from typing import List, Sequence, Tuple

from .configurations.family import Family
from .utilities.balls import Ball, ComplexBall, compare_midpoints, contains_zero, is_nonnegative, working_precision
from .utilities.basics import warn
from .utilities.polynomials import find_extension, isolate_roots
from .validation import validate_rule


def maxmin_sort(roots: Sequence[ComplexBall], precision: int) -> List[Ball]:
    """Order the real non-negative roots by alternately selecting the one with the largest and the one with the
    smallest midpoint. Ties are resolved in favor of the root encountered first.
    """
    with working_precision(precision):
        candidates = [r.real for r in roots if contains_zero(r.imag) and is_nonnegative(r.real)]
        ordered: List[Ball] = []
        largest = True
        while candidates:
            selected = 0
            for index in range(1, len(candidates)):
                comparison = compare_midpoints(candidates[index], candidates[selected])
                if (comparison > 0) if largest else (comparison < 0):
                    selected = index
            ordered.append(candidates.pop(selected))
            largest = not largest
    return ordered


def compute_generators(levels: Sequence[int], precision: int, family: Family, log_level: int = 0) -> Tuple[Ball, ...]:
    """Compute generators from the roots of the base polynomial of the family followed by the roots of each extension.

    Extensions are found relative to the product of the base polynomial and all previous extensions. If an extension
    does not exist, no further generators are computed and the sequence is shorter than requested. With a positive log
    level, each of the nested one-dimensional rules is validated.
    """
    if len(levels) == 0:
        raise ValueError("levels must contain at least one level.")

    # start with the roots of the base polynomial
    polynomial = family.polynomial(levels[0])
    generators = maxmin_sort(isolate_roots(polynomial, precision), precision)
    if log_level > 0:
        validate_rule(polynomial, family, precision, log_level)

    # append the roots of each extension
    for index, degree in enumerate(levels[1:], start=1):
        moments = family.moments(polynomial.degree() + 2 * degree)
        extension, solvable = find_extension(polynomial, degree, moments)
        if not solvable:
            warn(
                f"There is no extension of degree {degree} for the {family.name} family. Stopping with "
                f"{len(generators)} generators from the first {index} levels."
            )
            break
        generators.extend(maxmin_sort(isolate_roots(extension, precision), precision))
        polynomial = polynomial * extension
        if log_level > 0:
            validate_rule(polynomial, family, precision, log_level)

    return tuple(generators)
