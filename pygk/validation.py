"""Validation of the one-dimensional rules that underlie generators."""

from typing import List, Optional, Sequence

from mpmath import iv
import sympy

from . import exceptions
from .configurations.family import Family
from .utilities.balls import Ball, ComplexBall, contains_zero, multiply_polynomials, rational_ball, working_precision
from .utilities.basics import Error, output
from .utilities.polynomials import isolate_roots


def compute_interpolatory_weights(roots: Sequence[ComplexBall], family: Family, precision: int) -> List[Optional[Ball]]:
    """Compute the weights of the interpolatory rule with nodes at the real parts of roots, normalized to sum to one.
    Weights that cannot be computed because two nodes are indistinguishable are ``None``.
    """
    nodes = [r.real for r in roots]
    moments = family.normalized_moments(len(nodes))
    weights: List[Optional[Ball]] = []
    with working_precision(precision):
        balls = [rational_ball(m) for m in moments]
        for index, node in enumerate(nodes):
            # integrate the Lagrange basis polynomial of the node
            numerator = [iv.mpf(1)]
            denominator = iv.mpf(1)
            for other_index, other in enumerate(nodes):
                if other_index != index:
                    numerator = multiply_polynomials(numerator, [-other, iv.mpf(1)])
                    denominator *= node - other
            if contains_zero(denominator):
                weights.append(None)
            else:
                weights.append(sum((c * m for c, m in zip(numerator, balls)), iv.mpf(0)) / denominator)
    return weights


def validate_rule(polynomial: sympy.Poly, family: Family, precision: int, log_level: int = 0) -> int:
    """Validate the roots and interpolatory weights of the rule defined by a polynomial. The returned status is zero if
    the rule is valid, with one added for invalid roots and two added for invalid weights. With a positive log level,
    problems are displayed.
    """
    roots = isolate_roots(polynomial, precision)
    weights = compute_interpolatory_weights(roots, family, precision)

    # collect any problems
    status = 0
    errors: List[Error] = []
    bad_roots = family.validate_roots(roots, precision, log_level)
    if bad_roots > 0:
        status += 1
        errors.append(exceptions.InvalidRootsError(bad_roots, len(roots)))
    bad_weights = family.validate_weights(weights, precision, log_level)
    if bad_weights > 0:
        status += 2
        errors.append(exceptions.InvalidWeightsError(bad_weights, len(weights)))

    # output any problems
    if errors and log_level > 0:
        output(f"Validation of the degree {polynomial.degree()} rule for the {family.name} family failed.")
        output(exceptions.MultipleErrors(errors))
    return status
