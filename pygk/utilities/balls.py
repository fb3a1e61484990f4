"""Certified ball arithmetic.

Balls are :mod:`mpmath` intervals: arithmetic on them is rounded outward at the precision of the :data:`mpmath.iv`
context, so the exact value is always enclosed. Midpoints and radii are derived from the two endpoints.
"""

import contextlib
from typing import Any, Iterator, List, NamedTuple, Sequence

import mpmath
from mpmath import iv
import sympy


# define common types
Ball = Any


class ComplexBall(NamedTuple):
    """Certified complex value given by balls that enclose its real and imaginary parts."""

    real: Ball
    imag: Ball


@contextlib.contextmanager
def working_precision(precision: int) -> Iterator[None]:
    """Context manager in which interval arithmetic is done at a working precision given in bits."""
    if not isinstance(precision, int) or precision < 2:
        raise ValueError("precision must be an int that is at least 2.")
    old_precision = iv.prec
    iv.prec = precision
    try:
        yield
    finally:
        iv.prec = old_precision


def rational_ball(value: Any) -> Ball:
    """Enclose an exact integer or rational number."""
    rational = sympy.Rational(value)
    ball = iv.mpf(int(rational.p))
    if rational.q != 1:
        ball /= int(rational.q)
    return ball


def interval_ball(lower: Any, upper: Any) -> Ball:
    """Enclose the interval between two exact rational endpoints."""
    lower = sympy.Rational(lower)
    upper = sympy.Rational(upper)
    if lower == upper:
        return rational_ball(lower)
    return rational_ball((lower + upper) / 2) + rational_ball((upper - lower) / 2) * iv.mpf([-1, 1])


def is_nonnegative(ball: Ball) -> bool:
    """Whether every value in a ball is non-negative."""
    return bool(ball.a >= 0)


def is_positive(ball: Ball) -> bool:
    """Whether every value in a ball is positive."""
    return bool(ball.a > 0)


def contains_zero(ball: Ball) -> bool:
    """Whether zero could be the value enclosed by a ball."""
    return bool(ball.a <= 0) and bool(ball.b >= 0)


def is_numerically_zero(ball: Ball) -> bool:
    """Whether a ball contains zero and is narrower than 2 to the power of half the negative working precision. Such
    balls are usually exact zeros that have been obscured by rounding.
    """
    return contains_zero(ball) and bool(ball.delta < iv.mpf(2)**-(iv.prec // 2))


def compare_midpoints(first: Ball, second: Ball) -> int:
    """Compare the midpoints of two balls, returning -1, 0, or 1."""
    first_midpoint = first.mid
    second_midpoint = second.mid
    if first_midpoint < second_midpoint:
        return -1
    if first_midpoint > second_midpoint:
        return 1
    return 0


def radius(ball: Ball) -> Ball:
    """Compute an upper bound on the radius of a ball."""
    return ball.delta / 2


def is_accurate(ball: Ball, target_precision: int) -> bool:
    """Whether the radius of a ball is smaller than 2 to the power of the negative target precision."""
    return bool(radius(ball) * iv.mpf(2)**target_precision < 1)


def identical(first: Ball, second: Ball) -> bool:
    """Whether two balls have the same endpoints."""
    for first_endpoint, second_endpoint in [(first.a, second.a), (first.b, second.b)]:
        if first_endpoint < second_endpoint or first_endpoint > second_endpoint:
            return False
    return True


def to_float(ball: Ball) -> float:
    """Round the exact midpoint of a ball to the nearest float. Unlike the midpoint computed by the interval context,
    the result does not depend on the current working precision.
    """
    return float(mpmath.ldexp(mpmath.fadd(ball.a, ball.b, exact=True), -1))


def multiply_polynomials(first: Sequence[Ball], second: Sequence[Ball]) -> List[Ball]:
    """Multiply two polynomials with ball coefficients, which are ordered from the constant term upward."""
    product = [iv.mpf(0) for _ in range(len(first) + len(second) - 1)]
    for first_degree, first_coefficient in enumerate(first):
        for second_degree, second_coefficient in enumerate(second):
            product[first_degree + second_degree] += first_coefficient * second_coefficient
    return product
