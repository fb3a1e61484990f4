"""Exact rational polynomials: Kronrod-type extensions and certified root isolation."""

from typing import List, Optional, Sequence, Tuple

import sympy

from .balls import ComplexBall, interval_ball, rational_ball, working_precision


# all polynomials share a single variable
X = sympy.Symbol('x')


def find_extension(
        polynomial: sympy.Poly, degree: int, moments: Sequence[sympy.Rational]) -> Tuple[Optional[sympy.Poly], bool]:
    r"""Find the monic polynomial :math:`E` of a given degree that is orthogonal to all lower degree polynomials with
    respect to the weight function multiplied by the accumulated polynomial :math:`P`:

    .. math:: \int P(x) E(x) x^k w(x) dx = 0, \quad k = 0, \dots, p - 1.

    The linear system for the coefficients of :math:`E` is solved exactly. Moments of the weight function are needed up
    to the degree of :math:`P` plus twice the degree of :math:`E`, exclusive. If the system is singular, there is no
    extension and ``(None, False)`` is returned.
    """
    coefficients = polynomial.all_coeffs()[::-1]
    required = len(coefficients) + 2 * degree - 1
    if len(moments) < required:
        raise ValueError(f"At least {required} moments are needed to find an extension of degree {degree}.")

    # compute the inner product of x^j with x^k against the weight function times the accumulated polynomial
    def inner(k: int, j: int) -> sympy.Rational:
        return sum((c * moments[i + j + k] for i, c in enumerate(coefficients)), sympy.Integer(0))

    # solve for the non-leading coefficients
    system = sympy.Matrix(degree, degree, lambda k, j: inner(k, j))
    if system.det() == 0:
        return None, False
    solution = system.LUsolve(sympy.Matrix(degree, 1, lambda k, _: -inner(k, degree)))
    extension = sympy.Poly([1] + [solution[j] for j in reversed(range(degree))], X, domain=sympy.QQ)
    return extension, True


def isolate_roots(polynomial: sympy.Poly, precision: int) -> List[ComplexBall]:
    """Isolate the complex roots of a rational polynomial in balls with radii no larger than about 2 to the power of
    the negative working precision. Real roots come first in ascending order and have exact zero imaginary parts. Each
    root is repeated according to its multiplicity.
    """
    eps = sympy.Rational(1, 2**precision)
    roots: List[ComplexBall] = []
    with working_precision(precision):
        zero = rational_ball(0)
        for (lower, upper), multiplicity in polynomial.intervals(eps=eps):
            roots.extend([ComplexBall(interval_ball(lower, upper), zero)] * multiplicity)

        # only look for non-real roots when some are missing
        if len(roots) < polynomial.degree():
            for (lower_left, upper_right), multiplicity in polynomial.intervals(all=True, eps=eps)[1]:
                left, bottom = lower_left.as_real_imag()
                right, top = upper_right.as_real_imag()
                root = ComplexBall(interval_ball(left, right), interval_ball(bottom, top))
                roots.extend([root] * multiplicity)

    return roots
