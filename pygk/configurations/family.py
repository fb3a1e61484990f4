"""Orthogonal polynomial families that provide base rules and moments."""

import functools
from typing import Callable, List, Optional, Sequence

from mpmath import iv
import sympy

from ..utilities.balls import Ball, ComplexBall, contains_zero, is_nonnegative, is_positive, working_precision
from ..utilities.basics import StringRepresentation, output
from ..utilities.polynomials import X


class Family(StringRepresentation):
    r"""Configuration for the family of orthogonal polynomials whose weight function defines the integral.

    The family supplies the base polynomial whose roots are the first generators, the exact moments of its weight
    function that are needed to search for Kronrod-type extensions, and the domain in which roots of any extension must
    lie for the extended rule to be valid. Moments are exact rationals up to a transcendental factor such as
    :math:`\sqrt{\pi}`, which is only evaluated on request.

    Parameters
    ----------
    name : `str`
        The polynomial family. One of the following:

            - ``'legendre'`` - Legendre polynomials, orthogonal with respect to :math:`w(x) = 1` on :math:`[-1, 1]`.

            - ``'laguerre'`` - Laguerre polynomials, orthogonal with respect to :math:`w(x) = e^{-x}` on
              :math:`[0, \infty)`. Since this weight is not symmetric, it cannot be used for fully symmetric rules.

            - ``'hermite_physicist'`` - Physicists' Hermite polynomials, orthogonal with respect to
              :math:`w(x) = e^{-x^2}` on the real line.

            - ``'hermite_probabilist'`` - Probabilists' Hermite polynomials, orthogonal with respect to the standard
              normal density up to the factor :math:`\sqrt{2\pi}`, :math:`w(x) = e^{-x^2 / 2}`. This is the family used
              by Genz and Keister (1996) in their nested rules for the standard normal distribution.

            - ``'chebyshev_t'`` - Chebyshev polynomials of the first kind, orthogonal with respect to
              :math:`w(x) = (1 - x^2)^{-1/2}` on :math:`[-1, 1]`.

            - ``'chebyshev_u'`` - Chebyshev polynomials of the second kind, orthogonal with respect to
              :math:`w(x) = (1 - x^2)^{1/2}` on :math:`[-1, 1]`.

    """

    _name: str
    _builder: Callable[[int], sympy.Poly]
    _moment: Callable[[int], sympy.Rational]
    _factor: Callable[[], Ball]
    _domain: str
    _symmetric: bool
    _description: str

    def __init__(self, name: str) -> None:
        """Validate the name and identify the polynomials, moments, and root domain."""
        families = {
            'legendre': (
                sympy.legendre_poly, legendre_moment, lambda: iv.mpf(1), 'interval', True,
                "Legendre polynomials on [-1, 1]"
            ),
            'laguerre': (
                sympy.laguerre_poly, laguerre_moment, lambda: iv.mpf(1), 'nonnegative', False,
                "Laguerre polynomials on [0, inf)"
            ),
            'hermite_physicist': (
                sympy.hermite_poly, hermite_physicist_moment, lambda: iv.sqrt(iv.mpf(iv.pi)), 'real', True,
                "physicists' Hermite polynomials on the real line"
            ),
            'hermite_probabilist': (
                sympy.hermite_prob_poly, hermite_probabilist_moment, lambda: iv.sqrt(iv.mpf(iv.pi) * 2), 'real', True,
                "probabilists' Hermite polynomials on the real line"
            ),
            'chebyshev_t': (
                sympy.chebyshevt_poly, chebyshev_t_moment, lambda: iv.mpf(iv.pi), 'interval', True,
                "Chebyshev polynomials of the first kind on [-1, 1]"
            ),
            'chebyshev_u': (
                sympy.chebyshevu_poly, chebyshev_u_moment, lambda: iv.mpf(iv.pi), 'interval', True,
                "Chebyshev polynomials of the second kind on [-1, 1]"
            ),
        }

        # validate the configuration
        if name not in families:
            raise ValueError(f"name must be one of {list(families.keys())}.")

        # initialize class attributes
        self._name = name
        builder, self._moment, self._factor, self._domain, self._symmetric, self._description = families[name]
        self._builder = functools.partial(builder, x=X, polys=True)

    def __str__(self) -> str:
        """Format the configuration as a string."""
        return f"Configured to use {self._description} with roots validated on the {self._domain} domain."

    @property
    def name(self) -> str:
        """Name of the polynomial family."""
        return self._name

    @property
    def symmetric(self) -> bool:
        """Whether the weight function is even, which is required for fully symmetric rules."""
        return self._symmetric

    def polynomial(self, degree: int) -> sympy.Poly:
        """Construct the polynomial of a given degree with exact rational coefficients."""
        if not isinstance(degree, int) or degree < 1:
            raise ValueError("degree must be a positive int.")
        return self._builder(degree).set_domain(sympy.QQ)

    def moments(self, count: int) -> List[sympy.Rational]:
        """Compute the rational parts of the first moments of the weight function. The full moments are these values
        multiplied by the transcendental factor.
        """
        return [self._moment(k) for k in range(count)]

    def normalized_moments(self, count: int) -> List[sympy.Rational]:
        """Compute the first moments of the weight function divided by its total mass."""
        moments = self.moments(count)
        return [m / self._moment(0) for m in moments]

    def transcendental_factor(self, precision: int) -> Ball:
        """Enclose the factor that multiplies the rational parts of all moments."""
        with working_precision(precision):
            return self._factor()

    def validate_roots(self, roots: Sequence[ComplexBall], precision: int, log_level: int = 0) -> int:
        """Count the roots that cannot be certified to lie in the domain of the family. With a log level of at least
        two, each offending root is displayed.
        """
        bad = 0
        with working_precision(precision):
            for index, root in enumerate(roots):
                valid = contains_zero(root.imag)
                if self._domain == 'interval':
                    valid = valid and bool(root.real.a >= -1) and bool(root.real.b <= 1)
                elif self._domain == 'nonnegative':
                    valid = valid and is_nonnegative(root.real)
                if not valid:
                    bad += 1
                    if log_level > 1:
                        output(f"Root {index} is not in the {self._domain} domain: {root.real} + {root.imag}i.")
        return bad

    def validate_weights(self, weights: Sequence[Optional[Ball]], precision: int, log_level: int = 0) -> int:
        """Count the weights that cannot be certified to be positive. Weights that could not be computed are given as
        ``None``. With a log level of at least two, each offending weight is displayed.
        """
        bad = 0
        with working_precision(precision):
            for index, weight in enumerate(weights):
                if weight is None or not is_positive(weight):
                    bad += 1
                    if log_level > 1:
                        output(f"Weight {index} is not positive: {weight}.")
        return bad


def legendre_moment(k: int) -> sympy.Rational:
    """Compute a moment of the Legendre weight function."""
    return sympy.Rational(2, k + 1) if k % 2 == 0 else sympy.Integer(0)


def laguerre_moment(k: int) -> sympy.Rational:
    """Compute a moment of the Laguerre weight function."""
    return sympy.factorial(k)


def hermite_physicist_moment(k: int) -> sympy.Rational:
    """Compute the rational part of a moment of the physicists' Hermite weight function."""
    return sympy.factorial2(k - 1) / sympy.Integer(2)**(k // 2) if k % 2 == 0 else sympy.Integer(0)


def hermite_probabilist_moment(k: int) -> sympy.Rational:
    """Compute the rational part of a moment of the probabilists' Hermite weight function."""
    return sympy.factorial2(k - 1) if k % 2 == 0 else sympy.Integer(0)


def chebyshev_t_moment(k: int) -> sympy.Rational:
    """Compute the rational part of a moment of the weight function of Chebyshev polynomials of the first kind."""
    return sympy.factorial2(k - 1) / sympy.factorial2(k) if k % 2 == 0 else sympy.Integer(0)


def chebyshev_u_moment(k: int) -> sympy.Rational:
    """Compute the rational part of a moment of the weight function of Chebyshev polynomials of the second kind."""
    return sympy.factorial2(k - 1) / sympy.factorial2(k + 2) if k % 2 == 0 else sympy.Integer(0)
