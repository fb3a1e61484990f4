"""Computation of the table of weight factors from which fully symmetric weights are accumulated."""

from typing import List, Optional, Sequence

from mpmath import iv
import numpy as np

from . import exceptions
from .configurations.family import Family
from .utilities.balls import (
    Ball, contains_zero, is_numerically_zero, multiply_polynomials, rational_ball, working_precision
)
from .utilities.basics import Array


def gaussian_moments(count: int) -> List[int]:
    """Compute the first moments of the standard normal distribution, which are exact integers."""
    moments: List[int] = []
    for index in range(count):
        if index == 0:
            moments.append(1)
        elif index % 2 == 1:
            moments.append(0)
        else:
            moments.append(moments[index - 2] * (index - 1))
    return moments


def compute_weight_factors(generators: Sequence[Ball], precision: int, family: Optional[Family] = None) -> Array:
    r"""Compute the square table of weight factors for a sequence of :math:`N` generators.

    With :math:`m_d` the moments of the weight function normalized to have unit mass and with the coefficients

    .. math:: a_i = \sum_d m_d [x^d] \prod_{j < i} (x^2 - g_j^2),

    the entry in row :math:`\xi` and column :math:`\theta \geq \xi` is

    .. math:: a_\theta / \prod_{\theta' \leq \theta, \theta' \neq \xi} (g_\xi^2 - g_{\theta'}^2).

    Entries below the diagonal and entries that would require a generator beyond the last one are zero. By default, the
    moments are those of the standard normal distribution. Other families must have symmetric weight functions. The
    returned array of balls is read-only.
    """
    if family is not None and not family.symmetric:
        raise ValueError(f"The {family.name} family does not have a symmetric weight function.")

    # compute moments up to the degree of the full product
    size = len(generators)
    count = 2 * size + 1
    moments = gaussian_moments(count) if family is None else family.normalized_moments(count)

    with working_precision(precision):
        balls = [rational_ball(m) for m in moments]
        squares = [g * g for g in generators]

        # compute the coefficients by growing the product one factor at a time
        coefficients = [iv.mpf(1)]
        product = [iv.mpf(1)]
        for index in range(1, size + 1):
            product = multiply_polynomials(product, [-squares[index - 1], iv.mpf(0), iv.mpf(1)])
            coefficient = sum((c * m for c, m in zip(product, balls)), iv.mpf(0))
            if is_numerically_zero(coefficient):
                coefficient = iv.mpf(0)
            coefficients.append(coefficient)

        # fill the upper triangle, growing each denominator one factor at a time
        table = np.empty((size + 1, size + 1), dtype=object)
        table.fill(iv.mpf(0))
        for xi in range(size):
            denominator = iv.mpf(1)
            for theta in range(size):
                if theta != xi:
                    denominator *= squares[xi] - squares[theta]
                if theta >= xi:
                    if contains_zero(denominator):
                        raise exceptions.DegenerateWeightFactorError(xi, theta)
                    table[xi, theta] = coefficients[theta] / denominator

    table.flags.writeable = False
    return table
