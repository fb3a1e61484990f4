"""Construction of generators, weight factors, and rules."""

from typing import Optional, Sequence, Tuple, Union

from . import options
from .configurations.family import Family
from .configurations.genz_keister import GenzKeister
from .generators import compute_generators
from .rules import QuadratureRule, check_accuracy, genz_keister_construction
from .utilities.balls import Ball
from .utilities.basics import Array, RecArray, structure_matrices
from .weight_factors import compute_weight_factors


def build_generators(
        levels: Sequence[int] = (1, 2, 6, 10, 16), precision: Optional[int] = None,
        family: Union[str, Family] = 'hermite_probabilist') -> Tuple[Ball, ...]:
    r"""Build the ordered sequence of one-dimensional generators.

    The roots of the base polynomial of degree ``levels[0]`` are followed by the roots of each Kronrod-type extension
    of the subsequent degrees. Only real non-negative roots are kept, and each group of roots is ordered by alternately
    selecting the largest and smallest remaining root. If :attr:`options.validation_level` is positive, each of the
    nested one-dimensional rules is validated along the way.

    Parameters
    ----------
    levels : `sequence of int, optional`
        Degree of the base polynomial followed by the degrees of each extension. By default, this is
        ``(1, 2, 6, 10, 16)``.
    precision : `int, optional`
        Working precision in bits. By default, :attr:`options.working_precision` is used.
    family : `str or Family, optional`
        The polynomial family. By default, this is ``'hermite_probabilist'``.

    Returns
    -------
    `tuple`
        Balls that enclose the generators. If an extension does not exist, this is shorter than requested.

    """
    family = validate_family(family)
    precision = options.working_precision if precision is None else precision
    return compute_generators(levels, precision, family, options.validation_level)


def build_weight_factors(
        generators: Sequence[Ball], precision: Optional[int] = None,
        family: Union[str, Family] = 'hermite_probabilist') -> Array:
    r"""Build the read-only table of weight factors for a sequence of generators.

    Parameters
    ----------
    generators : `sequence of ball`
        Generators, typically from :func:`build_generators`.
    precision : `int, optional`
        Working precision in bits. By default, :attr:`options.working_precision` is used.
    family : `str or Family, optional`
        The polynomial family, which must have a symmetric weight function. By default, this is
        ``'hermite_probabilist'``, whose moments are those of the standard normal distribution.

    Returns
    -------
    `ndarray`
        Square object array of balls with one more row than there are generators.

    """
    family = validate_family(family)
    precision = options.working_precision if precision is None else precision
    return compute_weight_factors(generators, precision, None if family.name == 'hermite_probabilist' else family)


def build_rule(
        dimensions: int, level: int, levels: Sequence[int] = (1, 2, 6, 10, 16), precision: Optional[int] = None,
        family: Union[str, Family] = 'hermite_probabilist') -> QuadratureRule:
    r"""Build a fully symmetric rule at a single working precision.

    The rule is the union over partitions :math:`P` of the level with :math:`\sum_d P_d + Z_{P_d} \leq K` of each
    partition's orbit under permutations and sign changes, where :math:`Z` is a fixed table of offsets. All nodes in an
    orbit share a single weight. Unlike :class:`GenzKeister`, this function does not increase the working precision
    when nodes and weights are inaccurate. Use :func:`is_accurate_enough` to check them.

    Parameters
    ----------
    dimensions : `int`
        Number of dimensions.
    level : `int`
        Level of the rule, :math:`K`. Negative levels give empty rules.
    levels : `sequence of int, optional`
        Degree of the base polynomial followed by the degrees of each extension. By default, this is
        ``(1, 2, 6, 10, 16)``.
    precision : `int, optional`
        Working precision in bits. By default, :attr:`options.working_precision` is used.
    family : `str or Family, optional`
        The polynomial family. By default, this is ``'hermite_probabilist'``.

    Returns
    -------
    `QuadratureRule`
        The certified nodes and weights.

    """
    family = validate_family(family)
    precision = options.working_precision if precision is None else precision
    generators = build_generators(levels, precision, family)
    weight_factors = build_weight_factors(generators, precision, family)
    return genz_keister_construction(dimensions, level, generators, weight_factors, precision)


def is_accurate_enough(rule: QuadratureRule, target_precision: Optional[int] = None) -> bool:
    """Check whether all nodes and weights of a rule are certified to a target precision in bits, which is by default
    :attr:`options.target_precision`.
    """
    if not isinstance(rule, QuadratureRule):
        raise TypeError("rule must be a QuadratureRule instance.")
    return check_accuracy(rule, options.target_precision if target_precision is None else target_precision)


def build_integration(genz_keister: GenzKeister, dimensions: int, level: int) -> RecArray:
    r"""Build nodes and weights for integration against the weight function of a family.

    The working precision is doubled until all nodes and weights are certified to the target precision of the
    configuration, after which their midpoints are rounded to :attr:`options.dtype`.

    Parameters
    ----------
    genz_keister : `GenzKeister`
        :class:`GenzKeister` configuration for how to build nodes and weights.
    dimensions : `int`
        Number of dimensions over which to integrate, or equivalently, the number of columns of integration nodes.
    level : `int`
        Level of the rule.

    Returns
    -------
    `recarray`
        Nodes and weights for integration. Fields:

            - **weights** : (`numeric`) - Integration weights, :math:`w`, which sum to one.

            - **nodes** : (`numeric`) - Integration nodes.

    """
    if not isinstance(genz_keister, GenzKeister):
        raise TypeError("genz_keister must be a GenzKeister instance.")
    if not isinstance(dimensions, int) or dimensions < 0:
        raise ValueError("dimensions must be a non-negative integer.")
    if not isinstance(level, int):
        raise TypeError("level must be an integer.")
    nodes, weights = genz_keister._build(dimensions, level).to_arrays()
    return structure_matrices({
        'weights': (weights, options.dtype),
        'nodes': (nodes, options.dtype)
    })


def validate_family(family: Union[str, Family]) -> Family:
    """Convert a name into a family and validate the result."""
    if isinstance(family, str):
        family = Family(family)
    if not isinstance(family, Family):
        raise TypeError("family must be a str or Family instance.")
    return family
