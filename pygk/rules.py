"""Assembly and certification of fully symmetric multidimensional quadrature rules."""

from typing import Iterator, List, Sequence, Tuple

from mpmath import iv
import numpy as np

from . import options
from .utilities.balls import Ball, is_accurate, to_float, working_precision
from .utilities.basics import Array, StringRepresentation, format_number, format_table
from .utilities.enumeration import Partition, generate_lattice_points, generate_partitions, generate_permutations


# offsets added to partition entries when testing admissibility
Z = (0, 0, 1, 0, 0, 3, 2, 1, 0, 0, 5, 4, 3, 2, 1, 0, 0, 0, 8, 7, 6, 5, 4, 3, 2, 1, 0)

# define a common type
Node = Tuple[Ball, ...]


class QuadratureRule(StringRepresentation):
    """Nodes and weights of a fully symmetric quadrature rule along with the settings used to construct them.

    Attributes
    ----------
    nodes : `tuple`
        Nodes, each of which is a tuple of balls with one ball for each dimension.
    weights : `tuple`
        Balls that enclose the weight of each node.
    dimensions : `int`
        Number of dimensions.
    level : `int`
        Level of the rule.
    precision : `int`
        Working precision in bits at which nodes and weights were computed.

    """

    nodes: Tuple[Node, ...]
    weights: Tuple[Ball, ...]
    dimensions: int
    level: int
    precision: int

    def __init__(
            self, nodes: Sequence[Node], weights: Sequence[Ball], dimensions: int, level: int, precision: int) -> None:
        """Store nodes and weights."""
        if len(nodes) != len(weights):
            raise ValueError("nodes and weights must have the same length.")
        self.nodes = tuple(nodes)
        self.weights = tuple(weights)
        self.dimensions = dimensions
        self.level = level
        self.precision = precision

    def __len__(self) -> int:
        """Count the nodes."""
        return len(self.weights)

    def __str__(self) -> str:
        """Format a summary of the rule as a string."""
        with working_precision(self.precision):
            total = sum(self.weights, iv.mpf(0))
        header = ["Dimensions", "Level", "Nodes", "Working Precision", "Sum of Weights"]
        values = [self.dimensions, self.level, len(self), f"{self.precision} bits", format_number(to_float(total))]
        return format_table(header, values, title="Quadrature Rule")

    def to_arrays(self) -> Tuple[Array, Array]:
        """Round the midpoints of nodes and weights to arrays of the floating point type in :attr:`options.dtype`."""
        with working_precision(self.precision):
            nodes = np.array([[to_float(c) for c in n] for n in self.nodes], options.dtype)
            weights = np.array([to_float(w) for w in self.weights], options.dtype)
        return nodes.reshape((len(self), self.dimensions)), weights


def compute_max_level(size: int) -> int:
    """Compute the largest level that can be constructed from a number of generators."""
    return min(size - 1, len(Z) - 1)


def is_admissible(partition: Partition, level: int) -> bool:
    """Whether a partition contributes to the rule of a given level."""
    return sum(p + Z[p] for p in partition) <= level


def compute_nodes(partition: Partition, generators: Sequence[Ball]) -> Iterator[Node]:
    """Generate the fully symmetric orbit of a partition: each distinct permutation of the partition with every
    combination of signs for its non-zero entries. The origin has no sign.
    """
    variants = 2**sum(1 for p in partition if p != 0)
    for permutation in generate_permutations(partition):
        for variant in range(variants):
            bit = 0
            node: List[Ball] = []
            for index in permutation:
                coordinate = generators[index]
                if index != 0:
                    if (variant >> bit) & 1:
                        coordinate = -coordinate
                    bit += 1
                node.append(coordinate)
            yield tuple(node)


def compute_weight(partition: Partition, level: int, weight_factors: Array) -> Ball:
    """Compute the weight shared by all nodes in the orbit of a partition by summing products of weight factors over
    all lattice points within the budget that remains after the partition. The sum is divided by the number of sign
    combinations for one permutation.
    """
    weight = iv.mpf(0)
    for point in generate_lattice_points(len(partition), level - sum(partition)):
        term = iv.mpf(1)
        for p, q in zip(partition, point):
            term *= weight_factors[p, p + q]
        weight += term
    nonzero = sum(1 for p in partition if p != 0)
    if nonzero > 0:
        weight /= 2**nonzero
    return weight


def genz_keister_construction(
        dimensions: int, level: int, generators: Sequence[Ball], weight_factors: Array,
        precision: int) -> QuadratureRule:
    """Construct the rule of a given level by concatenating the orbits of all admissible partitions."""
    if not isinstance(dimensions, int) or dimensions < 0:
        raise ValueError("dimensions must be a non-negative int.")
    if weight_factors.shape != (len(generators) + 1, len(generators) + 1):
        raise ValueError("weight_factors must be a square table with one more row than there are generators.")
    max_level = compute_max_level(len(generators))
    if level > max_level:
        raise ValueError(f"level cannot exceed {max_level} with {len(generators)} generators.")

    # build each orbit lazily and share its single weight
    nodes: List[Node] = []
    weights: List[Ball] = []
    with working_precision(precision):
        for partition in generate_partitions(dimensions, level):
            if not is_admissible(partition, level):
                continue
            weight = compute_weight(partition, level, weight_factors)
            orbit = list(compute_nodes(partition, generators))
            nodes.extend(orbit)
            weights.extend([weight] * len(orbit))

    return QuadratureRule(nodes, weights, dimensions, level, precision)


def check_accuracy(rule: QuadratureRule, target_precision: int) -> bool:
    """Whether every coordinate of every node and every weight has a radius smaller than 2 to the power of the
    negative target precision.
    """
    with working_precision(rule.precision):
        if not all(is_accurate(w, target_precision) for w in rule.weights):
            return False
        return all(is_accurate(c, target_precision) for n in rule.nodes for c in n)
