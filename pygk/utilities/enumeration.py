"""Enumeration of integer partitions, their permutations, and bounded lattice points."""

from typing import Iterator, Tuple

import numpy as np
from sympy.utilities.iterables import multiset_permutations

from .basics import Array


# define a common type
Partition = Tuple[int, ...]


def generate_partitions(dimensions: int, budget: int) -> Iterator[Partition]:
    """Generate all non-increasing tuples of non-negative integers with a fixed size whose totals do not exceed a
    budget. Tuples are ordered by their totals and then in descending lexicographic order.
    """
    for total in range(budget + 1):
        yield from generate_fixed_partitions(dimensions, total, total)


def generate_fixed_partitions(size: int, total: int, largest: int) -> Iterator[Partition]:
    """Generate non-increasing tuples of non-negative integers with a fixed size that sum to a fixed total and that have
    no element larger than a bound.
    """
    if size == 0:
        if total == 0:
            yield ()
        return
    for first in range(min(total, largest), -1, -1):
        if first * size < total:
            break
        for rest in generate_fixed_partitions(size - 1, total - first, first):
            yield (first,) + rest


def generate_permutations(partition: Partition) -> Iterator[Partition]:
    """Generate the distinct permutations of a partition in lexicographic order."""
    for permutation in multiset_permutations(list(partition)):
        yield tuple(permutation)


def generate_lattice_points(dimensions: int, budget: int) -> Iterator[Partition]:
    """Generate all tuples of non-negative integers with a fixed size whose sums do not exceed a budget, ordered by
    their sums.
    """
    for summation in range(budget + 1):
        yield from (tuple(s) for s in same_sum_sequences(dimensions, summation).tolist())


def same_sum_sequences(size: int, summation: int) -> Array:
    """Compute all sequences of non-negative integers with a fixed size that sum to a fixed number. Sequences are in
    descending lexicographic order, starting with the one that puts the whole sum in the first element.
    """
    if size == 0:
        return np.zeros((1 if summation == 0 else 0, 0), np.int64)
    sequence = np.zeros(size, np.int64)
    sequence[0] = summation
    sequences = [sequence.copy()]
    forward = 0
    while sequence[-1] < summation:
        if forward == size - 1:
            for backward in reversed(range(forward)):
                forward = backward
                if sequence[backward] != 0:
                    break
        sequence[forward] -= 1
        forward += 1
        sequence[forward] = summation - sequence[:forward].sum()
        if forward < size - 1:
            sequence[forward + 1:] = 0
        sequences.append(sequence.copy())
    return np.vstack(sequences)
