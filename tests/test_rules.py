"""Tests of assembly and certification of fully symmetric rules."""

import itertools
from typing import Dict

from mpmath import iv
import numpy as np
import pytest

from pygk.rules import (
    Z, QuadratureRule, check_accuracy, compute_max_level, compute_nodes, compute_weight, genz_keister_construction,
    is_admissible
)
from pygk.utilities.balls import to_float, working_precision
from pygk.utilities.enumeration import Partition, generate_partitions

from .conftest import PRECISION, TableFixture


def test_admissibility_offsets() -> None:
    """Test that offsets cover nine generator indices and make admissibility monotone."""
    assert len(Z) == 27
    assert all(j + Z[j] <= k + Z[k] for j, k in zip(range(len(Z)), range(1, len(Z))))
    for level in range(9):
        for partition in generate_partitions(3, level):
            if is_admissible(partition, level):
                for index in range(3):
                    if partition[index] > 0:
                        decreased = list(partition)
                        decreased[index] -= 1
                        assert is_admissible(tuple(decreased), level)


@pytest.mark.parametrize(['partition', 'level', 'admissible'], [
    pytest.param((0, 0), 0, True, id="origin"),
    pytest.param((1, 0), 1, True, id="first generator"),
    pytest.param((2, 0), 2, False, id="second generator too early"),
    pytest.param((2, 0), 3, True, id="second generator"),
    pytest.param((1, 1), 2, True, id="two first generators"),
    pytest.param((5, 0), 7, False, id="fifth generator too early"),
    pytest.param((5, 0), 8, True, id="fifth generator"),
])
def test_admissibility(partition: Partition, level: int, admissible: bool) -> None:
    """Test admissibility of a few partitions."""
    assert is_admissible(partition, level) == admissible


@pytest.mark.parametrize(['partition', 'count'], [
    pytest.param((), 1, id="no dimensions"),
    pytest.param((0, 0, 0), 1, id="origin"),
    pytest.param((1, 0), 4, id="one generator in 2D"),
    pytest.param((1, 1), 4, id="equal generators in 2D"),
    pytest.param((2, 1, 0), 24, id="distinct generators in 3D"),
    pytest.param((2, 2, 1, 0), 96, id="repeated generators in 4D"),
])
def test_orbits(hermite_table: TableFixture, partition: Partition, count: int) -> None:
    """Test that orbits contain each permutation with each combination of signs exactly once, and that zeros are never
    given signs.
    """
    generators, _ = hermite_table
    with working_precision(PRECISION):
        nodes = [tuple(to_float(c) for c in n) for n in compute_nodes(partition, generators)]
        magnitudes = sorted(to_float(generators[p]) for p in partition)
    assert len(nodes) == len(set(nodes)) == count
    for node in nodes:
        assert sorted(abs(c) for c in node) == magnitudes
        assert all(np.copysign(1, c) == 1 for c in node if c == 0)


def test_sign_order(hermite_table: TableFixture) -> None:
    """Test that signs are assigned by the bits of each variant in order of the non-zero coordinates."""
    generators, _ = hermite_table
    with working_precision(PRECISION):
        nodes = [tuple(to_float(c) for c in n) for n in compute_nodes((1, 0), generators)]
    root = np.sqrt(3)
    np.testing.assert_allclose(nodes, [[0, root], [0, -root], [root, 0], [-root, 0]], rtol=1e-15)


def test_three_point_rule(hermite_table: TableFixture) -> None:
    """Test the smallest rules with a single lattice point sum."""
    generators, table = hermite_table
    with working_precision(PRECISION):
        origin = compute_weight((0,), 0, table)
        center = compute_weight((0,), 1, table)
        side = compute_weight((1,), 1, table)
    np.testing.assert_allclose([to_float(origin), to_float(center), to_float(side)], [1, 2 / 3, 1 / 6], rtol=1e-15)

    rule = genz_keister_construction(1, 0, generators, table, PRECISION)
    assert len(rule) == 1 and to_float(rule.weights[0]) == to_float(table[0, 0]) == 1


@pytest.mark.parametrize(['level', 'expected'], [
    pytest.param(1, {0: 2 / 3, 1.7320508075688772: 1 / 6}, id="level 1"),
    pytest.param(2, {0: 2 / 3, 1.7320508075688772: 1 / 6}, id="level 2"),
    pytest.param(3, {
        0: 0.45874486825749189,
        0.74109534999454085: 0.13137860698313561,
        1.7320508075688772: 0.13855327472974924,
        4.1849560176727323: 6.9568415836913987e-4,
    }, id="level 3"),
    pytest.param(4, {
        0: 0.25396825396825407,
        0.74109534999454085: 0.27007432957793776,
        1.7320508075688772: 0.094850948509485125,
        2.8612795760570582: 0.0079963254708935293,
        4.1849560176727323: 9.4269457556517470e-05,
    }, id="level 4"),
])
def test_published_weights(hermite_table: TableFixture, level: int, expected: Dict[float, float]) -> None:
    """Test that one-dimensional rules match published nested Gauss-Hermite weights."""
    generators, table = hermite_table
    rule = genz_keister_construction(1, level, generators, table, PRECISION)
    nodes, weights = rule.to_arrays()
    assert nodes.shape == (2 * len(expected) - 1, 1)
    for node, weight in zip(nodes[:, 0], weights):
        key = min(expected, key=lambda k: abs(k - abs(node)))
        np.testing.assert_allclose(abs(node), key, rtol=1e-15, atol=1e-15)
        np.testing.assert_allclose(weight, expected[key], rtol=1e-13)


def test_level_eight_nodes(hermite_table: TableFixture) -> None:
    """Test that the level-8 one-dimensional rule uses the first nine generators."""
    generators, table = hermite_table
    nodes, weights = genz_keister_construction(1, 8, generators, table, PRECISION).to_arrays()
    expected = [
        0, 0.74109534999454085, 1.2304236340273060, 1.7320508075688772, 2.5960831150492023, 2.8612795760570582,
        4.1849560176727323, 5.1870160399136562, 6.3633944943363696
    ]
    np.testing.assert_allclose(np.unique(np.abs(nodes)), expected, rtol=1e-15, atol=1e-15)
    np.testing.assert_allclose(weights.sum(), 1, rtol=0, atol=1e-14)


@pytest.mark.parametrize(['dimensions', 'level', 'degree'], [
    pytest.param(1, 3, 7, id="1D level 3"),
    pytest.param(1, 8, 17, id="1D level 8"),
    pytest.param(2, 2, 5, id="2D level 2"),
    pytest.param(2, 5, 11, id="2D level 5"),
    pytest.param(3, 3, 7, id="3D level 3"),
    pytest.param(4, 4, 9, id="4D level 4"),
])
def test_polynomial_exactness(hermite_table: TableFixture, dimensions: int, level: int, degree: int) -> None:
    """Test that rules integrate monomials with total degree up to twice the level plus one against the standard normal
    distribution exactly.
    """
    generators, table = hermite_table
    nodes, weights = genz_keister_construction(dimensions, level, generators, table, PRECISION).to_arrays()
    moments = [1, 0, 1, 0, 3, 0, 15, 0, 105, 0, 945, 0, 10395, 0, 135135, 0, 2027025, 0]
    for exponents in itertools.product(range(degree + 1), repeat=dimensions):
        if sum(exponents) <= degree:
            terms = weights * (nodes ** np.array(exponents)).prod(axis=1)
            expected = np.prod([moments[e] for e in exponents])
            np.testing.assert_allclose(terms.sum(), expected, rtol=1e-10, atol=1e-10 * max(1, np.abs(terms).max()))


@pytest.mark.parametrize(['exponent', 'expected'], [
    pytest.param(16, 2027025, id="even monomial"),
    pytest.param(17, 0, id="odd monomial"),
])
def test_certified_exactness(hermite_table: TableFixture, exponent: int, expected: int) -> None:
    """Test that in ball arithmetic the level-8 one-dimensional rule encloses the exact integrals of the monomials with
    the largest degrees that it supports.
    """
    generators, table = hermite_table
    rule = genz_keister_construction(1, 8, generators, table, PRECISION)
    with working_precision(PRECISION):
        integral = sum((w * n[0]**exponent for n, w in zip(rule.nodes, rule.weights)), iv.mpf(0))
        assert integral.a <= expected <= integral.b
        assert integral.delta < iv.mpf(2)**-40


def test_two_dimensional_rule(hermite_table: TableFixture) -> None:
    """Test the level-1 rule in two dimensions."""
    generators, table = hermite_table
    rule = genz_keister_construction(2, 1, generators, table, PRECISION)
    nodes, weights = rule.to_arrays()
    root = np.sqrt(3)
    np.testing.assert_allclose(nodes, [[0, 0], [0, root], [0, -root], [root, 0], [-root, 0]], rtol=1e-15)
    np.testing.assert_allclose(weights, [1 / 3, 1 / 6, 1 / 6, 1 / 6, 1 / 6], rtol=1e-15)


@pytest.mark.parametrize(['dimensions', 'level'], [
    pytest.param(0, 0, id="no dimensions"),
    pytest.param(0, 5, id="no dimensions with a level"),
    pytest.param(1, -1, id="negative level"),
    pytest.param(3, -2, id="negative level in 3D"),
])
def test_trivial_rules(hermite_table: TableFixture, dimensions: int, level: int) -> None:
    """Test that rules without dimensions have a single unit weight and that rules with negative levels are empty."""
    generators, table = hermite_table
    rule = genz_keister_construction(dimensions, level, generators, table, PRECISION)
    nodes, weights = rule.to_arrays()
    if level < 0:
        assert len(rule) == 0 and nodes.shape == (0, dimensions) and weights.shape == (0,)
    else:
        assert rule.nodes == ((),) and nodes.shape == (1, 0)
        np.testing.assert_equal(weights, [1])


def test_invalid_constructions(hermite_table: TableFixture) -> None:
    """Test that levels beyond those supported by the generators and invalid tables are rejected."""
    generators, table = hermite_table
    assert compute_max_level(len(generators)) == 17
    with pytest.raises(ValueError):
        genz_keister_construction(1, 18, generators, table, PRECISION)
    with pytest.raises(ValueError):
        genz_keister_construction(1, 1, generators[:5], table, PRECISION)
    with pytest.raises(ValueError):
        genz_keister_construction(-1, 1, generators, table, PRECISION)
    assert compute_max_level(100) == len(Z) - 1


def test_deterministic_rules(hermite_table: TableFixture) -> None:
    """Test that repeated construction gives identical nodes and weights in the same order."""
    generators, table = hermite_table
    first = genz_keister_construction(3, 4, generators, table, PRECISION)
    second = genz_keister_construction(3, 4, generators, table, PRECISION)
    assert len(first) == len(second)
    for array1, array2 in zip(first.to_arrays(), second.to_arrays()):
        np.testing.assert_array_equal(array1, array2)


@pytest.mark.parametrize('dimensions', [
    pytest.param(1, id="1D"),
    pytest.param(2, id="2D"),
    pytest.param(5, id="5D"),
])
@pytest.mark.parametrize('level', [
    pytest.param(0, id="level 0"),
    pytest.param(3, id="level 3"),
    pytest.param(6, id="level 6"),
])
def test_weights_and_formatting(hermite_table: TableFixture, dimensions: int, level: int) -> None:
    """Test that weights sum to one, that nodes and weights are certified, and that rules can be formatted."""
    generators, table = hermite_table
    rule = genz_keister_construction(dimensions, level, generators, table, PRECISION)
    assert str(rule)
    assert check_accuracy(rule, 53)
    with working_precision(PRECISION):
        total = sum(rule.weights, iv.mpf(0))
        assert total.delta < iv.mpf(2)**-53
    np.testing.assert_allclose(to_float(total), 1, rtol=0, atol=1e-15)


def test_accuracy_certification() -> None:
    """Test that rules are only certified when all balls are narrow enough."""
    with working_precision(64):
        narrow = iv.mpf(1) / 3
        wide = iv.mpf([0.25, 0.26])
    assert check_accuracy(QuadratureRule([(narrow,)], [narrow], 1, 0, 64), 53)
    assert not check_accuracy(QuadratureRule([(narrow,)], [narrow], 1, 0, 64), 70)
    assert not check_accuracy(QuadratureRule([(narrow,)], [wide], 1, 0, 64), 53)
    assert not check_accuracy(QuadratureRule([(wide,)], [narrow], 1, 0, 64), 53)
    assert check_accuracy(QuadratureRule([], [], 1, -1, 64), 53)
    with pytest.raises(ValueError):
        QuadratureRule([(narrow,)], [], 1, 0, 64)


def test_float_conversion(hermite_table: TableFixture) -> None:
    """Test that balls are rounded to the same floats at any working precision and that rounding commutes with
    negation.
    """
    generators, _ = hermite_table
    with working_precision(PRECISION):
        expected = [to_float(g) for g in generators]
        negated = [to_float(-g) for g in generators]
    with working_precision(24):
        assert [to_float(g) for g in generators] == expected
    assert [to_float(g) for g in generators] == expected
    assert negated == [-f for f in expected]
