"""Fixtures used by tests."""

import os
from typing import cast, Any, Iterator, Tuple

import numpy as np
import pytest

from pygk import GenzKeister, build_generators, build_weight_factors, options
from pygk.utilities.balls import Ball
from pygk.utilities.basics import Array


# define common types
GeneratorsFixture = Tuple[Ball, ...]
TableFixture = Tuple[Tuple[Ball, ...], Array]


# working precision used by all fixtures
PRECISION = 128


@pytest.fixture(scope='session', autouse=True)
def configure() -> Iterator[None]:
    """Configure NumPy so that it raises all warnings as exceptions and silence status updates. Next, if a DTYPE
    environment variable is set in this testing environment that is different from the default data type, use it for
    exported nodes and weights.
    """

    # configure NumPy so that it raises all warnings as exceptions
    old_error = np.seterr(all='raise')

    # silence status updates
    old_verbose = options.verbose
    options.verbose = False

    # use any different data type for exported arrays
    old_dtype = options.dtype
    dtype_string = os.environ.get('DTYPE')
    if dtype_string:
        options.dtype = cast(Any, np.dtype(dtype_string))
        if np.finfo(options.dtype).dtype == old_dtype:
            pytest.skip(f"The {dtype_string} data type is the same as the default one in this environment.")

    # run tests before reverting all changes
    yield
    options.dtype = old_dtype
    options.verbose = old_verbose
    np.seterr(**old_error)


@pytest.fixture(scope='session')
def hermite_generators() -> GeneratorsFixture:
    """Compute the classic generators for the standard normal distribution from extensions of degrees 1, 2, 6, 10, and
    16.
    """
    return build_generators((1, 2, 6, 10, 16), PRECISION)


@pytest.fixture(scope='session')
def hermite_table(hermite_generators: GeneratorsFixture) -> TableFixture:
    """Compute the table of weight factors for the classic generators."""
    return hermite_generators, build_weight_factors(hermite_generators, PRECISION)


@pytest.fixture(scope='session')
def genz_keister() -> GenzKeister:
    """Configure the classic construction, which caches generators and weight factors across tests."""
    return GenzKeister()
