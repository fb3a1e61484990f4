"""General functionality."""

from .basics import Array, Error, CountedError, StringRepresentation, output, warn, format_seconds, format_number
from .balls import Ball, ComplexBall, working_precision, rational_ball, interval_ball, to_float
from .enumeration import Partition, generate_partitions, generate_permutations, generate_lattice_points
from .polynomials import X, find_extension, isolate_roots
