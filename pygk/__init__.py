"""Public-facing objects."""

from . import exceptions, options
from .configurations.family import Family
from .configurations.genz_keister import GenzKeister
from .construction import build_generators, build_integration, build_rule, build_weight_factors, is_accurate_enough
from .rules import QuadratureRule
from .version import __version__

__all__ = [
    'exceptions', 'options', 'Family', 'GenzKeister', 'build_generators', 'build_integration', 'build_rule',
    'build_weight_factors', 'is_accurate_enough', 'QuadratureRule', '__version__'
]
