r"""Global options.

Attributes
----------
digits : `int`
    Number of digits displayed by status updates. The default number of digits is ``7``. The number of digits can be
    changed to, for example, ``2``, with ``pygk.options.digits = 2``.
verbose : `bool`
    Whether to output status updates. By default, verbosity is turned on. Verbosity can be turned off with
    ``pygk.options.verbose = False``.
verbose_tracebacks : `bool`
    Whether to include full tracebacks in error messages. By default, full tracebacks are turned off. These can be
    useful when attempting to find the source of an error message. Tracebacks can be turned on with
    ``pygk.options.verbose_tracebacks = True``.
verbose_output : `callable`
    Function used to output status updates. The default function is simply ``print``. The function can be changed, for
    example, to include an indicator that statuses are from this package, with
    ``pygk.verbose_output = lambda x: print(f"pygk: {x}")``.
flush_output : `bool`
    Whether to call ``sys.stdout.flush()`` after outputting a status update. By default, output is not flushed to
    standard output. To force standard output flushes after every status update, set
    ``pygk.options.flush_output = True``.
dtype : `dtype`
    The floating point data type used when certified nodes and weights are exported to arrays, which is by default
    ``numpy.float64``. Midpoints of the underlying balls are rounded to double precision and then converted to this
    type, so types with more precision than ``numpy.float64`` do not give more accurate nodes and weights.
working_precision : `int`
    Number of bits of working precision used by interval arithmetic when no precision is passed explicitly. The default
    is ``128``. Generators, weight factors, and rules are always computed at a single working precision; the only way to
    obtain more accurate values is to increase it and recompute.
target_precision : `int`
    Number of bits that the radius of every certified node and weight must resolve for a rule to be considered accurate
    enough, which is by default ``53``, the precision of ``numpy.float64``. A ball is accurate enough when its radius is
    smaller than :math:`2^{-p}` where :math:`p` is this target.
max_precision : `int`
    Largest working precision in bits that :class:`GenzKeister` will try when doubling the working precision after a
    rule fails to be certified. The default is ``2048``. If the target precision still cannot be met, a
    :class:`~pygk.exceptions.PrecisionLimitError` is raised.
validation_level : `int`
    How much to report when validating the one-dimensional rules that underlie the generators. By default this is ``0``
    and no validation is done. With ``1``, each extension's roots and interpolatory weights are validated against the
    polynomial family and any problems are displayed. With ``2``, every offending root or weight is displayed as well.
    Validation never stops construction.

"""

import numpy as _np


digits = 7
verbose = True
verbose_tracebacks = False
verbose_output = print
flush_output = False
dtype = _np.float64
working_precision = 128
target_precision = 53
max_precision = 2048
validation_level = 0
