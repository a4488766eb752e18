"""
Functions Module - Kernels, Transforms and the Fifteen Benchmarks

Provides:
- basic: sphere, elliptic, rastrigin, ackley, schwefel, rosenbrock
- transforms: shift, rotate, irregularity transforms, decomposition
- benchmarks: FunctionID, FUNCTIONS table, Benchmark, compute()
"""

from .basic import sphere, elliptic, rastrigin, ackley, schwefel, rosenbrock, KERNELS
from .transforms import (
    shift,
    rotate,
    scale_and_rotate,
    ill_condition,
    asymmetry,
    oscillate,
    decompose,
    residual,
    assemble,
)
from .benchmarks import (
    FunctionID,
    Family,
    FunctionSpec,
    FUNCTIONS,
    OPTIMAL_FITNESS,
    BASIC_FUNCTIONS,
    Benchmark,
    get_spec,
    get_benchmark,
    clear_cache,
    compute,
)

__all__ = [
    'sphere',
    'elliptic',
    'rastrigin',
    'ackley',
    'schwefel',
    'rosenbrock',
    'KERNELS',
    'shift',
    'rotate',
    'scale_and_rotate',
    'ill_condition',
    'asymmetry',
    'oscillate',
    'decompose',
    'residual',
    'assemble',
    'FunctionID',
    'Family',
    'FunctionSpec',
    'FUNCTIONS',
    'OPTIMAL_FITNESS',
    'BASIC_FUNCTIONS',
    'Benchmark',
    'get_spec',
    'get_benchmark',
    'clear_cache',
    'compute',
]
