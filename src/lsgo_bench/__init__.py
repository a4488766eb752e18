"""
LSGO Bench - CEC'2013 Large-Scale Global Optimization Benchmark Harness

Evaluates the fifteen CEC'2013 LSGO benchmark functions and their six
basic kernels with the reference implementation's numeric semantics, and
drives them with optimum, zero and random inputs to produce output files
that can be diffed against the reference implementation.

Key Features:
- Shift, permutation, rotation and irregularity transforms applied in the
  reference order with the reference summation order
- Loader for the reference data files with strict validation
- Harness tests 1-5 with the reference output layout
- Replay verification of any harness output file
- Synthetic data generation in the reference layout
"""

from .core import (
    LSGOError,
    DataLoadError,
    DimensionMismatchError,
    UnknownFunctionError,
    canonical_dumps,
    canonical_hash,
)
from .data import (
    AuxiliaryData,
    SubComponent,
    load_auxiliary_data,
)
from .functions import (
    FunctionID,
    Family,
    FunctionSpec,
    FUNCTIONS,
    OPTIMAL_FITNESS,
    BASIC_FUNCTIONS,
    Benchmark,
    get_benchmark,
    clear_cache,
    compute,
)
from .harness import (
    HarnessConfig,
    Harness,
    read_output,
    replay_output,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "LSGOError",
    "DataLoadError",
    "DimensionMismatchError",
    "UnknownFunctionError",
    # Canonical JSON
    "canonical_dumps",
    "canonical_hash",
    # Data
    "AuxiliaryData",
    "SubComponent",
    "load_auxiliary_data",
    # Benchmarks
    "FunctionID",
    "Family",
    "FunctionSpec",
    "FUNCTIONS",
    "OPTIMAL_FITNESS",
    "BASIC_FUNCTIONS",
    "Benchmark",
    "get_benchmark",
    "clear_cache",
    "compute",
    # Harness
    "HarnessConfig",
    "Harness",
    "read_output",
    "replay_output",
]
