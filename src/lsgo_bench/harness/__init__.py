"""
Harness Module - Drives the Benchmarks and Records Results

Provides:
- HarnessConfig: shared test settings
- Harness: optimum, zero, basic-function and random tests
- Replay: read output files back and recompute every fitness
"""

from .config import HarnessConfig
from .runner import (
    Harness,
    TEST_NAMES,
    machine_precision,
    random_vector,
    scale_to_bounds,
)
from .replay import (
    OutputRecord,
    read_output,
    replay_output,
    ReplayResult,
)

__all__ = [
    'HarnessConfig',
    'Harness',
    'TEST_NAMES',
    'machine_precision',
    'random_vector',
    'scale_to_bounds',
    'OutputRecord',
    'read_output',
    'replay_output',
    'ReplayResult',
]
