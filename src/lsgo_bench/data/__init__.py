"""
Data Module - Auxiliary Benchmark Data

Provides:
- Loader for the reference data files (shift, permutation, rotations,
  sub-component sizes and weights)
- Sub-component layout

The synthetic data generator lives in lsgo_bench.data.generator.
"""

from .layout import SubComponent, build_subcomponents
from .loader import (
    AuxiliaryData,
    load_auxiliary_data,
    read_vector,
    read_permutation,
    read_matrix,
    read_sizes,
    read_weights,
    resolve_data_dir,
    data_file,
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
)

__all__ = [
    'SubComponent',
    'build_subcomponents',
    'AuxiliaryData',
    'load_auxiliary_data',
    'read_vector',
    'read_permutation',
    'read_matrix',
    'read_sizes',
    'read_weights',
    'resolve_data_dir',
    'data_file',
    'DATA_DIR_ENV',
    'DEFAULT_DATA_DIR',
]
