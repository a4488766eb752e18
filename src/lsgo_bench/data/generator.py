"""
Synthetic Auxiliary Data Generator

Writes data sets in the reference file layout so the harness can run
without the published CEC'2013 data files. The generated functions have
the same structure (dimensions, sub-component counts, overlap, rotation
sizes) as the published ones but different numbers, so their outputs are
only comparable with an implementation fed the same generated files.
"""

from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
from scipy.stats import ortho_group

from ..functions.benchmarks import FUNCTIONS, Family, FunctionID, get_spec
from .loader import PathLike, data_file

ROTATION_SIZES = (25, 50, 100)


def _rng(seed) -> np.random.RandomState:
    if isinstance(seed, np.random.RandomState):
        return seed
    return np.random.RandomState(seed)


def create_shift_vector(dim: int, low: float, high: float, seed=None) -> np.ndarray:
    """
    Random optimum inside the inner 80% of [low, high] in every dimension.
    """
    rng = _rng(seed)
    half = 0.8 * (high - low) / 2.0
    middle = low + (high - low) / 2.0
    return rng.uniform(middle - half, middle + half, dim)


def create_permutation(dim: int, seed=None) -> np.ndarray:
    """Random 0-based permutation of range(dim)."""
    return _rng(seed).permutation(dim)


def create_rotation_matrix(dim: int, seed=None) -> np.ndarray:
    """Random orthogonal dim x dim matrix (Haar distributed)."""
    if dim == 1:
        return np.ones((1, 1))
    return ortho_group.rvs(dim=dim, random_state=_rng(seed))


def create_sizes(n_components: int, total: Optional[int] = None, seed=None) -> np.ndarray:
    """
    Sub-component sizes drawn from 25, 50 and 100.

    With `total`, the sizes sum to exactly `total`, which must equal
    50 * n_components: sizes start at 50 and random triples of 50s are
    traded for 25 + 25 + 100.
    """
    rng = _rng(seed)
    if total is None:
        return rng.choice(ROTATION_SIZES, n_components)

    if total != 50 * n_components:
        raise ValueError(
            f"cannot split {total} into {n_components} sizes averaging 50"
        )
    sizes = [50] * n_components
    for _ in range(rng.randint(0, n_components // 3 + 1)):
        fifties = [i for i, s in enumerate(sizes) if s == 50]
        if len(fifties) < 3:
            break
        a, b, c = rng.choice(fifties, 3, replace=False)
        sizes[a], sizes[b], sizes[c] = 25, 25, 100
    return np.array(sizes)


def create_weights(n_components: int, seed=None) -> np.ndarray:
    """Positive weights spread over several orders of magnitude."""
    return _rng(seed).lognormal(mean=0.0, sigma=3.0, size=n_components)


def _write_lines(path: Path, lines: Iterable[str]):
    with open(path, 'w') as f:
        for line in lines:
            f.write(line + "\n")


def _fmt(value: float) -> str:
    return repr(float(value))


def write_dataset(function_id, data_dir: PathLike, seed=None) -> List[Path]:
    """
    Write every data file function_id needs into data_dir.

    Args:
        function_id: 1-15 or FunctionID
        data_dir: Output directory (created if missing)
        seed: Seed or RandomState

    Returns:
        Paths written
    """
    spec = get_spec(function_id)
    fid = int(spec.function_id)
    rng = _rng(seed)
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    written = []

    def emit(suffix, lines):
        path = data_file(data_dir, fid, suffix)
        _write_lines(path, lines)
        written.append(path)

    low, high = spec.bounds
    if spec.n_components == 0:
        xopt = create_shift_vector(spec.dimension, low, high, rng)
        emit("xopt", (_fmt(v) for v in xopt))
        return written

    if spec.family is Family.PARTIALLY_SEPARABLE:
        sizes = create_sizes(spec.n_components, seed=rng)
    else:
        covered = spec.dimension + spec.overlap * (spec.n_components - 1)
        sizes = create_sizes(spec.n_components, total=covered, seed=rng)
    weights = create_weights(spec.n_components, rng)

    if spec.family is Family.OVERLAPPING_CONFLICTING:
        xopt = create_shift_vector(int(sizes.sum()), low, high, rng)
    else:
        xopt = create_shift_vector(spec.dimension, low, high, rng)
    perm = create_permutation(spec.dimension, rng)

    emit("xopt", (_fmt(v) for v in xopt))
    emit("p", [",".join(str(int(i) + 1) for i in perm)])
    emit("s", (str(int(s)) for s in sizes))
    emit("w", (_fmt(w) for w in weights))
    for size in sorted(set(int(s) for s in sizes)):
        matrix = create_rotation_matrix(size, rng)
        emit(f"R{size}", (",".join(_fmt(v) for v in row) for row in matrix))
    return written


def write_all(data_dir: PathLike, seed=None, function_ids=None) -> List[Path]:
    """Write data sets for several functions (default: all fifteen)."""
    rng = _rng(seed)
    if function_ids is None:
        function_ids = list(FUNCTIONS)
    written = []
    for fid in function_ids:
        written.extend(write_dataset(FunctionID.parse(fid), data_dir, rng))
    return written
