"""
Auxiliary Data Loader

Reads the precomputed data each benchmark function needs from the
reference data directory ("cdatafiles"):

    F{k}-xopt.txt   shift vector, comma/whitespace separated
    F{k}-p.txt      permutation, 1-based integers
    F{k}-R{m}.txt   m x m rotation matrix, one comma separated row per line
    F{k}-s.txt      sub-component sizes, one integer per line
    F{k}-w.txt      sub-component weights, one real per line

The files are shared with the reference implementation, so the layout is
fixed. Any missing, malformed or inconsistent file raises DataLoadError;
nothing is defaulted.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np

from ..core.canonical_json import canonical_hash
from ..core.errors import DataLoadError
from .layout import SubComponent, build_subcomponents

PathLike = Union[str, os.PathLike]

DATA_DIR_ENV = "LSGO_DATA_DIR"
DEFAULT_DATA_DIR = "cdatafiles"

_SEPARATORS = re.compile(r"[,\s]+")


def resolve_data_dir(data_dir: Optional[PathLike] = None) -> Path:
    """
    Pick the data directory: explicit argument, then $LSGO_DATA_DIR,
    then ./cdatafiles.
    """
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV, DEFAULT_DATA_DIR)
    return Path(data_dir)


def data_file(data_dir: PathLike, function_id: int, suffix: str) -> Path:
    """Path of F{function_id}-{suffix}.txt inside data_dir."""
    return Path(data_dir) / f"F{int(function_id)}-{suffix}.txt"


def _read_text(path: Path) -> str:
    try:
        with open(path, 'r') as f:
            return f.read()
    except FileNotFoundError:
        raise DataLoadError("file not found", path=str(path))
    except OSError as e:
        raise DataLoadError(f"cannot read file ({e})", path=str(path))


def _tokens(text: str) -> List[str]:
    return [t for t in _SEPARATORS.split(text) if t]


def _parse_floats(tokens: List[str], path: Path) -> np.ndarray:
    try:
        return np.array([float(t) for t in tokens], dtype=np.float64)
    except ValueError as e:
        raise DataLoadError(f"invalid number ({e})", path=str(path))


def _parse_ints(tokens: List[str], path: Path) -> np.ndarray:
    values = []
    for t in tokens:
        try:
            values.append(int(t))
        except ValueError:
            # the reference reads indices through stod, so "12.0" is accepted
            try:
                v = float(t)
            except ValueError:
                raise DataLoadError(f"invalid integer {t!r}", path=str(path))
            if not v.is_integer():
                raise DataLoadError(f"invalid integer {t!r}", path=str(path))
            values.append(int(v))
    return np.array(values, dtype=np.int64)


def _check_count(values: np.ndarray, expected: Optional[int], path: Path, what: str):
    if expected is not None and len(values) != expected:
        raise DataLoadError(
            f"{what} has {len(values)} entries, expected {expected}",
            path=str(path)
        )


def read_vector(path: PathLike, expected: Optional[int] = None) -> np.ndarray:
    """
    Read a real vector written as comma and/or whitespace separated values.

    Args:
        path: File to read
        expected: Required number of entries (None to accept any)

    Returns:
        float64 array
    """
    path = Path(path)
    values = _parse_floats(_tokens(_read_text(path)), path)
    _check_count(values, expected, path, "vector")
    return values


def read_permutation(path: PathLike, expected: Optional[int] = None) -> np.ndarray:
    """
    Read a 1-based permutation and return it 0-based.

    Raises DataLoadError unless the entries are a bijection over range(n).
    """
    path = Path(path)
    values = _parse_ints(_tokens(_read_text(path)), path) - 1
    _check_count(values, expected, path, "permutation")
    n = len(values)
    if n and (values.min() < 0 or values.max() >= n
              or len(np.unique(values)) != n):
        raise DataLoadError(
            f"entries are not a permutation of 1..{n}", path=str(path)
        )
    return values


def read_matrix(path: PathLike, size: int) -> np.ndarray:
    """
    Read a size x size matrix, one comma separated row per line.

    Blank lines are ignored. Raises DataLoadError when the row count or
    any row length differs from size.
    """
    path = Path(path)
    rows = []
    for line in _read_text(path).splitlines():
        tokens = _tokens(line)
        if not tokens:
            continue
        row = _parse_floats(tokens, path)
        if len(row) != size:
            raise DataLoadError(
                f"row {len(rows) + 1} has {len(row)} entries, expected {size}",
                path=str(path)
            )
        rows.append(row)
    if len(rows) != size:
        raise DataLoadError(
            f"matrix has {len(rows)} rows, expected {size}", path=str(path)
        )
    return np.vstack(rows)


def read_sizes(path: PathLike, expected: Optional[int] = None) -> np.ndarray:
    """Read sub-component sizes, which must be positive."""
    path = Path(path)
    values = _parse_ints(_tokens(_read_text(path)), path)
    _check_count(values, expected, path, "size table")
    if np.any(values <= 0):
        raise DataLoadError("sub-component sizes must be positive", path=str(path))
    return values


def read_weights(path: PathLike, expected: Optional[int] = None) -> np.ndarray:
    """Read sub-component weights."""
    path = Path(path)
    values = _parse_floats(_tokens(_read_text(path)), path)
    _check_count(values, expected, path, "weight table")
    return values


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


@dataclass
class AuxiliaryData:
    """
    Everything loaded for one benchmark function.

    Arrays are marked read-only after loading, so one instance can be
    shared across threads.

    Attributes:
        function_id: Benchmark function ID
        dimension: Length of the input vector
        xopt: Shift vector (length dimension; for F14, the concatenated
              per-component optima of length sum(sizes))
        permutation: 0-based permutation of range(dimension), or None
        rotations: Rotation matrix per sub-component size
        components: Sub-component layout (empty when not decomposed)
        overlap: Indices shared by consecutive components
        source: Directory the files were read from
    """
    function_id: int
    dimension: int
    xopt: np.ndarray
    permutation: Optional[np.ndarray] = None
    rotations: Dict[int, np.ndarray] = field(default_factory=dict)
    components: List[SubComponent] = field(default_factory=list)
    overlap: int = 0
    source: Optional[str] = None

    def __post_init__(self):
        _freeze(self.xopt)
        if self.permutation is not None:
            _freeze(self.permutation)
        for matrix in self.rotations.values():
            _freeze(matrix)

    @property
    def is_decomposed(self) -> bool:
        return bool(self.components)

    @property
    def covered(self) -> int:
        """Number of permuted indices consumed by the rotated components."""
        if not self.components:
            return 0
        return self.components[-1].stop

    def component_optima(self) -> List[np.ndarray]:
        """Split a per-component xopt (F14 layout) into one vector per component."""
        out = []
        offset = 0
        for c in self.components:
            out.append(self.xopt[offset:offset + c.size])
            offset += c.size
        return out

    def to_canonical(self) -> Dict:
        return {
            "function_id": int(self.function_id),
            "dimension": int(self.dimension),
            "overlap": int(self.overlap),
            "xopt": self.xopt,
            "permutation": self.permutation,
            "rotations": {str(k): v for k, v in sorted(self.rotations.items())},
            "components": [
                [c.start, c.size, c.weight] for c in self.components
            ],
        }

    def fingerprint(self) -> str:
        """SHA-256 of the loaded data in canonical JSON form."""
        return canonical_hash(self.to_canonical())


def load_auxiliary_data(
    function_id: int,
    data_dir: PathLike,
    dimension: int,
    n_components: int = 0,
    overlap: int = 0,
    full_coverage: bool = False,
    residual: bool = False,
    component_shifts: bool = False
) -> AuxiliaryData:
    """
    Load and validate the data files for one function.

    Args:
        function_id: Benchmark function ID (selects the F{k}-* files)
        data_dir: Directory holding the files
        dimension: Expected input dimension
        n_components: Number of rotated sub-components (0: shift only)
        overlap: Indices shared by consecutive sub-components
        full_coverage: Components must consume every permuted index
        residual: Components must leave a non-empty separable tail
        component_shifts: xopt holds one optimum per component (F14)

    Returns:
        Validated AuxiliaryData

    Raises:
        DataLoadError: on any missing, malformed or inconsistent file
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise DataLoadError("data directory not found", path=str(data_dir))

    xopt_path = data_file(data_dir, function_id, "xopt")

    if n_components == 0:
        xopt = read_vector(xopt_path, expected=dimension)
        return AuxiliaryData(
            function_id=function_id,
            dimension=dimension,
            xopt=xopt,
            source=str(data_dir)
        )

    sizes = read_sizes(data_file(data_dir, function_id, "s"), expected=n_components)
    weights = read_weights(data_file(data_dir, function_id, "w"), expected=n_components)
    components = build_subcomponents(sizes, weights, overlap)

    covered = components[-1].stop
    if full_coverage:
        fits, relation = covered == dimension, "equal"
    elif residual:
        fits, relation = covered < dimension, "be less than"
    else:
        fits, relation = covered <= dimension, "not exceed"
    if not fits:
        raise DataLoadError(
            f"sub-components cover {covered} indices, which must {relation} "
            f"dimension {dimension}",
            path=str(data_file(data_dir, function_id, "s"))
        )

    expected_xopt = int(sizes.sum()) if component_shifts else dimension
    xopt = read_vector(xopt_path, expected=expected_xopt)
    permutation = read_permutation(
        data_file(data_dir, function_id, "p"), expected=dimension
    )

    rotations = {}
    for size in sorted(set(int(s) for s in sizes)):
        rotations[size] = read_matrix(
            data_file(data_dir, function_id, f"R{size}"), size
        )

    return AuxiliaryData(
        function_id=function_id,
        dimension=dimension,
        xopt=xopt,
        permutation=permutation,
        rotations=rotations,
        components=components,
        overlap=overlap,
        source=str(data_dir)
    )
