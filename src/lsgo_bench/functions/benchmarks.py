"""
CEC'2013 LSGO Benchmark Functions

The fifteen large-scale benchmark functions, each a fixed pipeline of
transform primitives in front of one base function:

    F1-F3    separable, shifted (elliptic, rastrigin, ackley)
    F4-F7    partially separable: 7 rotated sub-components + 1 separable rest
    F8-F11   fully decomposed: 20 rotated sub-components
    F12      shifted rosenbrock
    F13      20 overlapping sub-components, conforming (one global shift)
    F14      20 overlapping sub-components, conflicting (per-component shifts)
    F15      shifted schwefel 1.2

Dispatch goes through the FUNCTIONS table: a FunctionID selects a
FunctionSpec, whose family selects a pipeline. There is no subclass per
function.

Reference: X. Li, K. Tang, M. Omidvar, Z. Yang and K. Qin, "Benchmark
Functions for the CEC'2013 Special Session and Competition on Large Scale
Global Optimization", RMIT University, 2013.
"""

import threading
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..core.errors import DimensionMismatchError, UnknownFunctionError
from ..data.loader import AuxiliaryData, PathLike, load_auxiliary_data, resolve_data_dir
from . import basic
from .transforms import (
    assemble,
    asymmetry,
    decompose,
    ill_condition,
    oscillate,
    residual,
    rotate,
    shift,
)


# Base functions as the suite evaluates them: the kernels with the
# irregularity transforms applied in front.

def base_sphere(z: np.ndarray) -> float:
    return basic.sphere(z)


def base_elliptic(z: np.ndarray) -> float:
    return basic.elliptic(oscillate(z))


def base_rastrigin(z: np.ndarray) -> float:
    return basic.rastrigin(ill_condition(asymmetry(oscillate(z), 0.2), 10.0))


def base_ackley(z: np.ndarray) -> float:
    return basic.ackley(ill_condition(asymmetry(oscillate(z), 0.2), 10.0))


def base_schwefel(z: np.ndarray) -> float:
    return basic.schwefel(asymmetry(oscillate(z), 0.2))


def base_rosenbrock(z: np.ndarray) -> float:
    return basic.rosenbrock(z)


BASIC_FUNCTIONS: Dict[str, Callable[[np.ndarray], float]] = {
    'sphere': base_sphere,
    'elliptic': base_elliptic,
    'rastrigin': base_rastrigin,
    'ackley': base_ackley,
    'schwefel': base_schwefel,
    'rosenbrock': base_rosenbrock,
}


class FunctionID(IntEnum):
    """Benchmark function identifiers."""
    F1 = 1
    F2 = 2
    F3 = 3
    F4 = 4
    F5 = 5
    F6 = 6
    F7 = 7
    F8 = 8
    F9 = 9
    F10 = 10
    F11 = 11
    F12 = 12
    F13 = 13
    F14 = 14
    F15 = 15

    @classmethod
    def parse(cls, value) -> 'FunctionID':
        """Accept a FunctionID, an int, or a name like "F4"/"f4"."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().upper()
            if text in cls.__members__:
                return cls[text]
            try:
                value = int(text)
            except ValueError:
                raise UnknownFunctionError(value)
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise UnknownFunctionError(value)


class Family(Enum):
    """Structural family of a benchmark pipeline."""
    SHIFTED = "shifted"
    PARTIALLY_SEPARABLE = "partially_separable"
    DECOMPOSED = "decomposed"
    OVERLAPPING_CONFORMING = "overlapping_conforming"
    OVERLAPPING_CONFLICTING = "overlapping_conflicting"


@dataclass(frozen=True)
class FunctionSpec:
    """Static configuration of one benchmark function."""
    function_id: FunctionID
    name: str
    family: Family
    base: str
    bounds: Tuple[float, float]
    dimension: int = 1000
    n_components: int = 0
    overlap: int = 0
    rest: Optional[str] = None

    @property
    def full_coverage(self) -> bool:
        return self.family is not Family.PARTIALLY_SEPARABLE


def _spec(fid, name, family, base, bounds, **kwargs) -> FunctionSpec:
    return FunctionSpec(FunctionID(fid), name, family, base, bounds, **kwargs)


FUNCTIONS: Dict[FunctionID, FunctionSpec] = {s.function_id: s for s in [
    _spec(1, "Shifted Elliptic", Family.SHIFTED, 'elliptic', (-100.0, 100.0)),
    _spec(2, "Shifted Rastrigin", Family.SHIFTED, 'rastrigin', (-5.0, 5.0)),
    _spec(3, "Shifted Ackley", Family.SHIFTED, 'ackley', (-32.0, 32.0)),
    _spec(4, "7-nonseparable, 1-separable Shifted and Rotated Elliptic",
          Family.PARTIALLY_SEPARABLE, 'elliptic', (-100.0, 100.0),
          n_components=7, rest='elliptic'),
    _spec(5, "7-nonseparable, 1-separable Shifted and Rotated Rastrigin",
          Family.PARTIALLY_SEPARABLE, 'rastrigin', (-5.0, 5.0),
          n_components=7, rest='rastrigin'),
    _spec(6, "7-nonseparable, 1-separable Shifted and Rotated Ackley",
          Family.PARTIALLY_SEPARABLE, 'ackley', (-32.0, 32.0),
          n_components=7, rest='ackley'),
    _spec(7, "7-nonseparable, 1-separable Shifted Schwefel 1.2",
          Family.PARTIALLY_SEPARABLE, 'schwefel', (-100.0, 100.0),
          n_components=7, rest='sphere'),
    _spec(8, "20-nonseparable Shifted and Rotated Elliptic",
          Family.DECOMPOSED, 'elliptic', (-100.0, 100.0), n_components=20),
    _spec(9, "20-nonseparable Shifted and Rotated Rastrigin",
          Family.DECOMPOSED, 'rastrigin', (-5.0, 5.0), n_components=20),
    _spec(10, "20-nonseparable Shifted and Rotated Ackley",
          Family.DECOMPOSED, 'ackley', (-32.0, 32.0), n_components=20),
    _spec(11, "20-nonseparable Shifted Schwefel 1.2",
          Family.DECOMPOSED, 'schwefel', (-100.0, 100.0), n_components=20),
    _spec(12, "Shifted Rosenbrock", Family.SHIFTED, 'rosenbrock', (-100.0, 100.0)),
    _spec(13, "Shifted Schwefel 1.2 with Conforming Overlapping Subcomponents",
          Family.OVERLAPPING_CONFORMING, 'schwefel', (-100.0, 100.0),
          dimension=905, n_components=20, overlap=5),
    _spec(14, "Shifted Schwefel 1.2 with Conflicting Overlapping Subcomponents",
          Family.OVERLAPPING_CONFLICTING, 'schwefel', (-100.0, 100.0),
          dimension=905, n_components=20, overlap=5),
    _spec(15, "Shifted Schwefel 1.2", Family.SHIFTED, 'schwefel', (-100.0, 100.0)),
]}


# Value at Benchmark.optimum. Rosenbrock's kernel minimum sits at ones,
# so the shifted origin scores one per consecutive pair. F14 has no
# common optimum; see Benchmark.optimum.
OPTIMAL_FITNESS: Dict[FunctionID, Optional[float]] = {
    fid: 0.0 for fid in FunctionID
}
OPTIMAL_FITNESS[FunctionID.F12] = float(FUNCTIONS[FunctionID.F12].dimension - 1)
OPTIMAL_FITNESS[FunctionID.F14] = None


def get_spec(function_id) -> FunctionSpec:
    """Look up the FunctionSpec for an ID; UnknownFunctionError if out of range."""
    return FUNCTIONS[FunctionID.parse(function_id)]


# --- pipelines -----------------------------------------------------------

def _rotated_sum(
    base: Callable[[np.ndarray], float],
    parts,
    data: AuxiliaryData,
) -> float:
    result = 0.0
    for part, component in zip(parts, data.components):
        z = rotate(part, data.rotations[component.size])
        result += component.weight * base(z)
    return result


def _shifted(spec: FunctionSpec, data: AuxiliaryData, x: np.ndarray) -> float:
    z = shift(x, data.xopt)
    return BASIC_FUNCTIONS[spec.base](z)


def _partially_separable(spec: FunctionSpec, data: AuxiliaryData, x: np.ndarray) -> float:
    z = shift(x, data.xopt)
    parts = decompose(z, data.permutation, data.components)
    result = _rotated_sum(BASIC_FUNCTIONS[spec.base], parts, data)
    result += BASIC_FUNCTIONS[spec.rest](residual(z, data.permutation, data.covered))
    return result


def _decomposed(spec: FunctionSpec, data: AuxiliaryData, x: np.ndarray) -> float:
    # conforming overlap only changes the component starts, already in data.components
    z = shift(x, data.xopt)
    parts = decompose(z, data.permutation, data.components)
    return _rotated_sum(BASIC_FUNCTIONS[spec.base], parts, data)


def _overlapping_conflicting(spec: FunctionSpec, data: AuxiliaryData, x: np.ndarray) -> float:
    parts = decompose(x, data.permutation, data.components)
    shifted = [shift(part, o) for part, o in zip(parts, data.component_optima())]
    return _rotated_sum(BASIC_FUNCTIONS[spec.base], shifted, data)


PIPELINES: Dict[Family, Callable[[FunctionSpec, AuxiliaryData, np.ndarray], float]] = {
    Family.SHIFTED: _shifted,
    Family.PARTIALLY_SEPARABLE: _partially_separable,
    Family.DECOMPOSED: _decomposed,
    Family.OVERLAPPING_CONFORMING: _decomposed,
    Family.OVERLAPPING_CONFLICTING: _overlapping_conflicting,
}


# --- benchmark instances -------------------------------------------------

class Benchmark:
    """
    One benchmark function bound to its auxiliary data.

    Data is read on the first compute() (or by an explicit load()) and is
    immutable afterwards, so compute() has no side effects.

    Example:
        >>> f4 = Benchmark(4, "cdatafiles")
        >>> f4.compute(np.zeros(f4.dimension))
    """

    def __init__(self, function_id, data_dir: Optional[PathLike] = None):
        """
        Args:
            function_id: 1-15, a FunctionID, or "F1".."F15"
            data_dir: Directory with the F{k}-* files (default: see
                      resolve_data_dir)

        Raises:
            UnknownFunctionError: if function_id is not 1-15
        """
        self.spec = get_spec(function_id)
        self.data_dir = resolve_data_dir(data_dir)
        self._data: Optional[AuxiliaryData] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Benchmark(F{int(self.function_id)}, data_dir={str(self.data_dir)!r})"

    @property
    def function_id(self) -> FunctionID:
        return self.spec.function_id

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def dimension(self) -> int:
        return self.spec.dimension

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.spec.bounds

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def load(self) -> AuxiliaryData:
        """Read the data files if not yet loaded. DataLoadError on failure."""
        if self._data is None:
            with self._lock:
                if self._data is None:
                    self._data = load_auxiliary_data(
                        int(self.function_id),
                        self.data_dir,
                        dimension=self.spec.dimension,
                        n_components=self.spec.n_components,
                        overlap=self.spec.overlap,
                        full_coverage=self.spec.full_coverage,
                        residual=self.spec.rest is not None,
                        component_shifts=(
                            self.spec.family is Family.OVERLAPPING_CONFLICTING
                        ),
                    )
        return self._data

    @property
    def data(self) -> AuxiliaryData:
        return self.load()

    @property
    def optimum(self) -> np.ndarray:
        """
        Optimal point in input space.

        For F14 the sub-component optima disagree on the shared indices;
        the point is assembled with later components overwriting earlier
        ones, so its fitness is not zero.
        """
        data = self.load()
        if self.spec.family is Family.OVERLAPPING_CONFLICTING:
            return assemble(
                data.component_optima(), data.permutation,
                data.components, self.dimension
            )
        return np.array(data.xopt)

    @property
    def optimal_fitness(self) -> Optional[float]:
        return OPTIMAL_FITNESS[self.function_id]

    def compute(self, x) -> float:
        """
        Evaluate the function at x.

        Args:
            x: Sequence of exactly `dimension` reals

        Returns:
            Fitness value

        Raises:
            DimensionMismatchError: if len(x) != dimension
            DataLoadError: if the data files cannot be loaded
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or len(x) != self.dimension:
            raise DimensionMismatchError(self.dimension, x.size, "input vector")
        data = self.load()
        return float(PIPELINES[self.spec.family](self.spec, data, x))

    __call__ = compute

    def fingerprint(self) -> str:
        """SHA-256 of the loaded auxiliary data."""
        return self.load().fingerprint()


_cache: Dict[Tuple[FunctionID, str], Benchmark] = {}
_cache_lock = threading.Lock()


def get_benchmark(function_id, data_dir: Optional[PathLike] = None) -> Benchmark:
    """Return the shared Benchmark for (function_id, data_dir), creating it once."""
    fid = FunctionID.parse(function_id)
    key = (fid, str(resolve_data_dir(data_dir)))
    with _cache_lock:
        bench = _cache.get(key)
        if bench is None:
            bench = Benchmark(fid, key[1])
            _cache[key] = bench
    return bench


def clear_cache():
    """Drop all shared Benchmark instances."""
    with _cache_lock:
        _cache.clear()


def compute(function_id, x, data_dir: Optional[PathLike] = None) -> float:
    """
    Evaluate benchmark `function_id` at x, loading its data on first use.

    Args:
        function_id: 1-15, a FunctionID, or "F1".."F15"
        x: Sequence of the function's dimension reals
        data_dir: Data directory (default: see resolve_data_dir)

    Returns:
        Fitness value
    """
    return get_benchmark(function_id, data_dir).compute(x)
