"""
Transform Primitives

Reusable numeric operations that the benchmark pipelines compose in front
of the basic kernels:

- shift: move the optimum to the origin
- rotate / scale_and_rotate: mix dimensions within a sub-component
- oscillate, asymmetry, ill_condition: the suite's irregularity transforms
- decompose / residual / assemble: permutation-based sub-component slicing

Every primitive is pure and returns a new float64 array.
"""

import math
from typing import List, Sequence

import numpy as np

from ..core.errors import DimensionMismatchError
from ..data.layout import SubComponent


def _as_vector(x) -> np.ndarray:
    return np.asarray(x, dtype=np.float64)


def _exponent(i: int, n: int) -> float:
    if n <= 1:
        return 0.0
    return i / float(n - 1)


def shift(x: np.ndarray, o: np.ndarray) -> np.ndarray:
    """Elementwise x - o."""
    x = _as_vector(x)
    o = _as_vector(o)
    if x.shape != o.shape:
        raise DimensionMismatchError(len(o), len(x))
    return x - o


def rotate(x: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """
    Matrix-vector product M·x.

    Each row accumulates x[j] * M[i, j] for j from n-1 down to 0,
    matching the reference loop. Adding one column at a time keeps that
    order while letting numpy handle all rows at once; BLAS matmul would
    not.

    Args:
        x: Vector of length n
        matrix: n x n matrix

    Returns:
        Rotated vector of length n
    """
    x = _as_vector(x)
    matrix = np.asarray(matrix, dtype=np.float64)
    n = len(x)
    if matrix.shape != (n, n):
        raise DimensionMismatchError(n, matrix.shape[0], "rotation matrix")

    result = np.zeros(n)
    for j in range(n - 1, -1, -1):
        result += x[j] * matrix[:, j]
    return result


def ill_condition(x: np.ndarray, alpha: float) -> np.ndarray:
    """
    Λ^alpha: scale xᵢ by alpha^(0.5·i/(n-1)).

    The suite applies it with alpha = 10 to rastrigin and ackley.
    """
    values = _as_vector(x).tolist()
    n = len(values)
    return np.array([
        xi * math.pow(alpha, 0.5 * i / (n - 1) if n > 1 else 0.0)
        for i, xi in enumerate(values)
    ], dtype=np.float64)


def scale_and_rotate(x: np.ndarray, matrix: np.ndarray, scale: float) -> np.ndarray:
    """
    Ill-scale then rotate: xᵢ·scale^(i/(n-1)), followed by M·x.

    Args:
        x: Vector of length n
        matrix: n x n rotation matrix
        scale: Conditioning base (10 gives a tenfold spread end to end)
    """
    values = _as_vector(x).tolist()
    n = len(values)
    scaled = np.array([
        xi * math.pow(scale, _exponent(i, n))
        for i, xi in enumerate(values)
    ], dtype=np.float64)
    return rotate(scaled, matrix)


def asymmetry(x: np.ndarray, beta: float) -> np.ndarray:
    """
    T_asy^beta: xᵢ > 0 becomes xᵢ^(1 + beta·i/(n-1)·√xᵢ).

    Non-positive entries pass through unchanged.
    """
    values = _as_vector(x).tolist()
    n = len(values)
    out = []
    for i, xi in enumerate(values):
        if xi > 0:
            xi = math.pow(xi, 1 + (beta * i / (n - 1) if n > 1 else 0.0) * math.sqrt(xi))
        out.append(xi)
    return np.array(out, dtype=np.float64)


def _osz(xi: float) -> float:
    if xi == 0:
        return 0.0
    hat = math.log(abs(xi))
    if xi > 0:
        c1, c2, sign = 10.0, 7.9, 1.0
    else:
        c1, c2, sign = 5.5, 3.1, -1.0
    return sign * math.exp(hat + 0.049 * (math.sin(c1 * hat) + math.sin(c2 * hat)))


def oscillate(x: np.ndarray) -> np.ndarray:
    """
    T_osz: sign(x)·exp(x̂ + 0.049(sin(c1·x̂) + sin(c2·x̂))), x̂ = log|x|.

    c1, c2 = 10, 7.9 for positive entries and 5.5, 3.1 otherwise.
    Zero maps to zero.
    """
    return np.array([_osz(xi) for xi in _as_vector(x).tolist()], dtype=np.float64)


def decompose(
    x: np.ndarray,
    perm: np.ndarray,
    components: Sequence[SubComponent]
) -> List[np.ndarray]:
    """
    Permute x and slice it into sub-components.

    Args:
        x: Vector of length dim
        perm: Permutation of range(dim)
        components: Layout from build_subcomponents

    Returns:
        One new array per component, x[perm[start:stop]]
    """
    x = _as_vector(x)
    perm = np.asarray(perm)
    if len(perm) != len(x):
        raise DimensionMismatchError(len(perm), len(x))
    return [x[perm[c.start:c.stop]] for c in components]


def residual(x: np.ndarray, perm: np.ndarray, offset: int) -> np.ndarray:
    """The permuted tail x[perm[offset:]] left outside every sub-component."""
    x = _as_vector(x)
    perm = np.asarray(perm)
    if len(perm) != len(x):
        raise DimensionMismatchError(len(perm), len(x))
    return x[perm[offset:]]


def assemble(
    parts: Sequence[np.ndarray],
    perm: np.ndarray,
    components: Sequence[SubComponent],
    dim: int,
    fill: float = 0.0
) -> np.ndarray:
    """
    Inverse of decompose: scatter sub-vectors back to their positions.

    Positions covered by no component keep `fill`. Where components
    overlap, later components win.
    """
    if len(parts) != len(components):
        raise DimensionMismatchError(len(components), len(parts), "parts")
    perm = np.asarray(perm)
    out = np.full(dim, fill, dtype=np.float64)
    for part, c in zip(parts, components):
        part = _as_vector(part)
        if len(part) != c.size:
            raise DimensionMismatchError(c.size, len(part), "sub-component")
        out[perm[c.start:c.stop]] = part
    return out
