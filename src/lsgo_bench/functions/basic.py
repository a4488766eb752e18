"""
Basic Functions - The Six Kernels of the LSGO Suite

Each kernel maps a 1-D vector to a float. They are pure: the input is
never modified and no transform is applied here (the suite's
irregularity transforms live in transforms.py and are composed in
benchmarks.py).

Summation runs element by element in Python floats, in the same order
as the reference loops, so results agree bit for bit rather than only to
a tolerance. numpy's pairwise np.sum would reorder the additions.
"""

import math

import numpy as np


def _exponent(i: int, n: int) -> float:
    """i/(n-1), taken as 0 for a single-element vector."""
    if n <= 1:
        return 0.0
    return i / float(n - 1)


def sphere(x: np.ndarray) -> float:
    """
    Sphere Function
    f(x) = Σxᵢ²

    Summed from the last element to the first.
    """
    total = 0.0
    for xi in reversed(np.asarray(x, dtype=np.float64).tolist()):
        total += xi * xi
    return total


def elliptic(x: np.ndarray) -> float:
    """
    Elliptic Function
    f(x) = Σ (10⁶)^(i/(n-1)) xᵢ²

    Condition number 10⁶; summed from the first element to the last.
    """
    values = np.asarray(x, dtype=np.float64).tolist()
    n = len(values)
    total = 0.0
    for i, xi in enumerate(values):
        total += math.pow(1.0e6, _exponent(i, n)) * xi * xi
    return total


def rastrigin(x: np.ndarray) -> float:
    """
    Rastrigin Function
    f(x) = Σ [xᵢ² - 10cos(2πxᵢ) + 10]

    Highly multimodal with 10^n local minima.
    """
    total = 0.0
    for xi in reversed(np.asarray(x, dtype=np.float64).tolist()):
        total += xi * xi - 10.0 * math.cos(2.0 * math.pi * xi) + 10.0
    return total


def ackley(x: np.ndarray) -> float:
    """
    Ackley Function
    f(x) = -20exp(-0.2√(Σxᵢ²/n)) - exp(Σcos(2πxᵢ)/n) + 20 + e
    """
    values = np.asarray(x, dtype=np.float64).tolist()
    n = len(values)
    sum_sq = 0.0
    sum_cos = 0.0
    for xi in reversed(values):
        sum_sq += xi * xi
        sum_cos += math.cos(2.0 * math.pi * xi)
    return (-20.0 * math.exp(-0.2 * math.sqrt(sum_sq / n))
            - math.exp(sum_cos / n) + 20.0 + math.e)


def schwefel(x: np.ndarray) -> float:
    """
    Schwefel's Problem 1.2
    f(x) = Σᵢ (Σⱼ₌₀ⁱ xⱼ)²

    Order-sensitive: the prefix sums run from the first element.
    """
    prefix = 0.0
    total = 0.0
    for xi in np.asarray(x, dtype=np.float64).tolist():
        prefix += xi
        total += prefix * prefix
    return total


def rosenbrock(x: np.ndarray) -> float:
    """
    Rosenbrock Function
    f(x) = Σᵢ₌₀ⁿ⁻² [100(xᵢ² - xᵢ₊₁)² + (xᵢ - 1)²]

    Minimum 0 at x = (1, ..., 1). Summed from the last pair to the first.
    """
    values = np.asarray(x, dtype=np.float64).tolist()
    total = 0.0
    for j in range(len(values) - 2, -1, -1):
        t = values[j] * values[j] - values[j + 1]
        total += 100.0 * t * t
        t = values[j] - 1.0
        total += t * t
    return total


KERNELS = {
    'sphere': sphere,
    'elliptic': elliptic,
    'rastrigin': rastrigin,
    'ackley': ackley,
    'schwefel': schwefel,
    'rosenbrock': rosenbrock,
}
