"""
Evaluation Harness

Drives the benchmark functions with optimum, zero and random inputs and
writes the results in the layout the reference driver uses, so the two
implementations' outputs can be diffed line by line:

    <number of samples>
    <x_0>            \
    ...               | one sample vector, one value per line
    <x_{dim-1}>      /
    <fitness>        one or more fitness lines (see each test)

Tests, numbered as in the reference driver:
    1  optimum             f_k(x_opt) for every function
    2  zero                machine precision, then f_k(0) for every function
    3  basic               every basic function on random [0, 1) vectors
    4  random              every function on the same scaled random vector
    5  random-by-function  every function on its own scaled random vectors
"""

import hashlib
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from ..core.canonical_json import canonical_dumps, canonical_hash
from ..functions.benchmarks import BASIC_FUNCTIONS, Benchmark, get_benchmark
from .config import (
    BASICFUNS_FILE,
    RANDOM_BY_FUNCTION_FILE,
    RANDOM_FILE,
    HarnessConfig,
)

TEST_NAMES = {
    1: "optimum",
    2: "zero",
    3: "basic",
    4: "random",
    5: "random-by-function",
}


def machine_precision() -> float:
    """Smallest e (a power of two) with 1.0 + e > 1.0."""
    e = 1.0
    while 1.0 + e > 1.0:
        e *= 0.5
    return e * 2.0


def random_vector(rng: np.random.RandomState, dim: int) -> np.ndarray:
    """Uniform [0, 1) sample vector."""
    return rng.random_sample(dim)


def scale_to_bounds(x: np.ndarray, bounds) -> np.ndarray:
    """Map a [0, 1) vector onto [low, high): low + x * (high - low)."""
    low, high = bounds
    return low + x * (high - low)


@dataclass
class Evaluation:
    """One fitness value produced by the harness."""
    label: str
    sample: int
    fitness: float


class OutputWriter:
    """
    Writes a harness output file: sample count, then vectors and fitness
    values with a fixed number of significant digits.
    """

    def __init__(self, path: Path, samples: int, precision: int):
        self.path = Path(path)
        self.precision = precision
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, 'w')
        self._file.write(f"{samples}\n")

    def _fmt(self, value: float) -> str:
        return "%.*g" % (self.precision, value)

    def vector(self, x: np.ndarray):
        for v in x.tolist():
            self._file.write(self._fmt(v) + "\n")

    def value(self, f: float):
        self._file.write(self._fmt(f) + "\n")

    def close(self):
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class Harness:
    """
    Runs the harness tests against the benchmarks in config.data_dir.

    Example:
        >>> harness = Harness(HarnessConfig(samples=10, seed=1))
        >>> harness.run(4)
    """

    def __init__(self, config: Optional[HarnessConfig] = None):
        self.config = config or HarnessConfig()
        seed = self.config.seed
        if seed is None:
            seed = time.time_ns() % (2 ** 32)
        self.seed = seed
        self.rng = np.random.RandomState(seed)

    def benchmark(self, function_id) -> Benchmark:
        return get_benchmark(function_id, self.config.data_dir)

    def _print(self, *args):
        if self.config.verbose:
            print(*args)

    def _evaluate(self, bench: Benchmark, x: np.ndarray) -> float:
        # F13/F14 take the leading entries of the harness vector
        return bench.compute(x[:bench.dimension])

    def _random(self) -> np.ndarray:
        return random_vector(self.rng, self.config.dimension)

    def _writer(self, filename: str) -> OutputWriter:
        return OutputWriter(
            self.config.output_dir / filename,
            self.config.samples,
            self.config.precision
        )

    # --- tests ----------------------------------------------------------

    def test_optimum(self) -> List[Evaluation]:
        """
        f_k at the leading `dimension` entries of F{k}-xopt.txt.

        For F14 that is the start of the concatenated per-component
        optima, not Benchmark.optimum.
        """
        results = []
        for fid in self.config.function_ids:
            bench = self.benchmark(fid)
            f = bench.compute(np.array(bench.data.xopt[:bench.dimension]))
            self._print("F%d: %1.16g" % (fid, f))
            results.append(Evaluation(f"F{int(fid)}", 0, f))
        return results

    def test_zero(self) -> List[Evaluation]:
        """f_k at the zero vector."""
        self._print("Precision = %.36E" % machine_precision())
        x = np.zeros(self.config.dimension)
        results = []
        for fid in self.config.function_ids:
            f = self._evaluate(self.benchmark(fid), x)
            self._print("F%d: %1.16g" % (fid, f))
            results.append(Evaluation(f"F{int(fid)}", 0, f))
        return results

    def test_basic_functions(self) -> List[Evaluation]:
        """
        Each basic function on `samples` random [0, 1) vectors.

        Output: per function, per sample, the vector then its fitness.
        """
        results = []
        with self._writer(BASICFUNS_FILE) as out:
            for name, func in BASIC_FUNCTIONS.items():
                self._print(f"[Function: {name}]")
                for sample in range(self.config.samples):
                    x = self._random()
                    out.vector(x)
                    f = func(x)
                    out.value(f)
                    self._print("%d: %1.16g" % (sample + 1, f))
                    results.append(Evaluation(name, sample, f))
        self._write_manifest(BASICFUNS_FILE, 3)
        return results

    def test_random(self) -> List[Evaluation]:
        """
        Every function on the same random vector, scaled to its bounds.

        Output: per sample, the unscaled vector then one fitness per function.
        """
        results = []
        with self._writer(RANDOM_FILE) as out:
            for sample in range(self.config.samples):
                x = self._random()
                out.vector(x)
                self._print(f"[Sample: {sample + 1}]")
                for fid in self.config.function_ids:
                    bench = self.benchmark(fid)
                    f = self._evaluate(bench, scale_to_bounds(x, bench.bounds))
                    out.value(f)
                    self._print("F%d: %1.16g" % (fid, f))
                    results.append(Evaluation(f"F{int(fid)}", sample, f))
        self._write_manifest(RANDOM_FILE, 4)
        return results

    def test_random_by_function(self) -> List[Evaluation]:
        """
        Each function on its own `samples` random vectors.

        Output: per function, per sample, the unscaled vector then its fitness.
        """
        results = []
        with self._writer(RANDOM_BY_FUNCTION_FILE) as out:
            for fid in self.config.function_ids:
                self._print(f"[Function: {int(fid)}]")
                bench = self.benchmark(fid)
                for sample in range(self.config.samples):
                    x = self._random()
                    out.vector(x)
                    f = self._evaluate(bench, scale_to_bounds(x, bench.bounds))
                    out.value(f)
                    self._print("%d: %1.16g" % (sample + 1, f))
                    results.append(Evaluation(f"F{int(fid)}", sample, f))
        self._write_manifest(RANDOM_BY_FUNCTION_FILE, 5)
        return results

    def run(self, test_id: int) -> List[Evaluation]:
        """Run a test by its reference number (1-5)."""
        tests = {
            1: self.test_optimum,
            2: self.test_zero,
            3: self.test_basic_functions,
            4: self.test_random,
            5: self.test_random_by_function,
        }
        if test_id not in tests:
            raise ValueError(
                "Unknown test ID. Valid values are: 1:Optimum, 2:Zero, "
                "3:BasicFuns, 4:Random, 5:RandomByFun."
            )
        banners = {
            1: "Optimum",
            2: "Zero",
            3: f"Basic Functions (samples: {self.config.samples})",
            4: f"Random (samples: {self.config.samples})",
            5: f"Random by Function (samples: {self.config.samples})",
        }
        self._print(f" {banners[test_id]} ".center(35, "="))
        return tests[test_id]()

    # --- manifest -------------------------------------------------------

    def fingerprints(self) -> Dict[str, str]:
        """Data fingerprint per function in config.function_ids."""
        return {
            f"F{int(fid)}": self.benchmark(fid).fingerprint()
            for fid in self.config.function_ids
        }

    def _write_manifest(self, filename: str, test_id: int):
        """
        Record how an output file was produced next to it (<name>.json):
        test, settings, seed, function order, data fingerprints and the
        output's own hash.
        """
        output = self.config.output_dir / filename
        with open(output, 'rb') as f:
            output_hash = hashlib.sha256(f.read()).hexdigest()

        manifest = {
            "test": TEST_NAMES[test_id],
            "test_id": test_id,
            "output": filename,
            "output_sha256": output_hash,
            "dimension": self.config.dimension,
            "samples": self.config.samples,
            "precision": self.config.precision,
            "seed": int(self.seed),
            "function_ids": [int(f) for f in self.config.function_ids],
            "basic_functions": list(BASIC_FUNCTIONS),
        }
        if test_id != 3:
            manifest["data_fingerprints"] = self.fingerprints()
        manifest["manifest_hash"] = canonical_hash(manifest)

        with open(output.with_suffix(".json"), 'w') as f:
            f.write(canonical_dumps(manifest, indent=2))
