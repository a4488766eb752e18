"""
Replay and Verify Harness Output

Reads a harness output file (ours or the reference implementation's) and
recomputes every recorded fitness with this implementation:

1. Parse the sample count, sample vectors and fitness values
2. Re-evaluate each record (scaling to bounds the way the test did)
3. Report absolute/relative error per record and an overall verdict

Usage:
    lsgo-bench replay lsgo-random.txt --data-dir cdatafiles
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..core.errors import LSGOError
from ..functions.benchmarks import BASIC_FUNCTIONS, FunctionID, get_benchmark
from .config import BASICFUNS_FILE, RANDOM_BY_FUNCTION_FILE, RANDOM_FILE
from .runner import scale_to_bounds

KIND_BY_FILENAME = {
    BASICFUNS_FILE: "basic",
    RANDOM_FILE: "random",
    RANDOM_BY_FUNCTION_FILE: "random-by-function",
}


class OutputFormatError(LSGOError):
    """Harness output file does not have the expected layout."""


@dataclass
class OutputRecord:
    """One recorded evaluation: which function, the raw [0, 1) sample, the fitness."""
    label: str
    sample: int
    x: np.ndarray
    fitness: float


@dataclass
class ReplayResult:
    """Outcome of replaying one output file."""
    path: str
    kind: str
    records: int
    passed: int
    failed: int
    max_abs_error: float
    max_rel_error: float
    failures: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def all_verified(self) -> bool:
        return self.records > 0 and self.failed == 0


def detect_kind(path: Path) -> str:
    """Infer the test from the file name (lsgo-random.txt, ...)."""
    kind = KIND_BY_FILENAME.get(Path(path).name)
    if kind is None:
        raise OutputFormatError(
            f"cannot infer test kind from {Path(path).name}; pass kind explicitly"
        )
    return kind


def _manifest_function_ids(path: Path) -> Optional[List[FunctionID]]:
    manifest = Path(path).with_suffix(".json")
    if not manifest.exists():
        return None
    with open(manifest, 'r') as f:
        try:
            record = json.load(f)
        except ValueError as e:
            raise OutputFormatError(f"{manifest}: {e}")
    function_ids = record.get("function_ids") if isinstance(record, dict) else None
    if not function_ids:
        return None
    return [FunctionID.parse(i) for i in function_ids]


class _Tokens:
    def __init__(self, path: Path):
        with open(path, 'r') as f:
            self._values = f.read().split()
        self._pos = 0
        self.path = path

    def take(self, n: int) -> List[str]:
        if self._pos + n > len(self._values):
            raise OutputFormatError(
                f"{self.path}: truncated after {len(self._values)} values"
            )
        out = self._values[self._pos:self._pos + n]
        self._pos += n
        return out

    def floats(self, n: int) -> np.ndarray:
        try:
            return np.array([float(t) for t in self.take(n)])
        except ValueError as e:
            raise OutputFormatError(f"{self.path}: {e}")

    @property
    def exhausted(self) -> bool:
        return self._pos == len(self._values)


def read_output(
    path,
    kind: Optional[str] = None,
    dimension: int = 1000,
    function_ids: Optional[Sequence] = None
) -> List[OutputRecord]:
    """
    Parse a harness output file.

    Args:
        path: Output file
        kind: "basic", "random" or "random-by-function" (default: from file name)
        dimension: Length of each sample vector
        function_ids: Function order used by the run (default: the
                      manifest's, else F1-F15)

    Returns:
        Records in file order
    """
    path = Path(path)
    kind = kind or detect_kind(path)
    if function_ids is None:
        function_ids = _manifest_function_ids(path) or list(FunctionID)
    labels = [f"F{int(FunctionID.parse(f))}" for f in function_ids]

    tokens = _Tokens(path)
    try:
        samples = int(tokens.take(1)[0])
    except ValueError:
        raise OutputFormatError(f"{path}: first line must be the sample count")

    records = []
    if kind == "random":
        for sample in range(samples):
            x = tokens.floats(dimension)
            for label, f in zip(labels, tokens.floats(len(labels))):
                records.append(OutputRecord(label, sample, x, float(f)))
    elif kind in ("basic", "random-by-function"):
        groups = list(BASIC_FUNCTIONS) if kind == "basic" else labels
        for label in groups:
            for sample in range(samples):
                x = tokens.floats(dimension)
                f = float(tokens.floats(1)[0])
                records.append(OutputRecord(label, sample, x, f))
    else:
        raise OutputFormatError(f"unknown output kind {kind!r}")

    if not tokens.exhausted:
        raise OutputFormatError(f"{path}: trailing values after {len(records)} records")
    return records


def _recompute(record: OutputRecord, data_dir) -> float:
    if record.label in BASIC_FUNCTIONS:
        return BASIC_FUNCTIONS[record.label](record.x)
    bench = get_benchmark(record.label, data_dir)
    x = scale_to_bounds(record.x, bench.bounds)
    return bench.compute(x[:bench.dimension])


def replay_output(
    path,
    kind: Optional[str] = None,
    data_dir=None,
    dimension: int = 1000,
    function_ids: Optional[Sequence] = None,
    rtol: float = 1e-10,
    verbose: bool = True
) -> ReplayResult:
    """
    Recompute every fitness in a harness output file and compare.

    A record passes when |recomputed - recorded| <= rtol * max(1, |recorded|).

    Returns:
        ReplayResult summary
    """
    path = Path(path)
    kind = kind or detect_kind(path)
    records = read_output(path, kind, dimension, function_ids)

    if verbose:
        print("\n" + "=" * 60)
        print("REPLAY VERIFICATION")
        print("=" * 60)
        print(f"Output file: {path}")
        print(f"Test: {kind}")
        print(f"Records: {len(records)}")
        print("=" * 60 + "\n")

    passed = 0
    failures = []
    max_abs = 0.0
    max_rel = 0.0
    for i, record in enumerate(records):
        f = _recompute(record, data_dir)
        abs_err = abs(f - record.fitness)
        rel_err = abs_err / max(1.0, abs(record.fitness))
        max_abs = max(max_abs, abs_err)
        max_rel = max(max_rel, rel_err)
        if rel_err <= rtol:
            passed += 1
        else:
            failures.append({
                'index': i,
                'label': record.label,
                'sample': record.sample,
                'recorded': record.fitness,
                'recomputed': f,
                'rel_error': rel_err,
            })

    result = ReplayResult(
        path=str(path),
        kind=kind,
        records=len(records),
        passed=passed,
        failed=len(failures),
        max_abs_error=max_abs,
        max_rel_error=max_rel,
        failures=failures,
    )

    if verbose:
        print(f"Records verified: {passed}/{len(records)}")
        print(f"Max absolute error: {max_abs:.6e}")
        print(f"Max relative error: {max_rel:.6e}")
        if result.all_verified:
            print("\n*** ALL RECORDS MATCH ***")
        else:
            print(f"\n*** {result.failed} MISMATCHES ***")
            for f in failures[:5]:
                print(f"  - {f['label']} sample {f['sample'] + 1}: "
                      f"recorded {f['recorded']:.16g}, recomputed {f['recomputed']:.16g}")
            if len(failures) > 5:
                print(f"  ... and {len(failures) - 5} more")
        print("=" * 60)

    return result
