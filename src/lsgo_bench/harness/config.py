"""
Harness Configuration
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ..data.loader import resolve_data_dir
from ..functions.benchmarks import FunctionID

BASICFUNS_FILE = "lsgo-basicfuns.txt"
RANDOM_FILE = "lsgo-random.txt"
RANDOM_BY_FUNCTION_FILE = "lsgo-randombyfun.txt"


@dataclass
class HarnessConfig:
    """
    Settings shared by every harness test.

    Attributes:
        dimension: Length of generated sample vectors. Functions with a
                   smaller dimension (F13, F14) use the leading entries.
        samples: Random samples per test
        precision: Significant digits written to output files
        data_dir: Auxiliary data directory (None: $LSGO_DATA_DIR or ./cdatafiles)
        output_dir: Where output files are written
        seed: Seed for the sample generator (None: seeded from the clock)
        function_ids: Benchmark functions to run, in order
        verbose: Print progress to stdout
    """
    dimension: int = 1000
    samples: int = 1
    precision: int = 18
    data_dir: Optional[Path] = None
    output_dir: Path = Path(".")
    seed: Optional[int] = None
    function_ids: Tuple[FunctionID, ...] = field(
        default_factory=lambda: tuple(FunctionID)
    )
    verbose: bool = True

    def __post_init__(self):
        self.data_dir = resolve_data_dir(self.data_dir)
        self.output_dir = Path(self.output_dir)
        self.function_ids = tuple(FunctionID.parse(f) for f in self.function_ids)
        if self.samples < 0:
            raise ValueError("samples must be >= 0")
        if not 1 <= self.precision <= 40:
            raise ValueError("precision must be between 1 and 40")
