"""
LSGO Bench Command-Line Interface

Runs the harness tests, evaluates single points, generates synthetic data
and replays output files.

    lsgo-bench test 4 10            # reference driver usage: test id [samples]
    lsgo-bench random --samples 10 --seed 1
    lsgo-bench eval 4 --zeros
    lsgo-bench generate --data-dir /tmp/cdatafiles --seed 7
    lsgo-bench replay /tmp/lsgo-random.txt
"""

import sys
import argparse
from pathlib import Path

import numpy as np

from .core.errors import LSGOError
from .data.loader import DATA_DIR_ENV, read_vector
from .functions.benchmarks import FUNCTIONS, FunctionID, get_benchmark
from .harness.config import HarnessConfig
from .harness.runner import Harness, TEST_NAMES, machine_precision
from .harness.replay import replay_output


def _config(args) -> HarnessConfig:
    return HarnessConfig(
        dimension=args.dim,
        samples=args.samples,
        precision=args.precision,
        data_dir=args.data_dir,
        output_dir=args.output_dir,
        seed=args.seed,
        function_ids=tuple(args.functions) if args.functions else tuple(FunctionID),
        verbose=not args.quiet,
    )


def _run_test(test_id: int, args) -> int:
    harness = Harness(_config(args))
    harness.run(test_id)
    return 0


def cmd_test(args):
    """Run a harness test by its number, as the reference driver does."""
    if args.samples_positional is not None:
        args.samples = args.samples_positional
    if args.id not in TEST_NAMES:
        print("Unknown test ID. Valid values are: 1:Optimum, 2:Zero, "
              "3:BasicFuns, 4:Random, 5:RandomByFun.")
        return 1
    return _run_test(args.id, args)


def cmd_named_test(test_id: int):
    def run(args):
        return _run_test(test_id, args)
    run.__doc__ = f"Run the {TEST_NAMES[test_id]} test."
    return run


def cmd_precision(args):
    """Print the machine precision."""
    print("Precision = %.36E" % machine_precision())
    return 0


def cmd_eval(args):
    """Evaluate one function at a point read from a file or at zero/optimum."""
    bench = get_benchmark(args.function, args.data_dir)
    if args.point:
        x = read_vector(args.point)
    elif args.optimum:
        x = bench.optimum
    else:
        x = np.zeros(bench.dimension)
    f = bench.compute(x)
    print("F%d: %1.16g" % (bench.function_id, f))
    return 0


def cmd_info(args):
    """List the benchmark functions."""
    print("=" * 60)
    print("CEC'2013 LSGO Benchmark Functions")
    print("=" * 60)
    for fid, spec in FUNCTIONS.items():
        low, high = spec.bounds
        print(f"F{int(fid):<3} D={spec.dimension:<5} [{low:g}, {high:g}]  {spec.name}")
    return 0


def cmd_generate(args):
    """Write a synthetic data set in the reference layout."""
    from .data.generator import write_all

    data_dir = args.data_dir or "cdatafiles"
    functions = args.functions or list(FunctionID)
    written = write_all(data_dir, seed=args.seed, function_ids=functions)
    if not args.quiet:
        print(f"Wrote {len(written)} files to {data_dir}")
    return 0


def cmd_replay(args):
    """Recompute every fitness in a harness output file."""
    result = replay_output(
        args.output_file,
        kind=args.kind,
        data_dir=args.data_dir,
        dimension=args.dim,
        function_ids=args.functions,
        rtol=args.rtol,
        verbose=not args.quiet,
    )
    return 0 if result.all_verified else 1


def cmd_version(args):
    """Print version information."""
    from . import __version__
    print(f"lsgo-bench {__version__}")
    print("CEC'2013 Large-Scale Global Optimization benchmark harness")
    return 0


def _add_common(parser, harness=True):
    parser.add_argument('--data-dir', type=Path, default=None,
                        help=f'Auxiliary data directory (default: ${DATA_DIR_ENV} or ./cdatafiles)')
    parser.add_argument('--functions', '-f', type=FunctionID.parse, nargs='+',
                        help='Function IDs to run (default: 1-15)')
    parser.add_argument('--dim', '-d', type=int, default=1000,
                        help='Sample vector length (default: 1000)')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress progress output')
    if harness:
        parser.add_argument('--samples', '-s', type=int, default=1,
                            help='Random samples (default: 1)')
        parser.add_argument('--precision', '-p', type=int, default=18,
                            help='Significant digits in output files (default: 18)')
        parser.add_argument('--output-dir', '-o', type=Path, default=Path('.'),
                            help='Directory for output files (default: .)')
        parser.add_argument('--seed', type=int, default=None,
                            help='Random seed (default: from the clock)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lsgo-bench',
        description="CEC'2013 LSGO benchmark harness"
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    test_parser = subparsers.add_parser('test', help='Run a test by number (1-5)')
    test_parser.add_argument('id', type=int,
                             help='1:Optimum, 2:Zero, 3:BasicFuns, 4:Random, 5:RandomByFun')
    test_parser.add_argument('samples_positional', type=int, nargs='?', metavar='samples',
                             help='Random samples')
    _add_common(test_parser)
    test_parser.set_defaults(func=cmd_test)

    for test_id, name in TEST_NAMES.items():
        sub = subparsers.add_parser(name, help=f'Run the {name} test')
        _add_common(sub)
        sub.set_defaults(func=cmd_named_test(test_id))

    prec_parser = subparsers.add_parser('precision', help='Print machine precision')
    prec_parser.set_defaults(func=cmd_precision)

    eval_parser = subparsers.add_parser('eval', help='Evaluate one function')
    eval_parser.add_argument('function', type=FunctionID.parse, help='Function ID (1-15)')
    group = eval_parser.add_mutually_exclusive_group()
    group.add_argument('--point', type=Path, help='File with the point, one value per line')
    group.add_argument('--optimum', action='store_true', help='Evaluate at the optimum')
    group.add_argument('--zeros', action='store_true', help='Evaluate at zero (default)')
    eval_parser.add_argument('--data-dir', type=Path, default=None,
                             help='Auxiliary data directory')
    eval_parser.set_defaults(func=cmd_eval)

    info_parser = subparsers.add_parser('info', help='List benchmark functions')
    info_parser.set_defaults(func=cmd_info)

    gen_parser = subparsers.add_parser('generate', help='Write a synthetic data set')
    gen_parser.add_argument('--data-dir', type=Path, default=None,
                            help='Output directory (default: ./cdatafiles)')
    gen_parser.add_argument('--functions', '-f', type=FunctionID.parse, nargs='+',
                            help='Function IDs (default: 1-15)')
    gen_parser.add_argument('--seed', type=int, default=None, help='Random seed')
    gen_parser.add_argument('--quiet', '-q', action='store_true')
    gen_parser.set_defaults(func=cmd_generate)

    replay_parser = subparsers.add_parser('replay', help='Verify a harness output file')
    replay_parser.add_argument('output_file', type=Path, help='Harness output file')
    replay_parser.add_argument('--kind', choices=['basic', 'random', 'random-by-function'],
                               help='Test that produced the file (default: from file name)')
    replay_parser.add_argument('--rtol', type=float, default=1e-10,
                               help='Relative tolerance (default: 1e-10)')
    _add_common(replay_parser, harness=False)
    replay_parser.set_defaults(func=cmd_replay)

    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (LSGOError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
