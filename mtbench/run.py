"""Command line interface to check and benchmark the MT19937 generator."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from mtwister import MT19937, TWISTERS
from mtwister import random_utils

from .bench import batch_benchmark, benchmark_against_reference, speed_sweep, timed_draws
from .check import check_against_reference
from .io import load_metadata, save_results
from .timing import sscale

LOGGER = logging.getLogger(__name__)

_DEFAULT_SWEEP = [1, 10, 100, 1000, 10_000, 100_000, 1_000_000]

_SAMPLERS = {
    "int32": random_utils.genrand_int32,
    "int31": random_utils.genrand_int31,
    "real1": random_utils.genrand_real1,
    "real2": random_utils.genrand_real2,
    "real3": random_utils.genrand_real3,
    "res53": random_utils.genrand_res53,
}


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _run_check(args: argparse.Namespace) -> int:
    LOGGER.info("Testing Mersenne Twister with reference implementation")
    result = check_against_reference(
        seeds=range(args.start, args.start + args.seeds),
        draws=args.draws,
        passes=args.passes,
        twister=TWISTERS[args.twister],
    )
    return 0 if result.ok else 1


def _run_bench(args: argparse.Namespace) -> int:
    result = benchmark_against_reference(args.iterations, passes=args.passes, seed=args.seed)
    return 0 if result.hashes_match else 1


def _run_batches(args: argparse.Namespace) -> int:
    LOGGER.info("Mersenne Twister MT19937 non-rigorous benchmarking")
    result = batch_benchmark(MT19937(args.seed), part=args.part, run_secs=args.run_secs)
    summary = result.summary
    LOGGER.info("Total numbers generated: %s", sscale(result.total, 2))
    LOGGER.info("Total speed: %s numbers/second", sscale(result.total_speed, 4))
    LOGGER.info("Worst performance: %s numbers/second", sscale(summary["min"], 4))
    LOGGER.info("Best performance:  %s numbers/second", sscale(summary["max"], 4))
    LOGGER.info("Mean performance:  %s numbers/second", sscale(summary["mean"], 4))
    LOGGER.info("Standard deviation: %s", sscale(summary["std"], 4))
    return 0


def _run_draw(args: argparse.Namespace) -> int:
    secs = timed_draws(MT19937(args.seed), args.n)
    print(f"{args.n} {secs:f}")
    return 0


def _run_sweep(args: argparse.Namespace) -> int:
    dataset = speed_sweep(args.counts, seed=args.seed)
    if args.metadata:
        metadata: dict[str, Any] = load_metadata(args.metadata)
        dataset.attrs.update(metadata)
    save_results({"speed_sweep.nc": dataset}, args.output_dir)
    return 0


def _run_sample(args: argparse.Namespace) -> int:
    generator = MT19937(args.seed)
    values = _SAMPLERS[args.kind](args.n, generator=generator)
    for value in values.tolist():
        print(value)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check and benchmark the MT19937 generator")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Compare outputs with the numpy reference generator")
    check.add_argument("--passes", type=int, default=2, help="Number of passes over all seeds")
    check.add_argument("--seeds", type=int, default=5000, help="Number of consecutive seeds to check")
    check.add_argument("--start", type=int, default=0, help="First seed to check")
    check.add_argument("--draws", type=int, default=5000, help="Draws compared per seed")
    check.add_argument(
        "--twister",
        choices=sorted(TWISTERS),
        default="split",
        help="Twist routine used by the generator under test",
    )
    check.set_defaults(func=_run_check)

    bench = commands.add_parser("bench", help="Best-of-passes timing against the reference")
    bench.add_argument("--iterations", type=int, default=2_000_000, help="Draws hashed per pass")
    bench.add_argument("--passes", type=int, default=10, help="Number of timed passes")
    bench.add_argument("--seed", type=int, default=0, help="Seed for both generators")
    bench.set_defaults(func=_run_bench)

    batches = commands.add_parser("batches", help="Throughput over batches of varying size")
    batches.add_argument("--part", type=int, default=40, help="Batch partitioning factor (> 30)")
    batches.add_argument("--run-secs", type=float, default=1.0, help="Length of the priming run")
    batches.add_argument("--seed", type=int, default=5769, help="Generator seed")
    batches.set_defaults(func=_run_batches)

    draw = commands.add_parser("draw", help="Print '<n> <seconds>' for n timed draws")
    draw.add_argument("n", type=int, help="Number of draws")
    draw.add_argument("--seed", type=int, default=5769, help="Generator seed")
    draw.set_defaults(func=_run_draw)

    sweep = commands.add_parser("sweep", help="Time increasing numbers of draws and save to NetCDF")
    sweep.add_argument(
        "--counts",
        type=int,
        nargs="+",
        default=_DEFAULT_SWEEP,
        help="Numbers of draws to time",
    )
    sweep.add_argument("--seed", type=int, default=5769, help="Generator seed")
    sweep.add_argument("--output-dir", required=True, help="Directory where speed_sweep.nc is written")
    sweep.add_argument(
        "--metadata",
        default=None,
        help="Optional JSON file storing run metadata to be embedded in the output",
    )
    sweep.set_defaults(func=_run_sweep)

    sample = commands.add_parser("sample", help="Print derived random values, one per line")
    sample.add_argument("n", type=int, help="Number of values")
    sample.add_argument("--seed", type=int, default=5489, help="Generator seed")
    sample.add_argument("--kind", choices=sorted(_SAMPLERS), default="int32", help="Kind of value")
    sample.set_defaults(func=_run_sample)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
