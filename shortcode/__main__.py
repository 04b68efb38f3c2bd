"""
Print short codes.

Usage:
    python -m shortcode --alphabet-size 26 --length 2 --count 10
    python -m shortcode --preset numeric --length 4 --count 100 --partitions 4
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from .generator import CodeGenerator, ConfigurationOverflowError, ExhaustedError
from .generator.alphabet import ALPHANUMERIC
from .models import DEFAULT_CODE_LENGTH, AlphabetPreset, ExhaustionStrategy

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shortcode", description="Print short codes")
    alphabet = parser.add_mutually_exclusive_group()
    alphabet.add_argument(
        "-a",
        "--alphabet-size",
        type=int,
        help=f"use the first N characters of {ALPHANUMERIC!r}",
    )
    alphabet.add_argument(
        "-p",
        "--preset",
        choices=[preset.value for preset in AlphabetPreset],
        default=AlphabetPreset.LOWERCASE_ALPHANUMERIC.value,
    )
    parser.add_argument("-l", "--length", type=int, default=DEFAULT_CODE_LENGTH)
    parser.add_argument("-n", "--count", type=int, default=10)
    parser.add_argument("-s", "--seed", type=int, default=None)
    parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in ExhaustionStrategy],
        default=ExhaustionStrategy.INCREASE_LENGTH.value,
    )
    parser.add_argument(
        "--partitions",
        type=int,
        default=1,
        help="split the codes over this many generators, each driven by its own thread",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser


def _issue(generator: CodeGenerator[str], count: int) -> list[str]:
    return [generator.next_string() for _ in range(count)]


def generate_codes(
    generator: CodeGenerator[str], count: int, *, partitions: int = 1
) -> list[str]:
    if partitions == 1:
        return _issue(generator, count)

    parts = generator.into_partitioned_generators(partitions)
    counts = [len(range(k, count, partitions)) for k in range(partitions)]
    with ThreadPoolExecutor(max_workers=partitions) as pool:
        results = list(pool.map(_issue, parts, counts))

    # interleave so the output matches the unpartitioned order
    codes: list[str] = []
    for i in range(count):
        codes.append(results[i % partitions][i // partitions])
    return codes


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.alphabet_size is not None and not 1 <= args.alphabet_size <= len(
        ALPHANUMERIC
    ):
        parser.error(f"alphabet size must be between 1 and {len(ALPHANUMERIC)}")
    if args.length < 1:
        parser.error("length must be at least 1")
    if args.partitions < 1:
        parser.error("partitions must be at least 1")

    try:
        if args.alphabet_size is not None:
            generator = CodeGenerator(
                ALPHANUMERIC[: args.alphabet_size], args.length, seed=args.seed
            )
        else:
            generator = CodeGenerator.from_preset(
                AlphabetPreset(args.preset), args.length, seed=args.seed
            )
    except ConfigurationOverflowError as exc:
        parser.error(str(exc))

    generator.exhaustion_strategy(ExhaustionStrategy(args.strategy))
    _LOGGER.debug("issuing %s codes with seed %s", args.count, generator.seed)

    try:
        codes = generate_codes(generator, args.count, partitions=args.partitions)
    except ExhaustedError as exc:
        print(f"shortcode: error: {exc}", file=sys.stderr)
        return 1

    for code in codes:
        print(code)
    return 0


if __name__ == "__main__":
    sys.exit(main())
