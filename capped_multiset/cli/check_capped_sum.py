#!/usr/bin/env python3

import argparse
import os
from typing import Sequence

from capped_multiset.capped_multiset import CappedMultiset
from capped_multiset.utils.log_utils import setup_loggers
from capped_multiset.utils.random import Random, random_cap, random_values
from capped_multiset.verification import verify_up_to

MAX_SIZE = 6
TIMEOUT = 10_000
NUM_SAMPLES = 200
MAX_VALUE = 100
OUTPUTS_FOLDER = None


def register_all_arguments(arg_parser: argparse.ArgumentParser):
    arg_parser.add_argument(
        "-max_size",
        type=int,
        nargs="?",
        help="Largest multiset size to prove the capped sum for. 6 by default.",
    )
    arg_parser.add_argument(
        "-timeout",
        type=int,
        nargs="?",
        help="Z3 timeout per query, in milliseconds. 10000 by default.",
    )
    arg_parser.add_argument(
        "-random_file", type=str, nargs="?", help="the file includes all random numbers"
    )
    arg_parser.add_argument(
        "-random_seed", type=int, nargs="?", help="specify the random seed"
    )
    arg_parser.add_argument(
        "-num_samples",
        type=int,
        nargs="?",
        help="Number of random multisets to cross-check. 200 by default.",
    )
    arg_parser.add_argument(
        "-outputs_folder",
        type=str,
        nargs="?",
        help="Output folder for saving logs. Logs go to stderr if not given.",
    )
    arg_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Also log debug output"
    )


def cross_check(values: list[int], cap: int | None) -> bool:
    """Compare `CappedMultiset.sum` against clamping every element."""
    multiset = CappedMultiset(values)
    multiset.set_cap(cap)
    if cap is None:
        expected = sum(values)
    else:
        expected = sum(min(value, cap) for value in values)
    return multiset.sum() == expected


def main(args: Sequence[str] | None = None) -> int:
    arg_parser = argparse.ArgumentParser(
        description="Check the capped multiset sum against the naive clamp-and-sum"
    )
    register_all_arguments(arg_parser)
    parsed = arg_parser.parse_args(args)

    max_size = MAX_SIZE if parsed.max_size is None else parsed.max_size
    timeout = TIMEOUT if parsed.timeout is None else parsed.timeout
    num_samples = NUM_SAMPLES if parsed.num_samples is None else parsed.num_samples
    outputs_folder = (
        OUTPUTS_FOLDER if parsed.outputs_folder is None else parsed.outputs_folder
    )

    if max_size < 0:
        arg_parser.error(f"-max_size must be non-negative, got {max_size}")
    if timeout <= 0:
        arg_parser.error(f"-timeout must be positive, got {timeout}")
    if num_samples < 0:
        arg_parser.error(f"-num_samples must be non-negative, got {num_samples}")

    if outputs_folder is not None and not os.path.isdir(outputs_folder):
        os.mkdir(outputs_folder)

    logger = setup_loggers(outputs_folder, parsed.verbose)

    random = Random(parsed.random_seed)
    if parsed.random_file is not None:
        try:
            random.read_from_file(parsed.random_file)
        except (OSError, ValueError) as e:
            arg_parser.error(str(e))

    proofs = verify_up_to(max_size, timeout)
    failed_sizes = [size for size, proven in proofs.items() if not proven]

    failed_samples = 0
    for _ in range(num_samples):
        values = random_values(random, random.randint(0, 2 * max_size), MAX_VALUE)
        cap = random_cap(random, MAX_VALUE)
        if not cross_check(values, cap):
            failed_samples += 1
            logger.info(f"Mismatch for {values} with cap {cap}")
        else:
            logger.debug(f"{values} with cap {cap}: ok")

    logger.info(
        f"Proofs: {len(proofs) - len(failed_sizes)}/{len(proofs)} sizes, "
        f"samples: {num_samples - failed_samples}/{num_samples} matched"
    )
    return 0 if not failed_sizes and failed_samples == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
