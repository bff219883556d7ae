"""
Symbolic checks of the capped sum.

`CappedMultiset.sum` replaces the clamp-and-sum over every element by a binary
search for the cap boundary and a prefix sum lookup. The functions here ask Z3
for a counterexample to that replacement over symbolic inputs of a fixed size.
A query is proven when Z3 answers `unsat`.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import z3  # pyright: ignore[reportMissingTypeStubs]

from capped_multiset.utils.run_with_smt_solver import run_query

logger = logging.getLogger(__name__)


def _add_all(terms: Sequence[Any]) -> Any:
    result = z3.IntVal(0)
    for term in terms:
        result = result + term
    return result


def declare_values(size: int, prefix: str = "v") -> list[Any]:
    return [z3.Int(f"{prefix}{i}") for i in range(size)]


def sorted_counts_constraints(values: Sequence[Any]) -> list[Any]:
    """Constraints stating that `values` are non-negative and ascending."""
    constraints = [value >= 0 for value in values]
    for lhs, rhs in zip(values, values[1:]):
        constraints.append(lhs <= rhs)
    return constraints


def naive_capped_sum(values: Sequence[Any], cap: Any) -> Any:
    """The sum of `min(v, cap)` over every value."""
    return _add_all([z3.If(value <= cap, value, cap) for value in values])


def prefix_capped_sum(values: Sequence[Any], cap: Any) -> Any:
    """
    The capped sum as computed from the boundary index and the prefix sums.
    `values` must be constrained to be sorted for this to be meaningful.
    """
    size = len(values)
    prefix_sums = [z3.IntVal(0)]
    for value in values:
        prefix_sums.append(prefix_sums[-1] + value)

    # The boundary is `size` when no element is above the cap.
    result = prefix_sums[size]
    for boundary in reversed(range(size)):
        above = values[boundary] > cap
        if boundary > 0:
            condition = z3.And(values[boundary - 1] <= cap, above)
        else:
            condition = above
        result = z3.If(
            condition,
            prefix_sums[boundary] + cap * (size - boundary),
            result,
        )
    return result


def verify_capped_sum(size: int, timeout: int = 10_000) -> bool:
    """
    Prove that the prefix sum formulation equals the naive capped sum for every
    sorted multiset of `size` non-negative values and every non-negative cap.
    """
    values = declare_values(size)
    cap = z3.Int("cap")
    constraints = sorted_counts_constraints(values)
    constraints.append(cap >= 0)
    constraints.append(prefix_capped_sum(values, cap) != naive_capped_sum(values, cap))
    result = run_query(constraints, timeout)
    logger.debug(f"capped sum, size {size}: {result}")
    return result == z3.unsat


def verify_cap_monotonicity(size: int, timeout: int = 10_000) -> bool:
    """Prove that raising the cap never decreases the capped sum."""
    values = declare_values(size)
    low_cap = z3.Int("low_cap")
    high_cap = z3.Int("high_cap")
    constraints = sorted_counts_constraints(values)
    constraints.append(low_cap >= 0)
    constraints.append(low_cap <= high_cap)
    constraints.append(
        prefix_capped_sum(values, low_cap) > prefix_capped_sum(values, high_cap)
    )
    result = run_query(constraints, timeout)
    logger.debug(f"cap monotonicity, size {size}: {result}")
    return result == z3.unsat


def verify_up_to(max_size: int, timeout: int = 10_000) -> dict[int, bool]:
    """Run every proof for each size in `0..max_size`."""
    results: dict[int, bool] = {}
    for size in range(max_size + 1):
        results[size] = verify_capped_sum(size, timeout) and verify_cap_monotonicity(
            size, timeout
        )
        logger.info(f"size {size}: {'proven' if results[size] else 'FAILED'}")
    return results
