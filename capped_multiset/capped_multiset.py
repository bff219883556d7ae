from __future__ import annotations

import logging
import operator
from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a value cannot represent a non-negative count."""


def _check_count(value: object, what: str) -> int:
    # bool is a subclass of int, but True/False are not counts.
    if isinstance(value, bool):
        raise InvalidInputError(f"{what} must be an integer, got {value!r}")
    try:
        count = operator.index(value)  # pyright: ignore[reportArgumentType]
    except TypeError:
        raise InvalidInputError(f"{what} must be an integer, got {value!r}") from None
    if count < 0:
        raise InvalidInputError(f"{what} must be non-negative, got {count}")
    return count


@dataclass(init=False, repr=False, slots=True)
class CappedMultiset:
    """
    A multiset of non-negative integers with a mutable cap on the value of each
    element. Reading an element, or summing them, returns values clamped to the
    cap. Changing the cap does not change the stored values, so setting a low
    cap is not lossy.

    The values are sorted once and their prefix sums stored, so `sum` only has
    to binary search for the first element above the cap.

    Two multisets are equal when they hold the same values and the same cap.
    The cap is mutable, so instances are not hashable.
    """

    _values: tuple[int, ...]
    _prefix_sums: tuple[int, ...]
    _cap: int | None

    def __init__(self, values: Iterable[int] = (), cap: int | None = None):
        checked = sorted(
            _check_count(value, f"element {index}")
            for index, value in enumerate(values)
        )
        self._values = tuple(checked)
        self._prefix_sums = tuple(accumulate(checked))
        self._cap = None
        logger.debug(
            f"Built capped multiset of {len(self._values)} elements, "
            f"total {self._total()}"
        )
        if cap is not None:
            self.set_cap(cap)

    @staticmethod
    def from_iterable(values: Iterable[int], cap: int | None = None) -> CappedMultiset:
        return CappedMultiset(values, cap)

    @property
    def values(self) -> tuple[int, ...]:
        """The stored values in ascending order, ignoring the cap."""
        return self._values

    @property
    def prefix_sums(self) -> tuple[int, ...]:
        return self._prefix_sums

    @property
    def cap(self) -> int | None:
        return self._cap

    def set_cap(self, cap: int | None) -> None:
        """Set the cap on the values of the multiset, or remove it with `None`."""
        if cap is not None:
            cap = _check_count(cap, "cap")
        self._cap = cap
        logger.debug(f"Cap set to {cap}")

    def boundary_index(self) -> int:
        """
        Number of elements that are at or below the cap. Every element from
        this index onwards is clamped to the cap.
        """
        if self._cap is None:
            return len(self._values)
        return bisect_right(self._values, self._cap)

    def sum(self) -> int:
        """Compute the sum of all elements of the multiset, honoring the cap."""
        if self._cap is None:
            return self._total()
        boundary = self.boundary_index()
        below = self._prefix_sums[boundary - 1] if boundary > 0 else 0
        return below + self._cap * (len(self._values) - boundary)

    def _total(self) -> int:
        return self._prefix_sums[-1] if self._prefix_sums else 0

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        if self._cap is None:
            return iter(self._values)
        cap = self._cap
        return (min(value, cap) for value in self._values)

    def __repr__(self) -> str:
        if self._cap is None:
            return f"CappedMultiset({list(self._values)!r})"
        return f"CappedMultiset({list(self._values)!r}, cap={self._cap})"
