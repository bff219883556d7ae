import random
from collections import deque
from typing import Sequence, TypeVar

T = TypeVar("T")


class Random:
    """
    Source of random multiset samples. Seeded through `random.Random`, or
    replaying a fixed list of numbers loaded with `read_from_file` so that a
    failing sample can be reproduced exactly.
    """

    rng: random.Random
    replay: deque[int] | None

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)
        self.replay = None

    def _next_replayed(self) -> int:
        assert self.replay is not None
        number = self.replay.popleft()
        # Cycle through the file when more numbers are needed than it holds.
        self.replay.append(number)
        return number

    def choice(self, lst: Sequence[T]) -> T:
        if self.replay is not None:
            return lst[self._next_replayed() % len(lst)]
        return self.rng.choice(lst)

    def randint(self, a: int, b: int) -> int:
        if self.replay is not None:
            return a + self._next_replayed() % (b - a + 1)
        return self.rng.randint(a, b)

    def read_from_file(self, rand_file: str):
        numbers: list[int] = []
        with open(rand_file) as f:
            for line in f:
                numbers += [int(x) for x in line.split()]
        if not numbers:
            raise ValueError(f"{rand_file} contains no numbers to replay")
        self.replay = deque(numbers)


def random_values(rng: Random, size: int, max_value: int) -> list[int]:
    """A list of `size` values in [0, max_value], in no particular order."""
    return [rng.randint(0, max_value) for _ in range(size)]


def random_cap(rng: Random, max_value: int) -> int | None:
    """No cap or a cap in [0, max_value + 1], each half of the time."""
    cap = rng.randint(0, max_value + 1)
    return rng.choice([None, cap])
