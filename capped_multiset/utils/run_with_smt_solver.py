from typing import Any, Sequence
import sys

import z3  # pyright: ignore[reportMissingTypeStubs]


class SolverError(Exception):
    """Raised when Z3 fails to decide a query."""


def run_query(constraints: Sequence[Any], timeout: int = 1000) -> Any:
    """
    Check the conjunction of `constraints` in a fresh Z3 solver. Returns
    `z3.sat` or `z3.unsat`.
    """
    solver = z3.Solver()
    # Set the timeout
    solver.set("timeout", timeout)  # pyright: ignore[reportUnknownMemberType]
    solver.add(*constraints)  # pyright: ignore[reportUnknownMemberType]
    try:
        result = solver.check()  # pyright: ignore[reportUnknownMemberType]
    except z3.z3types.Z3Exception as e:
        print(
            e.value.decode(  # pyright: ignore[reportUnknownMemberType, reportUnknownArgumentType]
                "UTF-8"
            ),
            end="",
            file=sys.stderr,
        )
        print("The above error happened with the following query:", file=sys.stderr)
        print(solver.sexpr(), file=sys.stderr)
        raise e
    if result == z3.unknown:
        print("Z3 couldn't solve the following query:", file=sys.stderr)
        print(solver.sexpr(), file=sys.stderr)
        raise SolverError(f"Z3 returned unknown: {solver.reason_unknown()}")
    return result
