import numpy as np
from typing import Dict, Optional, Sequence, Tuple

from ..schemas import StandardRow


def build_tableau(rows: Sequence[StandardRow], objective: Sequence[float]) -> np.ndarray:
    """
    Assemble the initial tableau for ``max objective @ x`` s.t. ``rows``.

    Row 0 is the objective followed by one zero per slack and the RHS zero.
    Row i holds constraint i, the unit vector of slack i and the RHS. A
    negative RHS is left as is; the engine handles it in phase one.
    """

    n = len(objective)
    m = len(rows)
    tableau = np.zeros((m + 1, n + m + 1), dtype=float)
    tableau[0, :n] = np.asarray(objective, dtype=float)

    for i, row in enumerate(rows, start=1):
        if len(row.coefficients) != n:
            raise ValueError(
                f"Row {i} has {len(row.coefficients)} coefficients, expected {n}."
            )
        tableau[i, :n] = row.coefficients
        tableau[i, n + i - 1] = 1.0
        tableau[i, -1] = row.rhs

    return tableau


def basic_row(tableau: np.ndarray, column: int, tol: float = 1e-9) -> Optional[int]:
    """Row index holding ``column`` as a unit basic column, or None."""

    entries = tableau[1:, column]
    ones = np.flatnonzero(np.abs(entries - 1.0) <= tol)
    if ones.size != 1:
        return None
    others = np.delete(entries, ones[0])
    if np.any(np.abs(others) > tol):
        return None
    return int(ones[0]) + 1


def extract_solution(
    tableau: np.ndarray,
    variable_count: int,
    tol: float = 1e-9,
) -> Tuple[Dict[int, float], float]:
    """
    Read structural values and the optimum off a terminated tableau.

    A column is basic when it is a unit column over the whole tableau, the
    objective row included, and no earlier column claimed its row. Anything
    else is non-basic and reads as 0.
    """

    x: Dict[int, float] = {}
    claimed = set()
    for column in range(variable_count):
        row = basic_row(tableau, column, tol)
        if row is None or row in claimed or abs(tableau[0, column]) > tol:
            x[column] = 0.0
            continue
        claimed.add(row)
        x[column] = float(tableau[row, -1])
    return x, float(-tableau[0, -1])
