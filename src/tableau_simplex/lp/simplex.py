import logging
import math

import numpy as np
from typing import Any, Dict, List, Optional

from .tableau import basic_row, extract_solution
from ..errors import DegeneratePivotError, InfeasibleProblemError
from ..schemas import SolveOptions

logger = logging.getLogger(__name__)


def solve_tableau(
    tableau: np.ndarray,
    opts: Optional[SolveOptions] = None,
    variable_count: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Two-phase tableau simplex, maximising the objective held in row 0.

    The tableau is modified in place. Rows with a negative RHS trigger phase
    one; artificial columns exist only inside phase one, so the final tableau
    has the same shape as the input. Raises InfeasibleProblemError or
    DegeneratePivotError; an unbounded objective is a normal result.
    """

    opts = opts or SolveOptions()
    tol = opts.tol
    if variable_count is None:
        variable_count = tableau.shape[1] - tableau.shape[0]

    iterations = 0
    phase_one = bool(np.any(tableau[1:, -1] < 0.0))
    if phase_one:
        iterations += _phase_I(tableau, tol)

    logger.info("Phase II on %d x %d tableau.", *tableau.shape)
    try:
        result = _run_simplex(tableau, tol)
    except DegeneratePivotError as exc:
        exc.iterations += iterations
        exc.phase_one = phase_one
        raise
    iterations += result["iterations"]

    if result["status"] == "unbounded":
        logger.info("Unbounded in column %d after %d pivots.", result["column"], iterations)
        return {
            "status": "unbounded",
            "x": None,
            "objective": math.inf,
            "iterations": iterations,
            "phase_one": phase_one,
        }

    x, objective = extract_solution(tableau, variable_count, tol)
    logger.info("Optimal value %g after %d pivots.", objective, iterations)
    return {
        "status": "optimal",
        "x": x,
        "objective": objective,
        "iterations": iterations,
        "phase_one": phase_one,
    }


def _phase_I(tableau: np.ndarray, tol: float) -> int:
    rhs_col = tableau.shape[1] - 1
    negative = [i for i in range(1, tableau.shape[0]) if tableau[i, -1] < 0.0]
    artificial = list(range(rhs_col, rhs_col + len(negative)))
    logger.info("Phase I with %d artificial columns.", len(artificial))

    work = np.zeros((tableau.shape[0], rhs_col + len(artificial) + 1), dtype=float)
    work[:, :rhs_col] = tableau[:, :rhs_col]
    work[:, -1] = tableau[:, -1]
    work[negative] *= -1.0

    objective = work[0].copy()
    work[0] = work[negative].sum(axis=0)
    for row, column in zip(negative, artificial):
        work[row, column] = 1.0

    # rounding left in the artificial sum grows with the RHS being driven out
    threshold = tol * max(1.0, float(work[0, -1]))

    try:
        result = _run_simplex(work, tol)
    except DegeneratePivotError as exc:
        exc.phase_one = True
        raise
    if result["status"] == "unbounded":
        # the auxiliary objective is bounded above by zero
        raise InfeasibleProblemError(
            "Phase I auxiliary problem reported unbounded.",
            iterations=result["iterations"],
            phase_one=True,
        )

    auxiliary_value = -work[0, -1]
    if abs(auxiliary_value) > threshold:
        raise InfeasibleProblemError(
            f"Infeasible: phase I ended with artificial sum {-auxiliary_value:g}.",
            iterations=result["iterations"],
            phase_one=True,
        )

    work[0] = objective
    iterations = result["iterations"] + _drive_out_artificials(work, artificial, tol)
    _price_out_basics(work, rhs_col, tol)

    keep = list(range(rhs_col)) + [work.shape[1] - 1]
    tableau[:, :] = work[:, keep]
    logger.info("Phase I feasible after %d pivots.", iterations)
    return iterations


def _drive_out_artificials(tableau: np.ndarray, artificial: List[int], tol: float) -> int:
    pivots = 0
    first_artificial = artificial[0] if artificial else tableau.shape[1] - 1
    for column in artificial:
        row = basic_row(tableau, column, tol)
        if row is None:
            continue
        candidates = np.flatnonzero(np.abs(tableau[row, :first_artificial]) > tol)
        if candidates.size == 0:
            # redundant row, nothing left to pivot on
            continue
        _pivot(tableau, row, int(candidates[0]))
        pivots += 1
    return pivots


def _price_out_basics(tableau: np.ndarray, columns: int, tol: float) -> None:
    claimed = set()
    for column in range(columns):
        coef = tableau[0, column]
        if abs(coef) <= tol:
            continue
        row = basic_row(tableau, column, tol)
        if row is None or row in claimed:
            continue
        claimed.add(row)
        tableau[0] -= coef * tableau[row]


def _run_simplex(tableau: np.ndarray, tol: float) -> Dict[str, Any]:
    iterations = 0
    while True:
        reduced = tableau[0, :-1]
        if reduced.size == 0 or reduced.max() <= tol:
            return {"status": "optimal", "iterations": iterations}

        entering = int(np.argmax(reduced))
        column = tableau[1:, entering]
        candidates = np.flatnonzero(column > tol)
        if candidates.size == 0:
            return {"status": "unbounded", "iterations": iterations, "column": entering}

        ratios = tableau[1:, -1][candidates] / column[candidates]
        theta = ratios.min()
        tied = candidates[np.abs(ratios - theta) <= tol * max(1.0, abs(theta))]
        if tied.size > 1:
            raise DegeneratePivotError(
                f"Possible degeneracy: rows {[int(r) + 1 for r in tied]} tie at ratio {theta:g} "
                f"for column {entering}.",
                iterations=iterations,
            )

        leaving = int(tied[0]) + 1
        logger.debug("Pivot row %d column %d ratio %g.", leaving, entering, theta)
        _pivot(tableau, leaving, entering)
        iterations += 1


def _pivot(tableau: np.ndarray, row: int, column: int) -> None:
    tableau[row] /= tableau[row, column]
    for other in range(tableau.shape[0]):
        if other != row:
            tableau[other] -= tableau[other, column] * tableau[row]
