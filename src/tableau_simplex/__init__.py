"""Tableau Simplex: two-phase tabular simplex for small linear programs."""

from .errors import (
    DegeneratePivotError,
    InfeasibleProblemError,
    PhaseClosedError,
    SimplexError,
    SolveAbortedError,
    UnboundedProblemError,
    UnknownVariableError,
)
from .model import ConstraintRegistration, Model, SolvedModel, Var
from .schemas import LPModel, LPSolution, SolveOptions
from .solver import simplex_solve

__all__ = [
    "ConstraintRegistration",
    "DegeneratePivotError",
    "InfeasibleProblemError",
    "LPModel",
    "LPSolution",
    "Model",
    "PhaseClosedError",
    "SimplexError",
    "SolveAbortedError",
    "SolveOptions",
    "SolvedModel",
    "UnboundedProblemError",
    "UnknownVariableError",
    "Var",
    "simplex_solve",
]
