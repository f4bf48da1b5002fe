"""Standard form, tableau assembly and the two-phase simplex engine."""

from .standard_form import StandardForm, standardize
from .tableau import build_tableau, extract_solution
from .simplex import solve_tableau

__all__ = ["StandardForm", "standardize", "build_tableau", "extract_solution", "solve_tableau"]
