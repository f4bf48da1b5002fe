from typing import Dict, Optional

from .errors import DegeneratePivotError, InfeasibleProblemError, UnknownVariableError
from .model import ConstraintRegistration, Model, Var
from .schemas import LPModel, LPSolution, SolveOptions


def simplex_solve(model: LPModel, opts: Optional[SolveOptions] = None) -> LPSolution:
    """
    Solve a named-variable LP with the two-phase tableau simplex.

    Infeasible and degenerate models come back as a status with a message;
    references to undeclared variables raise UnknownVariableError.
    """

    opts = opts or SolveOptions()
    registration = build_registration(model)

    try:
        solved = registration.solve(opts)
    except InfeasibleProblemError as exc:
        return LPSolution(
            status="infeasible",
            objective_value=None,
            x=None,
            iterations=exc.iterations,
            phase_one=exc.phase_one,
            message=str(exc),
        )
    except DegeneratePivotError as exc:
        return LPSolution(
            status="degenerate",
            objective_value=None,
            x=None,
            iterations=exc.iterations,
            phase_one=exc.phase_one,
            message=str(exc),
        )

    objective_value = solved.optimum + model.objective.constant
    if solved.is_unbounded:
        return LPSolution(
            status="unbounded",
            objective_value=objective_value,
            x=None,
            iterations=solved.iterations,
            phase_one=solved.phase_one,
            message="Unbounded.",
        )

    return LPSolution(
        status="optimal",
        objective_value=float(objective_value),
        x=solved.values(),
        iterations=solved.iterations,
        phase_one=solved.phase_one,
        message="",
    )


def build_registration(model: LPModel) -> ConstraintRegistration:
    """Register the variables and constraints of ``model`` on a fresh builder."""

    objective: Dict[str, float] = {var.name: 0.0 for var in model.variables}
    if len(objective) != len(model.variables):
        raise ValueError(f"Model '{model.name}' declares a variable name twice.")
    for term in model.objective.terms:
        if term.var not in objective:
            raise UnknownVariableError(f"Objective references unknown variable '{term.var}'.")
        objective[term.var] += term.coef

    builder = Model(model.name, model.sense)
    handles: Dict[str, Var] = {
        name: builder.add_variable(coef, name=name) for name, coef in objective.items()
    }

    registration = builder.constraints()
    for cons in model.constraints:
        terms = []
        for term in cons.lhs.terms:
            if term.var not in handles:
                raise UnknownVariableError(
                    f"Constraint '{cons.name}' references unknown variable '{term.var}'."
                )
            terms.append((term.coef, handles[term.var]))
        registration.add(terms, cons.cmp, cons.rhs - cons.lhs.constant)
    return registration
