"""
Builder facade: register variables, then constraints, then read the solution.

Each phase is its own type and closing a phase hands back the next one::

    model = Model("toy", "max")
    x = model.add_variable(2.0, name="x")
    y = model.add_variable(1.0, name="y")
    solved = (
        model.constraints()
        .add([(2.0, x), (-3.0, y)], "<=", 6.0)
        .add([(1.0, x), (1.0, y)], "<=", 4.0)
        .solve()
    )
    solved.value(x), solved.optimum
"""

import logging
import uuid

from pydantic import BaseModel, ConfigDict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import PhaseClosedError, UnboundedProblemError, UnknownVariableError
from .lp import StandardForm, build_tableau, solve_tableau
from .schemas import Cmp, Sense, SolveOptions, StandardRow

logger = logging.getLogger(__name__)


class Var(BaseModel):
    """Handle to one variable: the owning model's id and its column index."""

    model_config = ConfigDict(frozen=True)

    model_id: str
    index: int


def _resolve(model_id: str, count: int, var: Var) -> int:
    if var.model_id != model_id or not 0 <= var.index < count:
        raise UnknownVariableError(f"Variable {var.index} is not registered for this model.")
    return var.index


class Model:
    """Variable registration phase."""

    def __init__(self, name: str = "problem", sense: Sense = "max") -> None:
        if sense not in ("min", "max"):
            raise ValueError(f"Unknown objective sense '{sense}'.")
        self.name = name
        self.sense = sense
        self.model_id = uuid.uuid4().hex
        self._objective: List[float] = []
        self._names: List[str] = []
        self._closed = False

    def add_variable(self, objective: float, name: Optional[str] = None) -> Var:
        if self._closed:
            raise PhaseClosedError("Variables are already set.")
        index = len(self._objective)
        name = name if name is not None else f"x{index}"
        if name in self._names:
            raise ValueError(f"Variable name '{name}' is already registered.")
        self._objective.append(float(objective))
        self._names.append(name)
        return Var(model_id=self.model_id, index=index)

    def constraints(self) -> "ConstraintRegistration":
        if self._closed:
            raise PhaseClosedError("Variables are already set.")
        self._closed = True
        return ConstraintRegistration(
            self.name, self.sense, self.model_id, tuple(self._objective), tuple(self._names)
        )

    def solve(self, options: Optional[SolveOptions] = None) -> "SolvedModel":
        return self.constraints().solve(options)


class ConstraintRegistration:
    """Constraint registration phase; variables are fixed."""

    def __init__(
        self,
        name: str,
        sense: Sense,
        model_id: str,
        objective: Tuple[float, ...],
        names: Tuple[str, ...],
    ) -> None:
        self.name = name
        self.sense = sense
        self.model_id = model_id
        self.objective = objective
        self.names = names
        self._form = StandardForm(len(objective))
        self._closed = False

    @property
    def standard_rows(self) -> Sequence[StandardRow]:
        return self._form.rows

    def add(self, terms: Iterable[Tuple[float, Var]], cmp: Cmp, rhs: float) -> "ConstraintRegistration":
        if self._closed:
            raise PhaseClosedError("Constraints are already set.")
        count = len(self.objective)
        indexed = [(coef, _resolve(self.model_id, count, var)) for coef, var in terms]
        self._form.add_constraint(indexed, cmp, rhs)
        return self

    def solve(self, options: Optional[SolveOptions] = None) -> "SolvedModel":
        if self._closed:
            raise PhaseClosedError("Model is already solved.")
        self._closed = True

        sign = 1.0 if self.sense == "max" else -1.0
        tableau = build_tableau(self._form.rows, [sign * coef for coef in self.objective])
        logger.info(
            "Solving '%s' (%s): %d variables, %d standard rows.",
            self.name,
            self.sense,
            len(self.objective),
            len(self._form),
        )
        result = solve_tableau(tableau, options, variable_count=len(self.objective))

        return SolvedModel(
            name=self.name,
            sense=self.sense,
            model_id=self.model_id,
            names=self.names,
            values=result["x"],
            optimum=sign * result["objective"],
            iterations=result["iterations"],
            phase_one=result["phase_one"],
        )


class SolvedModel:
    """Read-only result of a solve, addressed by the handles of its model."""

    def __init__(
        self,
        name: str,
        sense: Sense,
        model_id: str,
        names: Tuple[str, ...],
        values: Optional[Dict[int, float]],
        optimum: float,
        iterations: int,
        phase_one: bool,
    ) -> None:
        self.name = name
        self.sense = sense
        self.model_id = model_id
        self.names = names
        self.optimum = optimum
        self.iterations = iterations
        self.phase_one = phase_one
        self._values = values

    @property
    def is_unbounded(self) -> bool:
        return self._values is None

    @property
    def status(self) -> str:
        return "unbounded" if self.is_unbounded else "optimal"

    def value(self, var: Var) -> float:
        index = _resolve(self.model_id, len(self.names), var)
        if self._values is None:
            raise UnboundedProblemError(f"Model '{self.name}' is unbounded; no variable values.")
        return self._values[index]

    def values(self) -> Optional[Dict[str, float]]:
        if self._values is None:
            return None
        return {self.names[index]: value for index, value in self._values.items()}

    def __str__(self) -> str:
        lines = [f"Model '{self.name}' ({self.sense}): {self.status} after {self.iterations} pivots"]
        if self._values is not None:
            width = max((len(name) for name in self.names), default=0)
            for index, name in enumerate(self.names):
                lines.append(f"  {name:<{width}} = {self._values[index]:g}")
        lines.append(f"Optimum: {self.optimum:g}")
        return "\n".join(lines)
