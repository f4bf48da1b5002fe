from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, List, Dict, Optional, Tuple

Sense = Literal["min", "max"]
Cmp = Literal["<=", ">=", "=", "=="]


class Variable(BaseModel):
    name: str


class LinearTerm(BaseModel):
    var: str
    coef: float


class LinearExpr(BaseModel):
    terms: List[LinearTerm] = Field(default_factory=list)
    constant: float = 0.0


class Constraint(BaseModel):
    name: str
    lhs: LinearExpr
    cmp: Cmp
    rhs: float


class LPModel(BaseModel):
    name: str = "problem"
    sense: Sense
    objective: LinearExpr
    variables: List[Variable]
    constraints: List[Constraint]


class SolveOptions(BaseModel):
    tol: float = Field(default=1e-9, ge=0.0)


class StandardRow(BaseModel):
    """One ``<=`` row: dense coefficients over every variable, plus the RHS."""

    model_config = ConfigDict(frozen=True)

    coefficients: Tuple[float, ...]
    rhs: float


class LPSolution(BaseModel):
    status: Literal["optimal", "unbounded", "infeasible", "degenerate"]
    objective_value: Optional[float]
    x: Dict[str, float] | None
    iterations: int
    phase_one: bool = False
    message: str = ""
