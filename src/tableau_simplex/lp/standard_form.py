from typing import Iterable, List, Sequence, Tuple

from ..errors import UnknownVariableError
from ..schemas import StandardRow


def standardize(
    terms: Iterable[Tuple[float, int]],
    cmp: str,
    rhs: float,
    variable_count: int,
) -> List[StandardRow]:
    """
    Convert one constraint ``sum(coef * x[index]) cmp rhs`` into ``<=`` rows.

    ``>=`` is negated into a single ``<=`` row, ``=`` (or ``==``) becomes the
    ``<=`` row followed by its negation. Repeated indices are summed.
    """

    coefficients = [0.0] * variable_count
    for coef, index in terms:
        if not 0 <= index < variable_count:
            raise UnknownVariableError(
                f"Constraint references variable index {index}, model has {variable_count} variables."
            )
        coefficients[index] += float(coef)

    upper = StandardRow(coefficients=tuple(coefficients), rhs=float(rhs))
    if cmp == "<=":
        return [upper]
    if cmp == ">=":
        return [_negate(upper)]
    if cmp in ("=", "=="):
        return [upper, _negate(upper)]
    raise ValueError(f"Unsupported comparator '{cmp}'.")


def _negate(row: StandardRow) -> StandardRow:
    return StandardRow(coefficients=tuple(-value for value in row.coefficients), rhs=-row.rhs)


class StandardForm:
    """Append-only list of ``<=`` rows over a fixed set of variables."""

    def __init__(self, variable_count: int) -> None:
        self.variable_count = variable_count
        self._rows: List[StandardRow] = []

    @property
    def rows(self) -> Sequence[StandardRow]:
        return tuple(self._rows)

    def add_constraint(self, terms: Iterable[Tuple[float, int]], cmp: str, rhs: float) -> List[StandardRow]:
        new_rows = standardize(terms, cmp, rhs, self.variable_count)
        self._rows.extend(new_rows)
        return new_rows

    def __len__(self) -> int:
        return len(self._rows)
