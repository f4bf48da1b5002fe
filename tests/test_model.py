import math

import pytest

from tableau_simplex.errors import (
    DegeneratePivotError,
    InfeasibleProblemError,
    PhaseClosedError,
    UnboundedProblemError,
    UnknownVariableError,
)
from tableau_simplex.model import Model, Var


def test_simple_bounded_case():
    model = Model("Test-model", "max")
    x1 = model.add_variable(2.0)
    x2 = model.add_variable(1.0)
    solved = (
        model.constraints()
        .add([(2.0, x1), (-3.0, x2)], "<=", 6.0)
        .add([(1.0, x1), (1.0, x2)], "<=", 4.0)
        .solve()
    )

    assert solved.status == "optimal"
    assert solved.value(x1) == pytest.approx(3.6)
    assert solved.value(x2) == pytest.approx(0.4)
    assert solved.optimum == pytest.approx(7.6)


def test_unbounded_case():
    model = Model("Test-model", "max")
    x1 = model.add_variable(1.0)
    x2 = model.add_variable(2.0)
    solved = (
        model.constraints()
        .add([(-2.0, x1), (-1.0, x2)], "<=", 2.0)
        .add([(3.0, x1), (-4.0, x2)], "<=", 12.0)
        .add([(1.0, x1), (0.0, x2)], "<=", 2.0)
        .solve()
    )

    assert solved.is_unbounded
    assert solved.optimum == math.inf
    assert solved.values() is None
    with pytest.raises(UnboundedProblemError):
        solved.value(x1)


def test_unbounded_minimisation_reports_negative_infinity():
    model = Model("Test-model", "min")
    x1 = model.add_variable(-1.0)
    solved = model.constraints().add([(-1.0, x1)], "<=", 1.0).solve()

    assert solved.is_unbounded
    assert solved.optimum == -math.inf


def test_phase_one_required():
    model = Model("Test-model (two phase method)", "min")
    x1 = model.add_variable(6.0, name="testvar")
    x2 = model.add_variable(3.0, name="another testvar")
    solved = (
        model.constraints()
        .add([(1.0, x1), (1.0, x2)], ">=", 1.0)
        .add([(2.0, x1), (-1.0, x2)], ">=", 1.0)
        .add([(0.0, x1), (3.0, x2)], "<=", 2.0)
        .solve()
    )

    assert solved.phase_one is True
    assert solved.value(x1) == pytest.approx(0.6666666666666666)
    assert solved.value(x2) == pytest.approx(0.3333333333333333)
    assert solved.optimum == pytest.approx(5.0)
    assert solved.values() == {
        "testvar": pytest.approx(2 / 3),
        "another testvar": pytest.approx(1 / 3),
    }


def test_negative_rhs_less_equal():
    model = Model("Test-model (two phase method)", "max")
    x1 = model.add_variable(0.0)
    x2 = model.add_variable(1.0)
    solved = (
        model.constraints()
        .add([(-1.0, x1), (-1.0, x2)], "<=", -1.0)
        .add([(2.0, x1), (3.0, x2)], "<=", 6.0)
        .solve()
    )

    assert solved.value(x1) == pytest.approx(0.0)
    assert solved.value(x2) == pytest.approx(2.0)
    assert solved.optimum == pytest.approx(2.0)


def test_readme_example():
    model = Model("Readme example", "max")
    x1 = model.add_variable(3.0)
    x2 = model.add_variable(5.0)
    solved = (
        model.constraints()
        .add([(1.0, x1), (2.0, x2)], "<=", 170.0)
        .add([(1.0, x1), (1.0, x2)], "<=", 150.0)
        .add([(0.0, x1), (3.0, x2)], "<=", 180.0)
        .solve()
    )

    assert solved.value(x1) == pytest.approx(130.0)
    assert solved.value(x2) == pytest.approx(20.0)
    assert solved.optimum == pytest.approx(490.0)


def test_equality_with_zero_rhs():
    model = Model("balance", "max")
    x = model.add_variable(1.0, name="x")
    y = model.add_variable(1.0, name="y")
    solved = (
        model.constraints()
        .add([(1.0, x), (-1.0, y)], "=", 0.0)
        .add([(1.0, x)], "<=", 3.0)
        .solve()
    )

    assert solved.values() == {"x": pytest.approx(3.0), "y": pytest.approx(3.0)}
    assert solved.optimum == pytest.approx(6.0)


def test_equality_with_positive_rhs_is_degenerate():
    # the two opposing rows always tie in the first phase I ratio test
    model = Model("balance", "min")
    x = model.add_variable(1.0)
    y = model.add_variable(1.0)
    registration = model.constraints().add([(1.0, x), (1.0, y)], "=", 4.0)

    with pytest.raises(DegeneratePivotError):
        registration.solve()


def test_infeasible_model():
    model = Model("Infeasible", "max")
    x = model.add_variable(1.0)
    registration = model.constraints().add([(1.0, x)], "<=", 1.0).add([(1.0, x)], ">=", 2.0)

    with pytest.raises(InfeasibleProblemError):
        registration.solve()


def test_unknown_variable_from_other_model():
    model_0 = Model("Test-model 0", "max")
    model_1 = Model("Test-model 1", "max")
    model_0.add_variable(4.0)
    foreign = model_1.add_variable(3.0)

    registration = model_0.constraints()
    with pytest.raises(UnknownVariableError):
        registration.add([(1.0, foreign)], "<=", 1.0)


def test_unknown_variable_on_lookup():
    model_0 = Model("Test-model 0", "max")
    model_1 = Model("Test-model 1", "max")
    model_0.add_variable(1.0)
    foreign = model_1.add_variable(1.0)
    solved = model_0.solve()

    with pytest.raises(UnknownVariableError):
        solved.value(foreign)
    with pytest.raises(UnknownVariableError):
        solved.value(Var(model_id=solved.model_id, index=7))


def test_handles_are_unique_per_model():
    model_0 = Model("a", "max")
    model_1 = Model("b", "max")
    a = model_0.add_variable(1.0)
    b = model_1.add_variable(1.0)

    assert a.index == b.index == 0
    assert a != b


def test_variable_phase_closes():
    model = Model("Test-model", "max")
    model.add_variable(3.999)
    model.constraints()

    with pytest.raises(PhaseClosedError):
        model.add_variable(4.989)
    with pytest.raises(PhaseClosedError):
        model.constraints()


def test_constraint_phase_closes():
    model = Model("Test-model", "max")
    x = model.add_variable(1.0)
    registration = model.constraints().add([(1.0, x)], "<=", 5.0)
    solved = registration.solve()

    assert solved.optimum == pytest.approx(5.0)
    with pytest.raises(PhaseClosedError):
        registration.add([(1.0, x)], "<=", 1.0)
    with pytest.raises(PhaseClosedError):
        registration.solve()


def test_standard_rows_exposed():
    model = Model("Test-model", "max")
    x = model.add_variable(3.0)
    y = model.add_variable(4.0)
    registration = model.constraints().add([(3.9, y), (8.4, x)], "=", 6.0)

    upper, lower = registration.standard_rows
    assert upper.coefficients == (8.4, 3.9)
    assert lower.coefficients == (-8.4, -3.9)
    assert lower.rhs == -6.0


def test_invalid_sense():
    with pytest.raises(ValueError):
        Model("Test-model", "maximize")


def test_display():
    model = Model("Readme example", "max")
    x1 = model.add_variable(3.0, name="chairs")
    x2 = model.add_variable(5.0, name="tables")
    solved = (
        model.constraints()
        .add([(1.0, x1), (2.0, x2)], "<=", 170.0)
        .add([(1.0, x1), (1.0, x2)], "<=", 150.0)
        .add([(3.0, x2)], "<=", 180.0)
        .solve()
    )
    text = str(solved)

    assert text.startswith("Model 'Readme example' (max): optimal")
    assert "chairs = 130" in text
    assert "tables = 20" in text
    assert text.endswith("Optimum: 490")


def test_duplicate_variable_names_rejected():
    model = Model("Test-model", "max")
    model.add_variable(1.0, name="x1")

    with pytest.raises(ValueError):
        model.add_variable(2.0, name="x1")
    # the default name of the second variable is x1 as well
    with pytest.raises(ValueError):
        model.add_variable(2.0)

    y = model.add_variable(2.0, name="y")
    assert y.index == 1
