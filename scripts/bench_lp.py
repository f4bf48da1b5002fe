#!/usr/bin/env python3
import argparse
import json
import time
from pathlib import Path
from typing import List, Sequence, Tuple

from tableau_simplex.errors import InfeasibleProblemError, SolveAbortedError
from tableau_simplex.model import Model
from tableau_simplex.schemas import LPModel, SolveOptions
from tableau_simplex.solver import simplex_solve
from scripts.generate_instances import generate_random_lp

Row = Tuple[str, str, str, object, int, bool, float]


def load_example(name: str) -> LPModel:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPModel.model_validate(json.loads(path.read_text()))


def bench_schema(cases: Sequence[Tuple[str, LPModel]], opts: SolveOptions) -> List[Row]:
    """Time ``simplex_solve`` on named-variable models."""
    rows: List[Row] = []
    for name, model in cases:
        start = time.perf_counter()
        solution = simplex_solve(model, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        rows.append(
            ("schema", name, solution.status, solution.objective_value,
             solution.iterations, solution.phase_one, elapsed_ms)
        )
    return rows


def bench_builder(cases: Sequence[Tuple[str, LPModel]], opts: SolveOptions) -> List[Row]:
    """Time the same models registered directly on the typed builder."""
    rows: List[Row] = []
    for name, model in cases:
        start = time.perf_counter()
        builder = Model(model.name, model.sense)
        coef = {term.var: term.coef for term in model.objective.terms}
        handles = {var.name: builder.add_variable(coef.get(var.name, 0.0), name=var.name)
                   for var in model.variables}
        registration = builder.constraints()
        for cons in model.constraints:
            registration.add(
                [(term.coef, handles[term.var]) for term in cons.lhs.terms],
                cons.cmp,
                cons.rhs - cons.lhs.constant,
            )
        try:
            solved = registration.solve(opts)
        except SolveAbortedError as exc:
            status = "infeasible" if isinstance(exc, InfeasibleProblemError) else "degenerate"
            rows.append(("builder", name, status, None, exc.iterations, exc.phase_one,
                         (time.perf_counter() - start) * 1000))
            continue
        elapsed_ms = (time.perf_counter() - start) * 1000
        rows.append(
            ("builder", name, solved.status, solved.optimum + model.objective.constant,
             solved.iterations, solved.phase_one, elapsed_ms)
        )
    return rows


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark the tableau simplex.")
    parser.add_argument("--sizes", type=int, nargs="*", default=[3, 10, 25], help="Random instance sizes")
    parser.add_argument("--seeds", type=int, default=3, help="Random instances per size")
    args = parser.parse_args()

    opts = SolveOptions()
    cases = [
        ("examples/small_lp.json", load_example("small_lp.json")),
        ("examples/product_mix.json", load_example("product_mix.json")),
    ]
    for size in args.sizes:
        for seed in range(args.seeds):
            cases.append((f"random-{size}x{size}-{seed}", generate_random_lp(size, size, seed)))

    print("path,name,status,objective,iterations,phase_one,time_ms")
    for row in bench_schema(cases, opts) + bench_builder(cases, opts):
        path, name, status, objective, iterations, phase_one, elapsed_ms = row
        print(f"{path},{name},{status},{objective},{iterations},{phase_one},{elapsed_ms:.2f}")


if __name__ == "__main__":
    main()
