import logging

from mcp.server.fastmcp import FastMCP

from .schemas import LPModel, SolveOptions
from .solver import build_registration, simplex_solve

mcp = FastMCP("Tableau Simplex")


@mcp.tool()
def solve_lp(model: LPModel, options: SolveOptions | None = None) -> dict:
    "Solve a linear program via the two-phase tableau simplex and return solution dict."
    opts = options or SolveOptions()
    return simplex_solve(model, opts).model_dump()


@mcp.tool()
def standard_form(model: LPModel) -> dict:
    "Return the <= rows the model is translated into before the tableau is built."
    registration = build_registration(model)
    return {
        "variables": list(registration.names),
        "objective": list(registration.objective),
        "rows": [row.model_dump() for row in registration.standard_rows],
    }


if __name__ == "__main__":
    # Allow: `uv run mcp dev src/tableau_simplex/server.py` or pack as stdio/http via CLI
    logging.basicConfig(level=logging.INFO)
    mcp.run()
