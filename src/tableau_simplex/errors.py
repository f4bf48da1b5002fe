class SimplexError(Exception):
    """Base class for errors raised while building or solving a model."""


class UnknownVariableError(SimplexError, LookupError):
    """A constraint or lookup referenced a variable the model does not own."""


class PhaseClosedError(SimplexError):
    """A registration phase was used after the model moved past it."""


class SolveAbortedError(SimplexError):
    """A solve stopped without a result; carries how far it got."""

    def __init__(self, message: str, iterations: int = 0, phase_one: bool = False) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.phase_one = phase_one


class InfeasibleProblemError(SolveAbortedError):
    """Phase one could not drive the artificial variables to zero."""


class DegeneratePivotError(SolveAbortedError):
    """Two rows tied in the ratio test, so the leaving row is ambiguous."""


class UnboundedProblemError(SimplexError):
    """Variable values were requested from an unbounded model."""
