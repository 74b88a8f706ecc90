"""Exception types raised at the solve boundary."""


class InvalidSolveInput(ValueError):
    """Raised when grid, time-step or fluid parameters make the discretisation degenerate."""
