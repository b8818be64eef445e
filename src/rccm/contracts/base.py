"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
It enforces semantic invariants of the engine.
"""

from rccm.contracts.failure import ContractViolation


def require(condition: bool, message: str, error: type = ContractViolation) -> None:
    """Enforce a contract.

    Fail-fast: no recovery, no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ``error`` is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    error : type, optional
        Exception class to raise. Defaults to ContractViolation; input
        validation passes MalformedInputError.

    Raises
    ------
    ContractViolation
        If condition is False. This indicates a bug in engine logic.

    Examples
    --------
    >>> require(grid[col, row] == MISSING, "Vote contract: center is not missing")
    >>> require(len(stack) == 9, "bad stack", error=MalformedInputError)
    """
    if not condition:
        raise error(message)
