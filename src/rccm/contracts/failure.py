"""Centralized failure types.

Contracts fail fast, loud, and once. Engine defects and malformed input
raise distinct exception types so callers can tell a bad camera stack
apart from a bug in the scanner or driver.
"""


class ContractViolation(RuntimeError):
    """Raised when an engine contract is violated.

    This indicates a bug in scanner or driver logic (for example a vote
    requested on a pixel that is not missing), not bad input data.

    Key distinction:
    - MalformedInputError: Caller handed over a bad camera stack
    - ValidationError: Config error (handled by Pydantic)
    - ContractViolation: Engine bug (programmer error)
    """
    pass


class MalformedInputError(ValueError):
    """Raised when a camera stack has the wrong length, shape, dtype or values.

    Detected before any stage runs; no output is produced.
    """
    pass
