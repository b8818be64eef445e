"""Engine contracts: fail-fast enforcement of reconstruction invariants.

Contracts fail immediately and loudly when the input stack is malformed or
when the engine breaks its own guarantees.

Key principle:
- Pydantic validates config correctness
- Contracts validate input and engine correctness
- "No decision" from a vote is a normal outcome, never a failure
"""

from rccm.contracts.failure import ContractViolation, MalformedInputError
from rccm.contracts.base import require
from rccm.contracts.grid import assert_grid, assert_camera_stack
from rccm.contracts.reconstruction import assert_votable, assert_reconstructed

__all__ = [
    "ContractViolation",
    "MalformedInputError",
    "require",
    "assert_grid",
    "assert_camera_stack",
    "assert_votable",
    "assert_reconstructed",
]
