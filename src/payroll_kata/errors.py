"""Exception hierarchy for the payroll engine.

PayrollError
├── ParseError            malformed script line
├── DaoError              ledger primitive failures
│   ├── AlreadyExists
│   ├── NotFound
│   └── UnexpectedError
├── TransactionError      a command failed while executing
├── VerificationError     a Verify command found a different amount
└── InvalidStateError     runner state machine misuse
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable


class PayrollError(Exception):
    """Base class for every error raised by payroll_kata."""


class ParseError(PayrollError):
    """Raised when a script line does not match any command shape."""

    def __init__(
        self,
        position: int,
        expected: Iterable[str],
        found: str,
        line: str | None = None,
        lineno: int | None = None,
    ):
        self.position = position
        self.expected = frozenset(expected)
        self.found = found
        self.line = line
        self.lineno = lineno
        where = f"line {lineno}, column {position}" if lineno else f"column {position}"
        wanted = " or ".join(sorted(self.expected)) or "nothing"
        super().__init__(f"Parse error at {where}: expected {wanted}, found {found!r}")

    def at_line(self, lineno: int) -> ParseError:
        """Return a copy of this error annotated with a script line number."""
        return ParseError(self.position, self.expected, self.found, self.line, lineno)


class DaoError(PayrollError):
    """Base class for ledger primitive failures."""


class AlreadyExists(DaoError):
    """Raised when inserting a key that is already present."""

    def __init__(self, key: Any, kind: str = "employee"):
        self.key = key
        self.kind = kind
        super().__init__(f"{kind} {key} already exists")


class NotFound(DaoError):
    """Raised when a key is absent."""

    def __init__(self, key: Any, kind: str = "employee"):
        self.key = key
        self.kind = kind
        super().__init__(f"{kind} {key} not found")


class UnexpectedError(DaoError):
    """Raised for invariant violations inside a transaction."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransactionError(PayrollError):
    """Raised by Transaction.execute() when a command cannot be applied.

    The underlying DaoError is chained as ``__cause__``.
    """

    def __init__(self, command: Any, cause: Exception):
        self.command = command
        self.cause = cause
        super().__init__(f"{type(command).__name__} failed: {cause}")


class VerificationError(PayrollError):
    """Raised when a recorded paycheck does not carry the expected amount."""

    def __init__(
        self,
        emp_id: int,
        pay_date: date,
        field: str,
        expected: Decimal,
        actual: Decimal,
    ):
        self.emp_id = emp_id
        self.pay_date = pay_date
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Paycheck {pay_date.isoformat()} for employee {emp_id}: "
            f"{field} expected {expected}, got {actual}"
        )


class InvalidStateError(PayrollError):
    """Raised when the application is run from a state that does not allow it."""

    def __init__(self, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition from '{from_state}' to '{to_state}'")
