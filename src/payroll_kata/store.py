"""Transactional employee store.

The ledger (employees, union-membership index, paycheck history) is only
reachable through ``run_tx``, which holds an exclusive lock for the whole
callback. Primitives journal an undo step for every write, so a callback
that raises leaves the ledger exactly as it found it.

Usage:
    store = MemoryStore()
    emp_id = store.run_tx(lambda ledger: ledger.insert(employee))

    def rename(ledger: Ledger) -> None:
        emp = ledger.fetch(emp_id)
        emp.name = "Robert"
        ledger.update(emp)

    store.run_tx(rename)
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Protocol, TypeVar

from payroll_kata.errors import AlreadyExists, NotFound, UnexpectedError
from payroll_kata.models import Employee, EmployeeId, MemberId, Paycheck

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Ledger:
    """In-memory tables plus the primitive operations over them."""

    employees: dict[EmployeeId, Employee] = field(default_factory=dict)
    union_members: dict[MemberId, EmployeeId] = field(default_factory=dict)
    paychecks: dict[EmployeeId, list[Paycheck]] = field(default_factory=dict)
    _journal: list[Callable[[], None]] | None = field(default=None, repr=False)

    def _on_rollback(self, undo: Callable[[], None]) -> None:
        if self._journal is not None:
            self._journal.append(undo)

    # -------------------------------------------------------------------------
    # Employees
    # -------------------------------------------------------------------------

    def insert(self, employee: Employee) -> EmployeeId:
        emp_id = employee.id
        if emp_id in self.employees:
            raise AlreadyExists(emp_id)
        self.employees[emp_id] = copy.deepcopy(employee)
        self._on_rollback(lambda: self.employees.pop(emp_id, None))
        logger.debug("inserted employee %s", emp_id)
        return emp_id

    def remove(self, emp_id: EmployeeId) -> None:
        if emp_id not in self.employees:
            raise NotFound(emp_id)
        removed = self.employees.pop(emp_id)
        self._on_rollback(lambda: self.employees.__setitem__(emp_id, removed))
        logger.debug("removed employee %s", emp_id)

    def fetch(self, emp_id: EmployeeId) -> Employee:
        """Return a copy; changes take effect only through ``update``."""
        try:
            return copy.deepcopy(self.employees[emp_id])
        except KeyError:
            raise NotFound(emp_id) from None

    def fetch_all(self) -> dict[EmployeeId, Employee]:
        """Return a snapshot copy of every employee keyed by id."""
        return copy.deepcopy(self.employees)

    def update(self, employee: Employee) -> None:
        emp_id = employee.id
        if emp_id not in self.employees:
            raise NotFound(emp_id)
        previous = self.employees[emp_id]
        self.employees[emp_id] = copy.deepcopy(employee)
        self._on_rollback(lambda: self.employees.__setitem__(emp_id, previous))
        logger.debug("updated employee %s", emp_id)

    # -------------------------------------------------------------------------
    # Union membership index
    # -------------------------------------------------------------------------

    def add_union_member(self, member_id: MemberId, emp_id: EmployeeId) -> None:
        if member_id in self.union_members:
            raise AlreadyExists(member_id, kind="union member")
        self.union_members[member_id] = emp_id
        self._on_rollback(lambda: self.union_members.pop(member_id, None))

    def remove_union_member(self, member_id: MemberId) -> None:
        if member_id not in self.union_members:
            raise NotFound(member_id, kind="union member")
        emp_id = self.union_members.pop(member_id)
        self._on_rollback(lambda: self.union_members.__setitem__(member_id, emp_id))

    def find_union_member(self, member_id: MemberId) -> EmployeeId:
        try:
            return self.union_members[member_id]
        except KeyError:
            raise NotFound(member_id, kind="union member") from None

    # -------------------------------------------------------------------------
    # Paycheck history
    # -------------------------------------------------------------------------

    def record_paycheck(self, emp_id: EmployeeId, paycheck: Paycheck) -> None:
        if emp_id not in self.employees:
            raise NotFound(emp_id)
        history = self.paychecks.setdefault(emp_id, [])
        history.append(paycheck)

        def undo() -> None:
            history.pop()
            if not history:
                del self.paychecks[emp_id]

        self._on_rollback(undo)

    def paychecks_of(self, emp_id: EmployeeId) -> list[Paycheck]:
        return list(self.paychecks.get(emp_id, []))

    def find_paycheck(self, emp_id: EmployeeId, pay_date: date) -> Paycheck:
        """Most recent paycheck whose pay period ends on ``pay_date``."""
        for paycheck in reversed(self.paychecks.get(emp_id, [])):
            if paycheck.pay_date == pay_date:
                return paycheck
        raise NotFound(f"{emp_id}@{pay_date.isoformat()}", kind="paycheck")


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only copy of the whole ledger."""

    employees: dict[EmployeeId, Employee]
    union_members: dict[MemberId, EmployeeId]
    paychecks: dict[EmployeeId, list[Paycheck]]


class PayrollStore(Protocol):
    """Protocol for stores that expose the ledger through ``run_tx``."""

    def run_tx(self, fn: Callable[[Ledger], T]) -> T:
        """Run ``fn`` with exclusive access to the ledger and return its result."""
        ...


class MemoryStore:
    """Process-local store guarded by a non-reentrant lock.

    Safe to share between threads; commands from different threads are
    mutually excluded but not otherwise ordered.
    """

    def __init__(self) -> None:
        self._ledger = Ledger()
        self._lock = threading.Lock()
        self._owner: int | None = None

    def run_tx(self, fn: Callable[[Ledger], T]) -> T:
        if self._owner == threading.get_ident():
            raise UnexpectedError("nested run_tx is not permitted")

        with self._lock:
            self._owner = threading.get_ident()
            journal: list[Callable[[], None]] = []
            self._ledger._journal = journal
            try:
                return fn(self._ledger)
            except BaseException:
                logger.debug("rolling back %d write(s)", len(journal))
                for undo in reversed(journal):
                    undo()
                raise
            finally:
                self._ledger._journal = None
                self._owner = None

    def snapshot(self) -> StoreSnapshot:
        return self.run_tx(
            lambda ledger: StoreSnapshot(
                employees=ledger.fetch_all(),
                union_members=dict(ledger.union_members),
                paychecks={k: list(v) for k, v in ledger.paychecks.items()},
            )
        )
