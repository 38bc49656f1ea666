"""Executable transactions.

Each transaction binds one command to the shared store. ``execute()`` runs
all of its ledger primitives inside a single ``run_tx`` call, so no other
command can interleave and a failure leaves no partial writes behind.
Store failures surface as TransactionError with the DaoError chained.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Protocol

from payroll_kata.calculators import PayrollEngine
from payroll_kata.commands import (
    VOID,
    Command,
    EmployeeIdResponse,
    PaychecksResponse,
    Response,
)
from payroll_kata.errors import (
    DaoError,
    ParseError,
    TransactionError,
    UnexpectedError,
    VerificationError,
)
from payroll_kata.models import (
    Affiliation,
    CommissionedClassification,
    Employee,
    EmployeeId,
    HourlyClassification,
    MemberId,
    Paycheck,
    UnionAffiliation,
)
from payroll_kata.services.payment_service import PaymentService
from payroll_kata.store import Ledger, PayrollStore

logger = logging.getLogger(__name__)


class Transaction(Protocol):
    """Protocol for anything the runner can execute."""

    def execute(self) -> Response:
        ...


class StoreTransaction(ABC):
    """Base class: one command, one ``run_tx``."""

    def __init__(self, command: Command, store: PayrollStore):
        self.command = command
        self.store = store

    def execute(self) -> Response:
        logger.debug("executing %r", self.command)
        try:
            return self.store.run_tx(self.apply)
        except DaoError as e:
            raise TransactionError(self.command, e) from e
        except ArithmeticError as e:
            # Decimal overflow, or a pay period past the calendar's range.
            error = UnexpectedError(f"arithmetic failure: {e!r}")
            raise TransactionError(self.command, error) from e

    @abstractmethod
    def apply(self, ledger: Ledger) -> Response:
        """Run this command's primitives against the locked ledger."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.command!r})"


# =============================================================================
# Employee lifecycle
# =============================================================================


class AddEmployeeTransaction(StoreTransaction):
    """Insert a new employee whose facets were chosen by the dispatcher."""

    def __init__(self, command: Command, store: PayrollStore, employee: Employee):
        super().__init__(command, store)
        self.employee = employee

    def apply(self, ledger: Ledger) -> Response:
        return EmployeeIdResponse(ledger.insert(self.employee))


class DeleteEmployeeTransaction(StoreTransaction):
    """Remove an employee and the union index entry that points at it."""

    def __init__(self, command: Command, store: PayrollStore, emp_id: EmployeeId):
        super().__init__(command, store)
        self.emp_id = emp_id

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        member_id = employee.member_id
        if member_id is not None and ledger.union_members.get(member_id) == self.emp_id:
            ledger.remove_union_member(member_id)
        ledger.remove(self.emp_id)
        return VOID


# =============================================================================
# Activity
# =============================================================================


class AddTimeCardTransaction(StoreTransaction):
    def __init__(
        self, command: Command, store: PayrollStore, emp_id: EmployeeId, day: date, hours: Decimal
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.day = day
        self.hours = hours

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        match employee.classification:
            case HourlyClassification() as hourly:
                hourly.add_timecard(self.day, self.hours)
            case other:
                raise UnexpectedError(
                    f"employee {self.emp_id} is not hourly ({type(other).__name__})"
                )
        ledger.update(employee)
        return VOID


class AddSalesReceiptTransaction(StoreTransaction):
    def __init__(
        self, command: Command, store: PayrollStore, emp_id: EmployeeId, day: date, amount: Decimal
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.day = day
        self.amount = amount

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        match employee.classification:
            case CommissionedClassification() as commissioned:
                commissioned.add_sales_receipt(self.day, self.amount)
            case other:
                raise UnexpectedError(
                    f"employee {self.emp_id} is not commissioned ({type(other).__name__})"
                )
        ledger.update(employee)
        return VOID


class AddServiceChargeTransaction(StoreTransaction):
    """Charge a union member, addressed by member id."""

    def __init__(
        self, command: Command, store: PayrollStore, member_id: MemberId, day: date, amount: Decimal
    ):
        super().__init__(command, store)
        self.member_id = member_id
        self.day = day
        self.amount = amount

    def apply(self, ledger: Ledger) -> Response:
        emp_id = ledger.find_union_member(self.member_id)
        employee = ledger.fetch(emp_id)
        match employee.affiliation:
            case UnionAffiliation(member_id=member_id) as union if member_id == self.member_id:
                union.add_service_charge(self.day, self.amount)
            case other:
                raise UnexpectedError(
                    f"employee {emp_id} is not union member {self.member_id} ({other!r})"
                )
        ledger.update(employee)
        return VOID


# =============================================================================
# Changes
# =============================================================================


class ChangeEmployeeTransaction(StoreTransaction):
    """Fetch, apply a change to the copy, update."""

    def __init__(
        self,
        command: Command,
        store: PayrollStore,
        emp_id: EmployeeId,
        change: Callable[[Employee], None],
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.change = change

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        self.change(employee)
        ledger.update(employee)
        return VOID


class ChangeMemberTransaction(StoreTransaction):
    """Make an employee a union member and index the membership."""

    def __init__(
        self,
        command: Command,
        store: PayrollStore,
        emp_id: EmployeeId,
        affiliation: UnionAffiliation,
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.affiliation = affiliation

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        previous = employee.member_id
        if previous is not None and ledger.union_members.get(previous) == self.emp_id:
            ledger.remove_union_member(previous)
        ledger.add_union_member(self.affiliation.member_id, self.emp_id)
        employee.affiliation = self.affiliation
        ledger.update(employee)
        return VOID


class ChangeNoMemberTransaction(StoreTransaction):
    """End an employee's union membership."""

    def __init__(
        self,
        command: Command,
        store: PayrollStore,
        emp_id: EmployeeId,
        affiliation: Affiliation,
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.affiliation = affiliation

    def apply(self, ledger: Ledger) -> Response:
        employee = ledger.fetch(self.emp_id)
        member_id = employee.member_id
        if member_id is None:
            raise UnexpectedError(f"employee {self.emp_id} is not a union member")
        ledger.remove_union_member(member_id)
        employee.affiliation = self.affiliation
        ledger.update(employee)
        return VOID


# =============================================================================
# Payday and verification
# =============================================================================


class PaydayTransaction(StoreTransaction):
    """Pay everyone whose schedule pays on ``pay_date``."""

    def __init__(
        self,
        command: Command,
        store: PayrollStore,
        pay_date: date,
        engine: PayrollEngine,
        payments: PaymentService,
    ):
        super().__init__(command, store)
        self.pay_date = pay_date
        self.engine = engine
        self.payments = payments
        self._paid: dict[EmployeeId, Employee] = {}

    def apply(self, ledger: Ledger) -> Response:
        employees = ledger.fetch_all()
        result = self.engine.run_payday(employees, self.pay_date)
        for emp_id, paycheck in result.paychecks.items():
            ledger.record_paycheck(emp_id, paycheck)
        self._paid = {emp_id: employees[emp_id] for emp_id in result.paychecks}
        return PaychecksResponse(result.paychecks)

    def execute(self) -> Response:
        response = super().execute()
        # Delivery happens only after the paychecks are committed.
        for emp_id, paycheck in response.paychecks.items():
            self.payments.deliver(self._paid[emp_id], paycheck)
        return response


class VerifyPaycheckTransaction(StoreTransaction):
    """Compare one amount of a recorded paycheck with an expected value."""

    def __init__(
        self,
        command: Command,
        store: PayrollStore,
        emp_id: EmployeeId,
        pay_date: date,
        field: str,
        expected: Decimal,
    ):
        super().__init__(command, store)
        self.emp_id = emp_id
        self.pay_date = pay_date
        self.field = field
        self.expected = expected

    def apply(self, ledger: Ledger) -> Response:
        paycheck: Paycheck = ledger.find_paycheck(self.emp_id, self.pay_date)
        actual = getattr(paycheck, self.field)
        if actual != self.expected:
            raise VerificationError(self.emp_id, self.pay_date, self.field, self.expected, actual)
        return VOID


# =============================================================================
# Rejected input
# =============================================================================


class RejectedLine:
    """Stands in for a script line that failed to parse.

    Executing it raises the ParseError, so runner policies handle malformed
    lines the same way they handle failed commands.
    """

    def __init__(self, error: ParseError):
        self.error = error

    def execute(self) -> Any:
        raise self.error

    def __repr__(self) -> str:
        return f"RejectedLine(lineno={self.error.lineno}, position={self.error.position})"
