"""Command dispatcher.

Maps each parsed Command to an executable transaction bound to the shared
store. The dispatcher owns the construction-time choices the parser cannot
make:

- Default schedule per employee type: Salaried -> Monthly,
  Hourly -> Weekly, Commissioned -> Biweekly
- New employees are paid by Hold and have no affiliation
- Changing classification also resets the schedule to that type's default

All facet instances come from the rule factory.
"""

from __future__ import annotations

import logging
from typing import Callable

from payroll_kata.calculators import DefaultPayrollFactory, PayrollEngine, PayrollFactory
from payroll_kata.commands import (
    AddCommissionedEmployee,
    AddHourlyEmployee,
    AddSalariedEmployee,
    AddSalesReceipt,
    AddServiceCharge,
    AddTimeCard,
    ChangeEmployeeAddress,
    ChangeEmployeeCommissioned,
    ChangeEmployeeDirect,
    ChangeEmployeeHold,
    ChangeEmployeeHourly,
    ChangeEmployeeMail,
    ChangeEmployeeMember,
    ChangeEmployeeName,
    ChangeEmployeeNoMember,
    ChangeEmployeeSalaried,
    Command,
    DeleteEmployee,
    Payday,
    VerifyDeductions,
    VerifyGrossPay,
    VerifyNetPay,
)
from payroll_kata.models import (
    Employee,
    EmployeeId,
    PaymentClassification,
    PaymentMethod,
    PaymentSchedule,
)
from payroll_kata.services.payment_service import PaymentService
from payroll_kata.services.transactions import (
    AddEmployeeTransaction,
    AddSalesReceiptTransaction,
    AddServiceChargeTransaction,
    AddTimeCardTransaction,
    ChangeEmployeeTransaction,
    ChangeMemberTransaction,
    ChangeNoMemberTransaction,
    DeleteEmployeeTransaction,
    PaydayTransaction,
    Transaction,
    VerifyPaycheckTransaction,
)
from payroll_kata.store import PayrollStore

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """Builds transactions for commands against one store."""

    def __init__(
        self,
        store: PayrollStore,
        factory: PayrollFactory | None = None,
        engine: PayrollEngine | None = None,
        payments: PaymentService | None = None,
    ):
        self.store = store
        self.factory = factory or DefaultPayrollFactory()
        self.engine = engine or PayrollEngine()
        self.payments = payments or PaymentService()

    def dispatch(self, command: Command) -> Transaction:
        """Return the transaction that applies ``command``.

        Raises:
            TypeError: ``command`` is not a known Command
        """
        logger.debug("dispatching %r", command)
        f = self.factory
        match command:
            case AddSalariedEmployee(id=emp_id, name=name, address=address, salary=salary):
                return self._add(
                    command, emp_id, name, address,
                    f.salaried_classification(salary), f.monthly_schedule(),
                )
            case AddHourlyEmployee(id=emp_id, name=name, address=address, hourly_rate=rate):
                return self._add(
                    command, emp_id, name, address,
                    f.hourly_classification(rate), f.weekly_schedule(),
                )
            case AddCommissionedEmployee(
                id=emp_id, name=name, address=address, salary=salary, commission_rate=rate
            ):
                return self._add(
                    command, emp_id, name, address,
                    f.commissioned_classification(salary, rate), f.biweekly_schedule(),
                )
            case DeleteEmployee(id=emp_id):
                return DeleteEmployeeTransaction(command, self.store, emp_id)

            case AddTimeCard(id=emp_id, date=day, hours=hours):
                return AddTimeCardTransaction(command, self.store, emp_id, day, hours)
            case AddSalesReceipt(id=emp_id, date=day, amount=amount):
                return AddSalesReceiptTransaction(command, self.store, emp_id, day, amount)
            case AddServiceCharge(member_id=member_id, date=day, amount=amount):
                return AddServiceChargeTransaction(command, self.store, member_id, day, amount)

            case ChangeEmployeeName(id=emp_id, name=name):
                return self._change(command, emp_id, lambda e: setattr(e, "name", name))
            case ChangeEmployeeAddress(id=emp_id, address=address):
                return self._change(command, emp_id, lambda e: setattr(e, "address", address))
            case ChangeEmployeeSalaried(id=emp_id, salary=salary):
                return self._reclassify(
                    command, emp_id, f.salaried_classification(salary), f.monthly_schedule()
                )
            case ChangeEmployeeHourly(id=emp_id, hourly_rate=rate):
                return self._reclassify(
                    command, emp_id, f.hourly_classification(rate), f.weekly_schedule()
                )
            case ChangeEmployeeCommissioned(id=emp_id, salary=salary, commission_rate=rate):
                return self._reclassify(
                    command,
                    emp_id,
                    f.commissioned_classification(salary, rate),
                    f.biweekly_schedule(),
                )
            case ChangeEmployeeHold(id=emp_id):
                return self._change_method(command, emp_id, f.hold_method())
            case ChangeEmployeeDirect(id=emp_id, bank=bank, account=account):
                return self._change_method(command, emp_id, f.direct_method(bank, account))
            case ChangeEmployeeMail(id=emp_id, address=address):
                return self._change_method(command, emp_id, f.mail_method(address))
            case ChangeEmployeeMember(id=emp_id, member_id=member_id, dues=dues):
                return ChangeMemberTransaction(
                    command, self.store, emp_id, f.union_affiliation(member_id, dues)
                )
            case ChangeEmployeeNoMember(id=emp_id):
                return ChangeNoMemberTransaction(
                    command, self.store, emp_id, f.no_affiliation()
                )

            case Payday(date=pay_date):
                return PaydayTransaction(
                    command, self.store, pay_date, self.engine, self.payments
                )
            case VerifyGrossPay(id=emp_id, pay_date=pay_date, gross_pay=amount):
                return VerifyPaycheckTransaction(
                    command, self.store, emp_id, pay_date, "gross_pay", amount
                )
            case VerifyDeductions(id=emp_id, pay_date=pay_date, deductions=amount):
                return VerifyPaycheckTransaction(
                    command, self.store, emp_id, pay_date, "deductions", amount
                )
            case VerifyNetPay(id=emp_id, pay_date=pay_date, net_pay=amount):
                return VerifyPaycheckTransaction(
                    command, self.store, emp_id, pay_date, "net_pay", amount
                )
        raise TypeError(f"not a command: {command!r}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _add(
        self,
        command: Command,
        emp_id: EmployeeId,
        name: str,
        address: str,
        classification: PaymentClassification,
        schedule: PaymentSchedule,
    ) -> Transaction:
        employee = Employee(
            id=emp_id,
            name=name,
            address=address,
            classification=classification,
            schedule=schedule,
            method=self.factory.hold_method(),
            affiliation=self.factory.no_affiliation(),
        )
        return AddEmployeeTransaction(command, self.store, employee)

    def _change(
        self, command: Command, emp_id: EmployeeId, change: Callable[[Employee], None]
    ) -> Transaction:
        return ChangeEmployeeTransaction(command, self.store, emp_id, change)

    def _reclassify(
        self,
        command: Command,
        emp_id: EmployeeId,
        classification: PaymentClassification,
        schedule: PaymentSchedule,
    ) -> Transaction:
        def change(employee: Employee) -> None:
            employee.classification = classification
            employee.schedule = schedule

        return self._change(command, emp_id, change)

    def _change_method(
        self, command: Command, emp_id: EmployeeId, method: PaymentMethod
    ) -> Transaction:
        def change(employee: Employee) -> None:
            employee.method = method

        return self._change(command, emp_id, change)
