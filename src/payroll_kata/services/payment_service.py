"""Paycheck delivery.

Delivery is a reporting side effect: it turns a paycheck into a payout
record for the employee's payment method, logs it and optionally writes it
as one JSON line to a sink. It never touches the store and a failure never
fails the payday.
"""

from __future__ import annotations

import json
import logging
from typing import TextIO

from payroll_kata.models import (
    DirectMethod,
    DirectPayout,
    Employee,
    HoldMethod,
    HoldPayout,
    MailMethod,
    MailPayout,
    Paycheck,
    Payout,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """Builds and publishes payouts for delivered paychecks."""

    def __init__(self, sink: TextIO | None = None):
        self.sink = sink

    @staticmethod
    def build_payout(employee: Employee, paycheck: Paycheck) -> Payout:
        amounts = dict(
            emp_id=employee.id,
            gross_pay=paycheck.gross_pay,
            deductions=paycheck.deductions,
            net_pay=paycheck.net_pay,
        )
        match employee.method:
            case HoldMethod():
                return HoldPayout(**amounts, name=employee.name)
            case DirectMethod(bank=bank, account=account):
                return DirectPayout(**amounts, bank=bank, account=account)
            case MailMethod(address=address):
                return MailPayout(**amounts, name=employee.name, address=address)
        raise TypeError(f"unknown payment method: {employee.method!r}")

    def deliver(self, employee: Employee, paycheck: Paycheck) -> Payout | None:
        """Deliver one paycheck. Returns the payout, or None if delivery failed."""
        try:
            payout = self.build_payout(employee, paycheck)
            line = json.dumps(payout.to_dict())
            logger.info("payout: %s", line)
            if self.sink is not None:
                self.sink.write(line + "\n")
        except Exception:
            logger.exception("Delivery failed for employee %s", employee.id)
            return None
        return payout
