"""Tests for paycheck delivery."""

import io
import json
import logging
from datetime import date
from decimal import Decimal

from payroll_kata.models import (
    DirectPayout,
    HoldPayout,
    MailMethod,
    MailPayout,
    Paycheck,
    PayPeriod,
)
from payroll_kata.services import PaymentService

from .conftest import make_employee

PAYCHECK = Paycheck(
    PayPeriod(date(2025, 3, 1), date(2025, 3, 31)),
    Decimal("1000"),
    Decimal("37.80"),
    Decimal("962.20"),
)


class BrokenSink:
    def write(self, text):
        raise OSError("disk full")


class TestBuildPayout:
    """Test payout records per payment method."""

    def test_hold(self):
        payout = PaymentService.build_payout(make_employee(), PAYCHECK)
        assert payout == HoldPayout(1, Decimal("1000"), Decimal("37.80"), Decimal("962.20"), "Bob")
        assert payout.method == "hold"

    def test_mail(self):
        employee = make_employee()
        employee.method = MailMethod("PO Box 9")
        payout = PaymentService.build_payout(employee, PAYCHECK)
        assert isinstance(payout, MailPayout)
        assert payout.address == "PO Box 9"

    def test_to_dict(self):
        payout = DirectPayout(1, Decimal("1"), Decimal("0"), Decimal("1"), "Bank", "42")
        assert payout.to_dict() == {
            "method": "direct",
            "emp_id": 1,
            "gross_pay": "1",
            "deductions": "0",
            "net_pay": "1",
            "bank": "Bank",
            "account": "42",
        }


class TestDeliver:
    def test_writes_json_line(self, caplog):
        sink = io.StringIO()
        with caplog.at_level(logging.INFO, logger="payroll_kata.services.payment_service"):
            PaymentService(sink).deliver(make_employee(), PAYCHECK)

        assert json.loads(sink.getvalue())["net_pay"] == "962.20"
        assert "payout" in caplog.text

    def test_failure_is_logged_not_raised(self, caplog):
        """A broken sink never fails the payday."""
        with caplog.at_level(logging.ERROR):
            assert PaymentService(BrokenSink()).deliver(make_employee(), PAYCHECK) is None
        assert "Delivery failed" in caplog.text
