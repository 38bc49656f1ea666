"""Pytest fixtures for payroll-kata tests."""

from __future__ import annotations

import io
from datetime import date
from decimal import Decimal

import pytest

from payroll_kata.models import (
    Employee,
    HoldMethod,
    MonthlySchedule,
    NoAffiliation,
    SalariedClassification,
)
from payroll_kata.services import (
    PaymentService,
    PayrollApp,
    TextCommandSource,
    TransactionDispatcher,
)
from payroll_kata.services.runner import Runner
from payroll_kata.store import MemoryStore


def make_employee(emp_id: int = 1, name: str = "Bob", salary: str = "1000") -> Employee:
    """A salaried, monthly, hold, non-member employee."""
    return Employee(
        id=emp_id,
        name=name,
        address="Home",
        classification=SalariedClassification(Decimal(salary)),
        schedule=MonthlySchedule(),
        method=HoldMethod(),
        affiliation=NoAffiliation(),
    )


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory ledger."""
    return MemoryStore()


@pytest.fixture
def payout_sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def dispatcher(store: MemoryStore, payout_sink: io.StringIO) -> TransactionDispatcher:
    """Dispatcher bound to ``store`` with payouts written to ``payout_sink``."""
    return TransactionDispatcher(store, payments=PaymentService(payout_sink))


@pytest.fixture
def run_script(dispatcher: TransactionDispatcher):
    """Run a script through a fresh PayrollApp and return the app."""

    def run(script: str, runner: Runner | None = None) -> PayrollApp:
        app = PayrollApp(TextCommandSource(script.splitlines()), dispatcher, runner)
        app.run()
        return app

    return run


@pytest.fixture
def pay_date() -> date:
    """Last day of March 2025, a Monday."""
    return date(2025, 3, 31)
