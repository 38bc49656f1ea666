"""Transactions, dispatch and the execution loop."""

from payroll_kata.services.application import (
    AppChronograph,
    PayrollApp,
    RunnerState,
    SoftLanding,
)
from payroll_kata.services.dispatcher import TransactionDispatcher
from payroll_kata.services.payment_service import PaymentService
from payroll_kata.services.runner import (
    ChronographRunner,
    EchoRunner,
    FailOpenRunner,
    FailSafeRunner,
    PlainRunner,
    Runner,
    SilentRunner,
)
from payroll_kata.services.sources import (
    JsonCommandSource,
    TextCommandSource,
    echo_lines,
    join_lines,
)
from payroll_kata.services.transactions import RejectedLine, Transaction

__all__ = [
    "AppChronograph",
    "ChronographRunner",
    "EchoRunner",
    "FailOpenRunner",
    "FailSafeRunner",
    "JsonCommandSource",
    "PaymentService",
    "PayrollApp",
    "PlainRunner",
    "RejectedLine",
    "Runner",
    "RunnerState",
    "SilentRunner",
    "SoftLanding",
    "TextCommandSource",
    "Transaction",
    "TransactionDispatcher",
    "echo_lines",
    "join_lines",
]
