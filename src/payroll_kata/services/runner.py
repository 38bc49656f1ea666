"""Outcome policies for executing one transaction.

A runner executes a transaction and decides what happens to its response
or error. Policies compose by wrapping:

    runner = ChronographRunner(FailOpenRunner(EchoRunner(sys.stdout)), sys.stderr)

Only PayrollError is treated as a command outcome. Anything else is a bug
and always propagates.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol, TextIO

from payroll_kata.commands import VOID, Response
from payroll_kata.errors import PayrollError
from payroll_kata.services.transactions import Transaction

logger = logging.getLogger(__name__)


class Runner(Protocol):
    """Protocol for transaction outcome policies."""

    def run(self, tx: Transaction) -> Response:
        ...


class PlainRunner:
    """Default policy: return the response, let errors halt the run."""

    def run(self, tx: Transaction) -> Response:
        return tx.execute()


class EchoRunner:
    """Write every response or error to a sink and keep going."""

    def __init__(self, sink: TextIO):
        self.sink = sink

    def run(self, tx: Transaction) -> Response:
        try:
            response = tx.execute()
        except PayrollError as e:
            self.sink.write(f"!! {e}\n")
            return VOID
        self.sink.write(f"=> {response}\n")
        return response


class SilentRunner:
    """Discard responses; failures only reach the log."""

    def run(self, tx: Transaction) -> Response:
        try:
            tx.execute()
        except PayrollError as e:
            logger.warning("suppressed failure of %r: %s", tx, e)
        return VOID


class FailOpenRunner:
    """Turn a failure of the wrapped runner into a Void response."""

    def __init__(self, inner: Runner):
        self.inner = inner

    def run(self, tx: Transaction) -> Response:
        try:
            return self.inner.run(tx)
        except PayrollError:
            logger.exception("fail-open: %r failed, continuing", tx)
            return VOID


class FailSafeRunner:
    """Same outcome as FailOpenRunner under its own name."""

    def __init__(self, inner: Runner):
        self.inner = inner

    def run(self, tx: Transaction) -> Response:
        try:
            return self.inner.run(tx)
        except PayrollError:
            logger.exception("fail-safe: %r failed, continuing", tx)
            return VOID


class ChronographRunner:
    """Report wall time spent in the wrapped runner for each transaction."""

    def __init__(self, inner: Runner, sink: TextIO):
        self.inner = inner
        self.sink = sink

    def run(self, tx: Transaction) -> Response:
        started = time.perf_counter()
        try:
            return self.inner.run(tx)
        finally:
            elapsed = time.perf_counter() - started
            self.sink.write(f"elapsed={elapsed:.6f}s\n")
