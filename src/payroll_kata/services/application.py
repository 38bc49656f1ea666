"""The execution loop and its whole-run decorators."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Iterable, Protocol, TextIO

from payroll_kata.errors import InvalidStateError, PayrollError
from payroll_kata.services.dispatcher import TransactionDispatcher
from payroll_kata.services.runner import PlainRunner, Runner
from payroll_kata.services.sources import SourceItem
from payroll_kata.services.transactions import RejectedLine, Transaction

logger = logging.getLogger(__name__)


class RunnerState(str, Enum):
    """Application lifecycle.

    Allowed transitions:
    - idle -> running
    - running -> done
    """

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class Application(Protocol):
    """Anything a host can ``run()``."""

    def run(self) -> None:
        ...


class PayrollApp:
    """Drive every item of a command source through dispatcher and runner.

    The app runs once. A failure that the runner lets through halts the run
    and propagates; the app still ends in DONE.
    """

    def __init__(
        self,
        source: Iterable[SourceItem],
        dispatcher: TransactionDispatcher,
        runner: Runner | None = None,
    ):
        self.source = source
        self.dispatcher = dispatcher
        self.runner = runner or PlainRunner()
        self.state = RunnerState.IDLE
        self.processed = 0

    def _transition(self, to_state: RunnerState) -> None:
        logger.debug("app state %s -> %s", self.state.value, to_state.value)
        self.state = to_state

    def _transaction(self, item: SourceItem) -> Transaction:
        if isinstance(item, RejectedLine):
            return item
        return self.dispatcher.dispatch(item)

    def run(self) -> None:
        if self.state != RunnerState.IDLE:
            raise InvalidStateError(self.state.value, RunnerState.RUNNING.value)

        self._transition(RunnerState.RUNNING)
        try:
            for item in self.source:
                tx = self._transaction(item)
                self.processed += 1
                self.runner.run(tx)
        finally:
            self._transition(RunnerState.DONE)
        logger.info("run finished: %d item(s) processed", self.processed)


class AppChronograph:
    """Report wall time for the whole run."""

    def __init__(self, app: Application, sink: TextIO):
        self.app = app
        self.sink = sink

    def run(self) -> None:
        started = time.perf_counter()
        try:
            self.app.run()
        finally:
            elapsed = time.perf_counter() - started
            self.sink.write(f"total elapsed={elapsed:.6f}s\n")


class SoftLanding:
    """Report a halting error instead of raising it."""

    def __init__(self, app: Application, sink: TextIO):
        self.app = app
        self.sink = sink

    def run(self) -> None:
        try:
            self.app.run()
        except PayrollError as e:
            logger.exception("run halted")
            self.sink.write(f"Error: {e}\n")
