"""Script and command-queue execution endpoints.

Each request runs through its own PayrollApp against the app's shared
store. Endpoints are sync, so FastAPI runs them on its thread pool and
concurrent requests serialise command by command on the store lock.
"""

import io
import logging
from typing import Iterable

from fastapi import APIRouter, HTTPException, status

from payroll_kata.api.dependencies import Store
from payroll_kata.api.schemas import CommandsRequest, ErrorResponse, RunResponse, ScriptRequest
from payroll_kata.commands import command_from_dict
from payroll_kata.errors import NotFound, ParseError, PayrollError, TransactionError
from payroll_kata.services import (
    EchoRunner,
    FailOpenRunner,
    PaymentService,
    PayrollApp,
    PlainRunner,
    TextCommandSource,
    TransactionDispatcher,
)
from payroll_kata.services.runner import Runner
from payroll_kata.services.sources import SourceItem
from payroll_kata.store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scripts"])

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def status_for(error: PayrollError) -> int:
    """HTTP status for an error that halted a run."""
    if isinstance(error, ParseError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, TransactionError) and isinstance(error.cause, NotFound):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_409_CONFLICT


def _run(
    store: MemoryStore, source: Iterable[SourceItem], fail_open: bool, echo: bool
) -> RunResponse:
    sink = io.StringIO()
    runner: Runner = EchoRunner(sink) if echo else PlainRunner()
    if fail_open:
        runner = FailOpenRunner(runner)
    dispatcher = TransactionDispatcher(store, payments=PaymentService(sink if echo else None))
    app = PayrollApp(source, dispatcher, runner)
    try:
        app.run()
    except PayrollError as e:
        logger.info("run halted after %d item(s): %s", app.processed, e)
        raise HTTPException(status_code=status_for(e), detail=str(e)) from e
    return RunResponse(processed=app.processed, output=sink.getvalue())


@router.post(
    "/scripts",
    response_model=RunResponse,
    responses=_ERROR_RESPONSES,
)
def run_script(store: Store, payload: ScriptRequest) -> RunResponse:
    """Run a script in the command language."""
    source = TextCommandSource(payload.script.splitlines())
    return _run(store, source, payload.fail_open, payload.echo)


@router.post(
    "/commands",
    response_model=RunResponse,
    responses=_ERROR_RESPONSES,
)
def run_commands(store: Store, payload: CommandsRequest) -> RunResponse:
    """Run a JSON command queue."""
    try:
        commands = [command_from_dict(item) for item in payload.commands]
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    return _run(store, commands, payload.fail_open, payload.echo)
