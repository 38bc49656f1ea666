"""Read-only ledger endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, status

from payroll_kata.api.dependencies import Store
from payroll_kata.api.schemas import (
    EmployeeListResponse,
    EmployeeResponse,
    ErrorResponse,
    PaycheckListResponse,
    PaycheckResponse,
    SnapshotResponse,
)
from payroll_kata.errors import NotFound
from payroll_kata.models import EmployeeId

router = APIRouter(tags=["employees"])

EmpId = Annotated[EmployeeId, Path(ge=0)]


@router.get("/employees", response_model=EmployeeListResponse)
def list_employees(store: Store) -> EmployeeListResponse:
    """List every employee ordered by id."""
    employees = store.run_tx(lambda ledger: ledger.fetch_all())
    items = [EmployeeResponse.from_employee(employees[k]) for k in sorted(employees)]
    return EmployeeListResponse(items=items, total=len(items))


@router.get(
    "/employees/{emp_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_employee(store: Store, emp_id: EmpId) -> EmployeeResponse:
    """Get one employee."""
    try:
        employee = store.run_tx(lambda ledger: ledger.fetch(emp_id))
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return EmployeeResponse.from_employee(employee)


@router.get(
    "/employees/{emp_id}/paychecks",
    response_model=PaycheckListResponse,
    responses={404: {"model": ErrorResponse}},
)
def list_paychecks(store: Store, emp_id: EmpId) -> PaycheckListResponse:
    """Paycheck history of one employee, oldest first."""

    def read(ledger):
        ledger.fetch(emp_id)
        return ledger.paychecks_of(emp_id)

    try:
        history = store.run_tx(read)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    items = [PaycheckResponse.from_paycheck(pc) for pc in history]
    return PaycheckListResponse(emp_id=emp_id, items=items, total=len(items))


@router.get("/snapshot", response_model=SnapshotResponse)
def snapshot(store: Store) -> SnapshotResponse:
    """Dump the whole ledger."""
    return SnapshotResponse.from_snapshot(store.snapshot())
