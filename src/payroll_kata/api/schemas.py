"""Pydantic schemas for API request/response models."""

from __future__ import annotations

import re
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from payroll_kata.models import Employee, EmployeeId, MemberId, Paycheck
from payroll_kata.store import StoreSnapshot

_FACET_SUFFIX = re.compile(r"(Classification|Schedule|Method|Affiliation)$")


def facet_to_dict(facet: Any) -> dict[str, Any]:
    """``{"kind": "<variant>", **fields}`` for any rule facet."""
    kind = _FACET_SUFFIX.sub("", type(facet).__name__).lower()
    return {"kind": "none" if kind == "no" else kind, **asdict(facet)}


# ============================================================================
# Run requests
# ============================================================================


class ScriptRequest(BaseModel):
    """Schema for running a script against the shared store."""

    script: str
    fail_open: bool = False
    echo: bool = True


class CommandsRequest(BaseModel):
    """Schema for running a JSON command queue."""

    commands: list[dict[str, Any]] = Field(default_factory=list)
    fail_open: bool = False
    echo: bool = True


class RunResponse(BaseModel):
    """Schema for a finished run."""

    processed: int
    output: str


# ============================================================================
# Ledger views
# ============================================================================


class PayPeriodResponse(BaseModel):
    start: date
    end: date


class PaycheckResponse(BaseModel):
    """Schema for one recorded paycheck."""

    pay_date: date
    pay_period: PayPeriodResponse
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal

    @classmethod
    def from_paycheck(cls, paycheck: Paycheck) -> PaycheckResponse:
        return cls(
            pay_date=paycheck.pay_date,
            pay_period=PayPeriodResponse(
                start=paycheck.pay_period.start, end=paycheck.pay_period.end
            ),
            gross_pay=paycheck.gross_pay,
            deductions=paycheck.deductions,
            net_pay=paycheck.net_pay,
        )


class PaycheckListResponse(BaseModel):
    emp_id: EmployeeId
    items: list[PaycheckResponse]
    total: int


class EmployeeResponse(BaseModel):
    """Schema for an employee and its rule facets."""

    id: EmployeeId
    name: str
    address: str
    classification: dict[str, Any]
    schedule: dict[str, Any]
    method: dict[str, Any]
    affiliation: dict[str, Any]

    @classmethod
    def from_employee(cls, employee: Employee) -> EmployeeResponse:
        return cls(
            id=employee.id,
            name=employee.name,
            address=employee.address,
            classification=facet_to_dict(employee.classification),
            schedule=facet_to_dict(employee.schedule),
            method=facet_to_dict(employee.method),
            affiliation=facet_to_dict(employee.affiliation),
        )


class EmployeeListResponse(BaseModel):
    items: list[EmployeeResponse]
    total: int


class SnapshotResponse(BaseModel):
    """Schema for a full ledger dump."""

    employees: list[EmployeeResponse]
    union_members: dict[MemberId, EmployeeId]
    paychecks: dict[EmployeeId, list[PaycheckResponse]]

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> SnapshotResponse:
        return cls(
            employees=[
                EmployeeResponse.from_employee(snapshot.employees[emp_id])
                for emp_id in sorted(snapshot.employees)
            ],
            union_members=dict(snapshot.union_members),
            paychecks={
                emp_id: [PaycheckResponse.from_paycheck(pc) for pc in history]
                for emp_id, history in snapshot.paychecks.items()
            },
        )


# ============================================================================
# Errors
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
