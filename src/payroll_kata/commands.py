"""Typed commands (one per script line) and transaction responses.

Commands are:
- Immutable (frozen dataclasses)
- Independent of the store
- Serializable to a structured form for the JSON command queue
"""

from __future__ import annotations

import datetime
import json
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Union, get_args

from pydantic import TypeAdapter

from payroll_kata.models import EmployeeId, MemberId, Paycheck

# =============================================================================
# Employee lifecycle
# =============================================================================


@dataclass(frozen=True)
class AddHourlyEmployee:
    id: EmployeeId
    name: str
    address: str
    hourly_rate: Decimal


@dataclass(frozen=True)
class AddSalariedEmployee:
    id: EmployeeId
    name: str
    address: str
    salary: Decimal


@dataclass(frozen=True)
class AddCommissionedEmployee:
    id: EmployeeId
    name: str
    address: str
    salary: Decimal
    commission_rate: Decimal


@dataclass(frozen=True)
class DeleteEmployee:
    id: EmployeeId


# =============================================================================
# Activity
# =============================================================================


@dataclass(frozen=True)
class AddTimeCard:
    id: EmployeeId
    date: datetime.date
    hours: Decimal


@dataclass(frozen=True)
class AddSalesReceipt:
    id: EmployeeId
    date: datetime.date
    amount: Decimal


@dataclass(frozen=True)
class AddServiceCharge:
    member_id: MemberId
    date: datetime.date
    amount: Decimal


# =============================================================================
# Changes
# =============================================================================


@dataclass(frozen=True)
class ChangeEmployeeName:
    id: EmployeeId
    name: str


@dataclass(frozen=True)
class ChangeEmployeeAddress:
    id: EmployeeId
    address: str


@dataclass(frozen=True)
class ChangeEmployeeHourly:
    id: EmployeeId
    hourly_rate: Decimal


@dataclass(frozen=True)
class ChangeEmployeeSalaried:
    id: EmployeeId
    salary: Decimal


@dataclass(frozen=True)
class ChangeEmployeeCommissioned:
    id: EmployeeId
    salary: Decimal
    commission_rate: Decimal


@dataclass(frozen=True)
class ChangeEmployeeHold:
    id: EmployeeId


@dataclass(frozen=True)
class ChangeEmployeeDirect:
    id: EmployeeId
    bank: str
    account: str


@dataclass(frozen=True)
class ChangeEmployeeMail:
    id: EmployeeId
    address: str


@dataclass(frozen=True)
class ChangeEmployeeMember:
    id: EmployeeId
    member_id: MemberId
    dues: Decimal


@dataclass(frozen=True)
class ChangeEmployeeNoMember:
    id: EmployeeId


# =============================================================================
# Payday and verification
# =============================================================================


@dataclass(frozen=True)
class Payday:
    date: datetime.date


@dataclass(frozen=True)
class VerifyGrossPay:
    id: EmployeeId
    pay_date: datetime.date
    gross_pay: Decimal


@dataclass(frozen=True)
class VerifyDeductions:
    id: EmployeeId
    pay_date: datetime.date
    deductions: Decimal


@dataclass(frozen=True)
class VerifyNetPay:
    id: EmployeeId
    pay_date: datetime.date
    net_pay: Decimal


Command = Union[
    AddHourlyEmployee,
    AddSalariedEmployee,
    AddCommissionedEmployee,
    DeleteEmployee,
    AddTimeCard,
    AddSalesReceipt,
    AddServiceCharge,
    ChangeEmployeeName,
    ChangeEmployeeAddress,
    ChangeEmployeeHourly,
    ChangeEmployeeSalaried,
    ChangeEmployeeCommissioned,
    ChangeEmployeeHold,
    ChangeEmployeeDirect,
    ChangeEmployeeMail,
    ChangeEmployeeMember,
    ChangeEmployeeNoMember,
    Payday,
    VerifyGrossPay,
    VerifyDeductions,
    VerifyNetPay,
]

COMMAND_TYPES: dict[str, type] = {cls.__name__: cls for cls in get_args(Command)}


# =============================================================================
# Responses
# =============================================================================


@dataclass(frozen=True)
class VoidResponse:
    def __str__(self) -> str:
        return "Void"


@dataclass(frozen=True)
class EmployeeIdResponse:
    emp_id: EmployeeId

    def __str__(self) -> str:
        return f"EmployeeId({self.emp_id})"


@dataclass(frozen=True)
class PaychecksResponse:
    paychecks: dict[EmployeeId, Paycheck] = field(default_factory=dict)

    def __str__(self) -> str:
        items = ", ".join(
            f"{emp_id}: period={pc.pay_period} gross={pc.gross_pay} "
            f"deductions={pc.deductions} net={pc.net_pay}"
            for emp_id, pc in sorted(self.paychecks.items())
        )
        return f"Paychecks({{{items}}})"


Response = Union[VoidResponse, EmployeeIdResponse, PaychecksResponse]

VOID = VoidResponse()


# =============================================================================
# Structured representation
# =============================================================================


def _serialize(obj: Any) -> Any:
    """Recursively convert values for JSON compatibility."""
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_serialize(v) for v in obj]
    elif isinstance(obj, datetime.date):
        return obj.isoformat()
    elif isinstance(obj, Decimal):
        return str(obj)
    elif isinstance(obj, Enum):
        return obj.value
    return obj


@lru_cache(maxsize=None)
def _adapter(cls: type) -> TypeAdapter:
    return TypeAdapter(cls)


def command_to_dict(command: Command) -> dict[str, Any]:
    """Serialize a command to ``{"type": <name>, **fields}``."""
    data = {"type": type(command).__name__}
    data.update(_serialize(asdict(command)))
    return data


def command_from_dict(data: dict[str, Any]) -> Command:
    """Rebuild a command from ``command_to_dict`` output.

    Raises:
        ValueError: unknown ``type`` or fields that do not validate
    """
    if not isinstance(data, dict):
        raise ValueError(f"Command must be a JSON object, got {type(data).__name__}")
    payload = dict(data)
    type_name = payload.pop("type", None)
    cls = COMMAND_TYPES.get(type_name) if isinstance(type_name, str) else None
    if cls is None:
        raise ValueError(f"Unknown command type: {type_name!r}")
    return _adapter(cls).validate_python(payload)


def dump_commands(commands: list[Command], indent: int | None = None) -> str:
    """Serialize a command queue to a JSON array."""
    return json.dumps([command_to_dict(c) for c in commands], indent=indent)


def load_commands(text: str) -> list[Command]:
    """Parse a JSON array produced by ``dump_commands``."""
    items = json.loads(text)
    if not isinstance(items, list):
        raise ValueError("Command queue must be a JSON array")
    return [command_from_dict(item) for item in items]
