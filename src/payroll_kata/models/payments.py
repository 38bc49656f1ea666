"""Payment methods and the payout records produced when a paycheck is delivered."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class HoldMethod:
    """Paycheck is held by the paymaster."""


@dataclass(frozen=True)
class DirectMethod:
    """Direct deposit into a bank account."""

    bank: str
    account: str


@dataclass(frozen=True)
class MailMethod:
    """Paycheck is mailed to an address."""

    address: str


PaymentMethod = Union[HoldMethod, DirectMethod, MailMethod]


@dataclass(frozen=True)
class Payout:
    """Base payout record. Amounts are copied from the paycheck."""

    emp_id: int
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal

    @property
    def method(self) -> str:
        return type(self).__name__.removesuffix("Payout").lower()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"method": self.method}
        for key, value in asdict(self).items():
            data[key] = str(value) if isinstance(value, Decimal) else value
        return data


@dataclass(frozen=True)
class HoldPayout(Payout):
    name: str = ""


@dataclass(frozen=True)
class DirectPayout(Payout):
    bank: str = ""
    account: str = ""


@dataclass(frozen=True)
class MailPayout(Payout):
    name: str = ""
    address: str = ""
