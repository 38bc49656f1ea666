"""Line-oriented parser for payroll scripts.

Grammar (tokens separated by whitespace, strings double-quoted with ``\\"``
and ``\\\\`` escapes, dates ``YYYY-MM-DD``, numbers decimal):

    AddEmp <id> "<name>" "<address>" H <hourly_rate>
    AddEmp <id> "<name>" "<address>" S <salary>
    AddEmp <id> "<name>" "<address>" C <salary> <commission_rate>
    DelEmp <id>
    TimeCard <id> <date> <hours>
    SalesReceipt <id> <date> <amount>
    ServiceCharge <member_id> <date> <amount>
    ChgEmp <id> Name "<name>"
    ChgEmp <id> Address "<address>"
    ChgEmp <id> Hourly <hourly_rate>
    ChgEmp <id> Salaried <salary>
    ChgEmp <id> Commissioned <salary> <commission_rate>
    ChgEmp <id> Hold
    ChgEmp <id> Direct "<bank>" "<account>"
    ChgEmp <id> Mail "<address>"
    ChgEmp <id> Member <member_id> Dues <dues>
    ChgEmp <id> NoMember
    Payday <date>
    Verify Paycheck <date> EmpId <id> GrossPay <amount>
    Verify Paycheck <date> EmpId <id> Deductions <amount>
    Verify Paycheck <date> EmpId <id> NetPay <amount>

Blank lines and lines starting with ``#`` carry no command.

Alternatives sharing a prefix are tried in the order listed in
COMMAND_KEYWORDS, ADD_EMP_CODES, CHANGE_KEYWORDS and VERIFY_KEYWORDS. Once a
keyword matches, the parser is committed to that alternative: a later
mismatch is reported as a ParseError at that point and never retried as a
different command.
"""

from __future__ import annotations

import datetime
import logging
import re
from decimal import Decimal, InvalidOperation, getcontext
from typing import Callable, Iterable

from payroll_kata.commands import (
    AddCommissionedEmployee,
    AddHourlyEmployee,
    AddSalariedEmployee,
    AddSalesReceipt,
    AddServiceCharge,
    AddTimeCard,
    ChangeEmployeeAddress,
    ChangeEmployeeCommissioned,
    ChangeEmployeeDirect,
    ChangeEmployeeHold,
    ChangeEmployeeHourly,
    ChangeEmployeeMail,
    ChangeEmployeeMember,
    ChangeEmployeeName,
    ChangeEmployeeNoMember,
    ChangeEmployeeSalaried,
    Command,
    DeleteEmployee,
    Payday,
    VerifyDeductions,
    VerifyGrossPay,
    VerifyNetPay,
)
from payroll_kata.errors import ParseError

logger = logging.getLogger(__name__)

COMMAND_KEYWORDS = (
    "AddEmp",
    "DelEmp",
    "TimeCard",
    "SalesReceipt",
    "ServiceCharge",
    "ChgEmp",
    "Payday",
    "Verify",
)
ADD_EMP_CODES = ("H", "S", "C")
CHANGE_KEYWORDS = (
    "Name",
    "Address",
    "Hourly",
    "Salaried",
    "Commissioned",
    "Hold",
    "Direct",
    "Mail",
    "Member",
    "NoMember",
)
VERIFY_KEYWORDS = ("GrossPay", "Deductions", "NetPay")

END_OF_LINE = "end of line"

_SPACES = re.compile(r"[ \t\r\n]*")
_WORD = re.compile(r"[A-Za-z]+")
_INTEGER = re.compile(r"\d+")
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_ESCAPE = re.compile(r"\\(.)")
_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"?|\S+')


def is_ignorable(line: str) -> bool:
    """True for blank lines and ``#`` comment lines."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


class _Scanner:
    """Cursor over one line. Every token consumer skips trailing whitespace."""

    def __init__(self, line: str):
        self.line = line
        self.pos = 0
        self._skip_spaces()

    def _skip_spaces(self) -> None:
        self.pos = _SPACES.match(self.line, self.pos).end()

    def error(self, *expected: str) -> ParseError:
        m = _TOKEN.match(self.line, self.pos)
        found = m.group(0) if m else END_OF_LINE
        return ParseError(self.pos, expected, found, line=self.line)

    def _at_boundary(self, index: int) -> bool:
        return index == len(self.line) or self.line[index].isspace()

    def _take(self, pattern: re.Pattern[str], expected: str) -> re.Match[str]:
        m = pattern.match(self.line, self.pos)
        if m is None or not self._at_boundary(m.end()):
            raise self.error(expected)
        self.pos = m.end()
        self._skip_spaces()
        return m

    def keyword(self, choices: Iterable[str]) -> str:
        """Consume one of ``choices`` as a whole word, first match wins."""
        choices = tuple(choices)
        m = _WORD.match(self.line, self.pos)
        if m is not None and self._at_boundary(m.end()):
            word = m.group(0)
            for choice in choices:
                if word == choice:
                    self.pos = m.end()
                    self._skip_spaces()
                    return choice
        raise self.error(*choices)

    def integer(self) -> int:
        return int(self._take(_INTEGER, "integer").group(0))

    def number(self) -> Decimal:
        start = self.pos
        text = self._take(_NUMBER, "number").group(0)
        try:
            value = Decimal(text)
        except InvalidOperation:
            value = None
        if value is None or value.adjusted() > getcontext().Emax:
            self.pos = start
            raise self.error("number")
        return value

    def date(self) -> datetime.date:
        start = self.pos
        text = self._take(_DATE, "date").group(0)
        try:
            return datetime.date.fromisoformat(text)
        except ValueError:
            self.pos = start
            raise self.error("date") from None

    def string(self) -> str:
        body = self._take(_STRING, "string").group(1)
        return _ESCAPE.sub(r"\1", body)

    def end(self) -> None:
        if self.pos != len(self.line):
            raise self.error(END_OF_LINE)


# =============================================================================
# Command shapes
# =============================================================================


def _add_emp(s: _Scanner) -> Command:
    emp_id = s.integer()
    name = s.string()
    address = s.string()
    code = s.keyword(ADD_EMP_CODES)
    if code == "H":
        return AddHourlyEmployee(emp_id, name, address, hourly_rate=s.number())
    if code == "S":
        return AddSalariedEmployee(emp_id, name, address, salary=s.number())
    salary = s.number()
    return AddCommissionedEmployee(emp_id, name, address, salary, commission_rate=s.number())


def _del_emp(s: _Scanner) -> Command:
    return DeleteEmployee(s.integer())


def _time_card(s: _Scanner) -> Command:
    return AddTimeCard(s.integer(), s.date(), s.number())


def _sales_receipt(s: _Scanner) -> Command:
    return AddSalesReceipt(s.integer(), s.date(), s.number())


def _service_charge(s: _Scanner) -> Command:
    return AddServiceCharge(s.integer(), s.date(), s.number())


def _chg_emp(s: _Scanner) -> Command:
    emp_id = s.integer()
    match s.keyword(CHANGE_KEYWORDS):
        case "Name":
            return ChangeEmployeeName(emp_id, s.string())
        case "Address":
            return ChangeEmployeeAddress(emp_id, s.string())
        case "Hourly":
            return ChangeEmployeeHourly(emp_id, s.number())
        case "Salaried":
            return ChangeEmployeeSalaried(emp_id, s.number())
        case "Commissioned":
            salary = s.number()
            return ChangeEmployeeCommissioned(emp_id, salary, s.number())
        case "Hold":
            return ChangeEmployeeHold(emp_id)
        case "Direct":
            bank = s.string()
            return ChangeEmployeeDirect(emp_id, bank, s.string())
        case "Mail":
            return ChangeEmployeeMail(emp_id, s.string())
        case "Member":
            member_id = s.integer()
            s.keyword(("Dues",))
            return ChangeEmployeeMember(emp_id, member_id, s.number())
        case _:
            return ChangeEmployeeNoMember(emp_id)


def _payday(s: _Scanner) -> Command:
    return Payday(s.date())


def _verify(s: _Scanner) -> Command:
    s.keyword(("Paycheck",))
    pay_date = s.date()
    s.keyword(("EmpId",))
    emp_id = s.integer()
    match s.keyword(VERIFY_KEYWORDS):
        case "GrossPay":
            return VerifyGrossPay(emp_id, pay_date, s.number())
        case "Deductions":
            return VerifyDeductions(emp_id, pay_date, s.number())
        case _:
            return VerifyNetPay(emp_id, pay_date, s.number())


_SHAPES: dict[str, Callable[[_Scanner], Command]] = {
    "AddEmp": _add_emp,
    "DelEmp": _del_emp,
    "TimeCard": _time_card,
    "SalesReceipt": _sales_receipt,
    "ServiceCharge": _service_charge,
    "ChgEmp": _chg_emp,
    "Payday": _payday,
    "Verify": _verify,
}


def parse_line(line: str) -> Command | None:
    """Parse one script line.

    Returns None for blank and comment lines.

    Raises:
        ParseError: the line is not a well-formed command
    """
    if is_ignorable(line):
        return None

    scanner = _Scanner(line.rstrip("\r\n"))
    keyword = scanner.keyword(COMMAND_KEYWORDS)
    command = _SHAPES[keyword](scanner)
    scanner.end()
    logger.debug("parsed %r", command)
    return command


def parse_script(text: str) -> list[Command]:
    """Parse a whole script, stopping at the first malformed line."""
    commands: list[Command] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            command = parse_line(line)
        except ParseError as e:
            raise e.at_line(lineno) from None
        if command is not None:
            commands.append(command)
    return commands


# =============================================================================
# Formatting
# =============================================================================


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_command(command: Command) -> str:
    """Render a command as a script line that ``parse_line`` reads back."""
    match command:
        case AddHourlyEmployee(id=i, name=n, address=a, hourly_rate=r):
            return f"AddEmp {i} {_quote(n)} {_quote(a)} H {r}"
        case AddSalariedEmployee(id=i, name=n, address=a, salary=s):
            return f"AddEmp {i} {_quote(n)} {_quote(a)} S {s}"
        case AddCommissionedEmployee(id=i, name=n, address=a, salary=s, commission_rate=r):
            return f"AddEmp {i} {_quote(n)} {_quote(a)} C {s} {r}"
        case DeleteEmployee(id=i):
            return f"DelEmp {i}"
        case AddTimeCard(id=i, date=d, hours=h):
            return f"TimeCard {i} {d.isoformat()} {h}"
        case AddSalesReceipt(id=i, date=d, amount=amt):
            return f"SalesReceipt {i} {d.isoformat()} {amt}"
        case AddServiceCharge(member_id=m, date=d, amount=amt):
            return f"ServiceCharge {m} {d.isoformat()} {amt}"
        case ChangeEmployeeName(id=i, name=n):
            return f"ChgEmp {i} Name {_quote(n)}"
        case ChangeEmployeeAddress(id=i, address=a):
            return f"ChgEmp {i} Address {_quote(a)}"
        case ChangeEmployeeHourly(id=i, hourly_rate=r):
            return f"ChgEmp {i} Hourly {r}"
        case ChangeEmployeeSalaried(id=i, salary=s):
            return f"ChgEmp {i} Salaried {s}"
        case ChangeEmployeeCommissioned(id=i, salary=s, commission_rate=r):
            return f"ChgEmp {i} Commissioned {s} {r}"
        case ChangeEmployeeHold(id=i):
            return f"ChgEmp {i} Hold"
        case ChangeEmployeeDirect(id=i, bank=b, account=acct):
            return f"ChgEmp {i} Direct {_quote(b)} {_quote(acct)}"
        case ChangeEmployeeMail(id=i, address=a):
            return f"ChgEmp {i} Mail {_quote(a)}"
        case ChangeEmployeeMember(id=i, member_id=m, dues=d):
            return f"ChgEmp {i} Member {m} Dues {d}"
        case ChangeEmployeeNoMember(id=i):
            return f"ChgEmp {i} NoMember"
        case Payday(date=d):
            return f"Payday {d.isoformat()}"
        case VerifyGrossPay(id=i, pay_date=d, gross_pay=amt):
            return f"Verify Paycheck {d.isoformat()} EmpId {i} GrossPay {amt}"
        case VerifyDeductions(id=i, pay_date=d, deductions=amt):
            return f"Verify Paycheck {d.isoformat()} EmpId {i} Deductions {amt}"
        case VerifyNetPay(id=i, pay_date=d, net_pay=amt):
            return f"Verify Paycheck {d.isoformat()} EmpId {i} NetPay {amt}"
    raise TypeError(f"unknown command: {command!r}")
