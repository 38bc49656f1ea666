"""Tests for the script parser."""

from datetime import date
from decimal import Decimal

import pytest

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
    DeleteEmployee,
    Payday,
    VerifyDeductions,
    VerifyGrossPay,
    VerifyNetPay,
)
from payroll_kata.errors import ParseError
from payroll_kata.parser import (
    ADD_EMP_CODES,
    CHANGE_KEYWORDS,
    COMMAND_KEYWORDS,
    END_OF_LINE,
    format_command,
    parse_line,
    parse_script,
)

D = Decimal

ALL_COMMANDS = [
    AddHourlyEmployee(1, "Bob", "Home", D("15.25")),
    AddSalariedEmployee(2, "Alice", "1 Main St", D("3215.88")),
    AddCommissionedEmployee(3, "Carol", "Office", D("1000"), D("0.1")),
    DeleteEmployee(4),
    AddTimeCard(1, date(2025, 1, 10), D("8.5")),
    AddSalesReceipt(3, date(2025, 1, 10), D("500.00")),
    AddServiceCharge(7734, date(2025, 1, 8), D("19.42")),
    ChangeEmployeeName(1, 'Robert "Bob" Smith'),
    ChangeEmployeeAddress(1, "C:\\Users\\bob"),
    ChangeEmployeeHourly(2, D("20")),
    ChangeEmployeeSalaried(1, D("2500.00")),
    ChangeEmployeeCommissioned(1, D("1200"), D("0.05")),
    ChangeEmployeeHold(1),
    ChangeEmployeeDirect(1, "First Bank", "12-3456"),
    ChangeEmployeeMail(1, "PO Box 9"),
    ChangeEmployeeMember(1, 7734, D("9.45")),
    ChangeEmployeeNoMember(1),
    Payday(date(2025, 3, 31)),
    VerifyGrossPay(2, date(2025, 3, 31), D("3215.88")),
    VerifyDeductions(2, date(2025, 3, 31), D("0")),
    VerifyNetPay(2, date(2025, 3, 31), D("3215.88")),
]


class TestParseCommands:
    """Test parsing of each command family."""

    def test_add_salaried_employee(self):
        """AddEmp with S code yields a salaried add."""
        cmd = parse_line('AddEmp 1 "Bob" "Home" S 3215.88')
        assert cmd == AddSalariedEmployee(1, "Bob", "Home", D("3215.88"))

    def test_add_hourly_and_commissioned(self):
        """H and C codes pick the other add variants."""
        assert parse_line('AddEmp 2 "A" "B" H 10.0') == AddHourlyEmployee(2, "A", "B", D("10.0"))
        assert parse_line('AddEmp 3 "A" "B" C 100 .5') == AddCommissionedEmployee(
            3, "A", "B", D("100"), D("0.5")
        )

    def test_activity_commands(self):
        """TimeCard, SalesReceipt and ServiceCharge carry id, date and amount."""
        assert parse_line("TimeCard 1 2025-01-10 8") == AddTimeCard(1, date(2025, 1, 10), D("8"))
        assert parse_line("SalesReceipt 3 2025-01-10 250.5") == AddSalesReceipt(
            3, date(2025, 1, 10), D("250.5")
        )
        assert parse_line("ServiceCharge 42 2025-01-08 19.42") == AddServiceCharge(
            42, date(2025, 1, 8), D("19.42")
        )

    def test_numbers_without_leading_zero(self):
        """Decimal float syntax accepts .5 style inputs."""
        cmd = parse_line("TimeCard 1 2025-01-10 .5")
        assert cmd.hours == D("0.5")

    def test_member_change(self):
        """Member requires the Dues keyword before the amount."""
        assert parse_line("ChgEmp 1 Member 7734 Dues 9.45") == ChangeEmployeeMember(
            1, 7734, D("9.45")
        )

    def test_string_escapes(self):
        """Quoted strings unescape backslash sequences."""
        cmd = parse_line(r'ChgEmp 1 Name "Robert \"Bob\" Smith"')
        assert cmd == ChangeEmployeeName(1, 'Robert "Bob" Smith')

    def test_verify_commands(self):
        """Verify lines name the paycheck date, employee and amount field."""
        assert parse_line("Verify Paycheck 2025-03-31 EmpId 1 GrossPay 3215.88") == (
            VerifyGrossPay(1, date(2025, 3, 31), D("3215.88"))
        )
        assert parse_line("Verify Paycheck 2025-03-31 EmpId 1 NetPay 0") == (
            VerifyNetPay(1, date(2025, 3, 31), D("0"))
        )

    def test_extra_whitespace(self):
        """Tokens may be separated by any run of spaces or tabs."""
        assert parse_line("  Payday\t2025-03-31  \n") == Payday(date(2025, 3, 31))

    @pytest.mark.parametrize("line", ["", "   ", "# a comment", "   # indented comment"])
    def test_blank_and_comment_lines(self, line):
        """Blank and comment lines carry no command."""
        assert parse_line(line) is None


class TestParseErrors:
    """Test ParseError position, expected set and found text."""

    def test_unknown_command(self):
        """An unknown keyword reports every command keyword as expected."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("Hire 1")

        error = exc_info.value
        assert error.position == 0
        assert error.expected == frozenset(COMMAND_KEYWORDS)
        assert error.found == "Hire"

    def test_keyword_must_be_whole_word(self):
        """A keyword glued to its argument is not a keyword."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("DelEmp42")
        assert exc_info.value.position == 0

    def test_unknown_change_keyword(self):
        """ChgEmp alternatives are reported together after the shared prefix."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("ChgEmp 1 Salary 10")

        error = exc_info.value
        assert error.position == 9
        assert error.expected == frozenset(CHANGE_KEYWORDS)
        assert error.found == "Salary"

    def test_unknown_add_code(self):
        """AddEmp only accepts H, S or C."""
        with pytest.raises(ParseError) as exc_info:
            parse_line('AddEmp 1 "Bob" "Home" X 10')
        assert exc_info.value.expected == frozenset(ADD_EMP_CODES)
        assert exc_info.value.found == "X"

    def test_committed_alternative_does_not_fall_through(self):
        """Once Member matched, a missing Dues is an error, not another shape."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("ChgEmp 1 Member 7734 9.45")

        error = exc_info.value
        assert error.expected == frozenset({"Dues"})
        assert error.found == "9.45"

    def test_missing_argument(self):
        """Running out of tokens reports end of line as found."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("ChgEmp 1 Commissioned 1000")
        assert exc_info.value.expected == frozenset({"number"})
        assert exc_info.value.found == END_OF_LINE

    def test_trailing_tokens(self):
        """Anything after a complete command is an error."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("ChgEmp 1 Hold now")
        assert exc_info.value.expected == frozenset({END_OF_LINE})
        assert exc_info.value.found == "now"

    def test_invalid_calendar_date(self):
        """A date-shaped token must also be a real date."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("TimeCard 1 2025-02-30 8")
        assert exc_info.value.position == 11
        assert exc_info.value.expected == frozenset({"date"})

    def test_malformed_number(self):
        """A number must end at a token boundary."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("TimeCard 1 2025-01-10 1.5.2")
        assert exc_info.value.expected == frozenset({"number"})

    def test_number_beyond_decimal_range(self):
        """A numeral whose exponent no Decimal arithmetic can hold is rejected."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("TimeCard 1 2025-01-10 1e9999999")
        assert exc_info.value.position == 22
        assert exc_info.value.expected == frozenset({"number"})
        assert exc_info.value.found == "1e9999999"

    def test_unterminated_string(self):
        """An unterminated quote is not a string."""
        with pytest.raises(ParseError) as exc_info:
            parse_line('ChgEmp 1 Name "Bob')
        assert exc_info.value.expected == frozenset({"string"})
        assert exc_info.value.found == '"Bob'

    def test_message_mentions_position(self):
        """The message carries column, expected and found."""
        with pytest.raises(ParseError, match=r"column 0: expected .*found 'Hire'"):
            parse_line("Hire")


class TestParseScript:
    """Test whole-script parsing."""

    def test_skips_blank_and_comment_lines(self):
        """Only command lines produce commands."""
        script = '# setup\nAddEmp 1 "Bob" "Home" S 3215.88\n\nPayday 2025-03-31\n'
        assert parse_script(script) == [
            AddSalariedEmployee(1, "Bob", "Home", D("3215.88")),
            Payday(date(2025, 3, 31)),
        ]

    def test_error_carries_line_number(self):
        """The first malformed line stops parsing and is identified."""
        with pytest.raises(ParseError) as exc_info:
            parse_script('AddEmp 1 "A" "B" S 1\n\nBogus\nPayday 2025-03-31')

        assert exc_info.value.lineno == 3
        assert "line 3" in str(exc_info.value)


class TestFormatCommand:
    """Test that formatted commands read back unchanged."""

    @pytest.mark.parametrize("command", ALL_COMMANDS, ids=lambda c: type(c).__name__)
    def test_format_then_parse(self, command):
        """format_command output parses to an equal command."""
        assert parse_line(format_command(command)) == command

    def test_format_examples(self):
        """Formatting follows the script grammar."""
        assert format_command(Payday(date(2025, 3, 31))) == "Payday 2025-03-31"
        assert format_command(ChangeEmployeeMember(1, 7734, D("9.45"))) == (
            "ChgEmp 1 Member 7734 Dues 9.45"
        )
