"""Tests for deduction rules."""

from datetime import date
from decimal import Decimal

from payroll_kata.calculators import calculate_deductions
from payroll_kata.calculators.affiliation import count_fridays
from payroll_kata.models import NoAffiliation, PayPeriod, UnionAffiliation

WEEK = PayPeriod(date(2025, 1, 4), date(2025, 1, 10))
MARCH = PayPeriod(date(2025, 3, 1), date(2025, 3, 31))


class TestUnionDeductions:
    """Test union dues and service charges."""

    def test_dues_once_per_friday(self):
        """A 7-day period holds one Friday."""
        union = UnionAffiliation(member_id=7734, dues=Decimal("9.45"))
        assert calculate_deductions(union, WEEK) == Decimal("9.45")

    def test_service_charge_in_period_is_added(self):
        union = UnionAffiliation(member_id=7734, dues=Decimal("9.45"))
        union.add_service_charge(date(2025, 1, 8), Decimal("19.42"))
        union.add_service_charge(date(2025, 1, 11), Decimal("100"))

        assert calculate_deductions(union, WEEK) == Decimal("28.87")

    def test_monthly_period_counts_every_friday(self):
        """March 2025 has four Fridays."""
        assert count_fridays(MARCH) == 4
        union = UnionAffiliation(member_id=1, dues=Decimal("9.45"))
        assert calculate_deductions(union, MARCH) == Decimal("37.80")

    def test_no_affiliation_deducts_nothing(self):
        assert calculate_deductions(NoAffiliation(), WEEK) == 0
