"""Domain model: employees, rule facets and paychecks."""

from payroll_kata.models.employee import Employee, EmployeeId
from payroll_kata.models.payments import (
    DirectMethod,
    DirectPayout,
    HoldMethod,
    HoldPayout,
    MailMethod,
    MailPayout,
    PaymentMethod,
    Payout,
)
from payroll_kata.models.payroll import (
    Affiliation,
    BiweeklySchedule,
    CommissionedClassification,
    HourlyClassification,
    MemberId,
    MonthlySchedule,
    NoAffiliation,
    Paycheck,
    PaymentClassification,
    PaymentSchedule,
    PayPeriod,
    SalariedClassification,
    SalesReceipt,
    ServiceCharge,
    TimeCard,
    UnionAffiliation,
    WeeklySchedule,
)

__all__ = [
    "Affiliation",
    "BiweeklySchedule",
    "CommissionedClassification",
    "DirectMethod",
    "DirectPayout",
    "Employee",
    "EmployeeId",
    "HoldMethod",
    "HoldPayout",
    "HourlyClassification",
    "MailMethod",
    "MailPayout",
    "MemberId",
    "MonthlySchedule",
    "NoAffiliation",
    "Paycheck",
    "PaymentClassification",
    "PaymentMethod",
    "PaymentSchedule",
    "PayPeriod",
    "Payout",
    "SalariedClassification",
    "SalesReceipt",
    "ServiceCharge",
    "TimeCard",
    "UnionAffiliation",
    "WeeklySchedule",
]
