"""Payroll kata: a command-language payroll engine over an in-memory ledger."""

__version__ = "0.1.0"
