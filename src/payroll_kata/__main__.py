"""Entry point for ``python -m payroll_kata``."""

import sys

from payroll_kata.cli import main

if __name__ == "__main__":
    sys.exit(main())
