"""API routes."""

from payroll_kata.api.routes.employees import router as employees_router
from payroll_kata.api.routes.health import router as health_router
from payroll_kata.api.routes.scripts import router as scripts_router

__all__ = ["employees_router", "health_router", "scripts_router"]
