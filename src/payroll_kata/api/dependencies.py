"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from payroll_kata.store import MemoryStore


def get_store(request: Request) -> MemoryStore:
    """The ledger shared by every request of this app."""
    return request.app.state.store


# Type aliases for cleaner dependency injection
Store = Annotated[MemoryStore, Depends(get_store)]
