"""Fixtures for HTTP API tests."""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payroll_kata.api.app import create_app
from payroll_kata.store import MemoryStore


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client against a fresh ledger."""
    app = create_app(MemoryStore())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


BOB_SCRIPT = 'AddEmp 1 "Bob" "Home" S 3215.88\nPayday 2025-03-31\n'
