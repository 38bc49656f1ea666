"""API endpoint integration tests.

Tests the FastAPI endpoints for running scripts and reading the ledger.
"""

import pytest
from httpx import AsyncClient

from .conftest import BOB_SCRIPT

pytestmark = pytest.mark.asyncio


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health endpoint should return 200 and the ledger size."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["employees"] == 0
        assert "timestamp" in data

    async def test_readiness_check(self, client: AsyncClient):
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_liveness_check(self, client: AsyncClient):
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestRunScript:
    """Test POST /api/v1/scripts."""

    async def test_run_script(self, client: AsyncClient):
        """Echo output carries responses and payouts."""
        response = await client.post("/api/v1/scripts", json={"script": BOB_SCRIPT})

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["processed"] == 2
        assert data["output"].startswith("=> EmployeeId(1)\n")
        assert '"net_pay": "3215.88"' in data["output"]

    async def test_ledger_is_shared_between_requests(self, client: AsyncClient):
        await client.post("/api/v1/scripts", json={"script": 'AddEmp 1 "Bob" "Home" S 1'})
        response = await client.post(
            "/api/v1/scripts", json={"script": 'AddEmp 1 "Bob" "Home" S 1', "echo": False}
        )
        assert response.status_code == 409

        health = await client.get("/health")
        assert health.json()["employees"] == 1

    async def test_parse_error_is_422(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/scripts", json={"script": "Payday someday", "echo": False}
        )
        assert response.status_code == 422
        assert "line 1" in response.json()["detail"]

    async def test_not_found_is_404(self, client: AsyncClient):
        response = await client.post("/api/v1/scripts", json={"script": "DelEmp 5", "echo": False})
        assert response.status_code == 404

    async def test_fail_open(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/scripts",
            json={"script": "DelEmp 5\n" + BOB_SCRIPT, "fail_open": True, "echo": False},
        )
        assert response.status_code == 200
        assert response.json()["processed"] == 3

    async def test_verify_mismatch_is_409(self, client: AsyncClient):
        script = BOB_SCRIPT + "Verify Paycheck 2025-03-31 EmpId 1 NetPay 1\n"
        response = await client.post("/api/v1/scripts", json={"script": script, "echo": False})
        assert response.status_code == 409
        assert "net_pay" in response.json()["detail"]


class TestRunCommands:
    """Test POST /api/v1/commands."""

    async def test_run_queue(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/commands",
            json={
                "commands": [
                    {
                        "type": "AddHourlyEmployee",
                        "id": 2,
                        "name": "Hank",
                        "address": "Shop",
                        "hourly_rate": "10",
                    },
                    {"type": "AddTimeCard", "id": 2, "date": "2025-01-06", "hours": "10"},
                    {"type": "Payday", "date": "2025-01-10"},
                ]
            },
        )
        assert response.status_code == 200, response.text
        assert response.json()["processed"] == 3

        paychecks = await client.get("/api/v1/employees/2/paychecks")
        assert paychecks.json()["items"][0]["gross_pay"] == "110.0"

    async def test_unknown_command_type(self, client: AsyncClient):
        response = await client.post("/api/v1/commands", json={"commands": [{"type": "Nope"}]})
        assert response.status_code == 422


class TestEmployees:
    """Test ledger read endpoints."""

    async def test_list_and_get(self, client: AsyncClient):
        await client.post("/api/v1/scripts", json={"script": BOB_SCRIPT})

        listing = await client.get("/api/v1/employees")
        assert listing.json()["total"] == 1

        employee = await client.get("/api/v1/employees/1")
        assert employee.status_code == 200
        data = employee.json()
        assert data["name"] == "Bob"
        assert data["classification"] == {"kind": "salaried", "salary": "3215.88"}
        assert data["schedule"] == {"kind": "monthly"}
        assert data["method"] == {"kind": "hold"}

    async def test_paychecks(self, client: AsyncClient):
        await client.post("/api/v1/scripts", json={"script": BOB_SCRIPT})

        response = await client.get("/api/v1/employees/1/paychecks")
        data = response.json()
        assert data["total"] == 1
        paycheck = data["items"][0]
        assert paycheck["pay_date"] == "2025-03-31"
        assert paycheck["pay_period"] == {"start": "2025-03-01", "end": "2025-03-31"}
        assert paycheck["net_pay"] == "3215.88"

    async def test_missing_employee_is_404(self, client: AsyncClient):
        assert (await client.get("/api/v1/employees/9")).status_code == 404
        assert (await client.get("/api/v1/employees/9/paychecks")).status_code == 404

    async def test_snapshot(self, client: AsyncClient):
        await client.post(
            "/api/v1/scripts",
            json={"script": BOB_SCRIPT + "ChgEmp 1 Member 7734 Dues 9.45\n"},
        )
        data = (await client.get("/api/v1/snapshot")).json()
        assert data["union_members"] == {"7734": 1}
        assert len(data["paychecks"]["1"]) == 1
