"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll_kata import __version__
from payroll_kata.api.routes import employees_router, health_router, scripts_router
from payroll_kata.store import MemoryStore


def create_app(store: MemoryStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Every request of one app shares ``store``; a fresh MemoryStore is
    created when none is given.
    """
    app = FastAPI(
        title="Payroll Kata API",
        description="Run payroll scripts against an in-memory ledger",
        version=__version__,
    )
    app.state.store = store if store is not None else MemoryStore()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(scripts_router, prefix="/api/v1")
    app.include_router(employees_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
