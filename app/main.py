# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Contacts API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, settings
from app.exceptions import (
    ContactsException,
    contacts_exception_handler,
    validation_exception_handler,
)
from app.routers import contacts, health
from lib.database import ContactDatabase

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The database opens lazily on the first request; shutdown closes it.
    """
    app_settings: Settings = app.state.settings
    logger.info(f"Starting Contacts API in {app_settings.ENVIRONMENT} mode")
    logger.info(f"Contacts database: {app_settings.DATABASE_PATH}")

    yield

    logger.info("Shutting down Contacts API")
    await app.state.database.close()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded settings)

    Returns:
        Configured FastAPI app owning one ContactDatabase
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Contacts API",
        description="""
## Contact Management API

Create, list, update and delete contacts stored in a local SQLite file.

### Validation

| Field | Rule |
|-------|------|
| **firstName** / **lastName** | at least 2 characters |
| **email** | `local@domain.tld` |
| **phoneNumber** | optional leading `+`, then 10+ digits, spaces or dashes |
| **age** | whole number, 1 to 130 |

Invalid payloads are rejected with `400 {"error": "<first failing rule>"}`.

### Quick Start

```bash
curl -X POST http://localhost:8000/contacts \\
  -H "Content-Type: application/json" \\
  -d '{"firstName": "Ada", "lastName": "Lovelace", "email": "ada@x.com", "phoneNumber": "1234567890", "age": 30}'

curl http://localhost:8000/contacts
```
""",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Contacts",
                "description": "Create, read, update and delete contacts",
            },
            {
                "name": "Health",
                "description": "API health checks",
            },
        ],
    )

    app.state.settings = app_settings
    app.state.database = ContactDatabase(app_settings.DATABASE_PATH)

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list if app_settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ContactsException, contacts_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions (storage failures included)."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred"},
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        health.router,
        tags=["Health"]
    )

    app.include_router(
        contacts.router,
        prefix="/contacts",
        tags=["Contacts"]
    )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Contacts API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "contacts": "/contacts",
        }

    return app


# Create FastAPI application
app = create_app()
