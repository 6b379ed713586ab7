# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from lib.database import ContactDatabase


def get_database(request: Request) -> ContactDatabase:
    """
    Get the storage accessor owned by the running application.
    """
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    """
    Get the settings the application was built with.
    """
    return request.app.state.settings


# Type aliases for dependency injection
DatabaseDep = Annotated[ContactDatabase, Depends(get_database)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
