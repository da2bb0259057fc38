"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from dashitoon.core.models.io.common import HealthRead, VersionRead

from ...core import constant

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthRead,
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check() -> HealthRead:
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return HealthRead(status="ok")


@router.get(
    "/version",
    response_model=VersionRead,
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version() -> VersionRead:
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return VersionRead(version=constant.API_VERSION, schema_version=constant.SCHEMA_VERSION)
