"""FastAPI dependencies for the dashboard runtime and services."""
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, Request, status

from insights.config import settings
from insights.runtime import DashboardRuntime
from insights.schemas.error import ErrorCode, REMEDIATION_HINTS
from insights.services.campaign_service import CampaignService
from insights.services.chart_service import ChartService
from insights.services.export_service import ExportService
from insights.services.polling_controller import PollingController
from insights.services.visibility import ManualVisibilitySource


def get_runtime(request: Request) -> DashboardRuntime:
    """
    Runtime built by the application lifespan.

    Raises:
        HTTPException: 503 if the runtime is missing or already disposed
    """
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None or runtime.controller.is_disposed:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "code": ErrorCode.CONTROLLER_UNAVAILABLE,
                "message": "Metrics poller is not running",
                "remediation": REMEDIATION_HINTS[ErrorCode.CONTROLLER_UNAVAILABLE],
            },
        )
    return runtime


def get_controller(request: Request) -> PollingController:
    return get_runtime(request).controller


def get_visibility(request: Request) -> ManualVisibilitySource:
    return get_runtime(request).visibility


@lru_cache(maxsize=1)
def get_campaign_service() -> CampaignService:
    return CampaignService()


@lru_cache(maxsize=1)
def get_chart_service() -> ChartService:
    return ChartService()


@lru_cache(maxsize=1)
def get_export_service() -> ExportService:
    return ExportService(
        company_name=settings.company_name,
        brand_primary_color=settings.brand_primary_color,
    )


def get_optional_controller(request: Request) -> Optional[PollingController]:
    """Controller if one is live, else None. For endpoints that degrade to static data."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None or runtime.controller.is_disposed:
        return None
    return runtime.controller
