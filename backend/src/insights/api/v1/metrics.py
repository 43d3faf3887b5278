"""
Real-time metrics API endpoints.

Provides endpoints for:
- GET  /v1/metrics                  - Current overview metrics snapshot
- POST /v1/metrics/refresh          - Fetch once and return the new snapshot
- POST /v1/metrics/polling/start    - Start (or restart) polling
- POST /v1/metrics/polling/stop     - Stop polling
- PUT  /v1/metrics/polling/config   - Change the polling cadence
- POST /v1/metrics/visibility       - Report dashboard page visibility
"""

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from insights.api.deps import get_controller, get_visibility
from insights.schemas.metric import MetricsSnapshot
from insights.services.polling_controller import PollingController, PollingState
from insights.services.visibility import ManualVisibilitySource

logger = structlog.get_logger(__name__)

router = APIRouter()


class PollingStatus(BaseModel):
    """Poller state."""

    model_config = ConfigDict(populate_by_name=True)

    state: PollingState
    interval_ms: int = Field(..., alias="intervalMs")


class PollingConfig(BaseModel):
    """Polling cadence update."""

    model_config = ConfigDict(populate_by_name=True)

    interval_ms: int = Field(..., gt=0, alias="intervalMs", description="Polling interval in milliseconds")


class VisibilityUpdate(BaseModel):
    """Dashboard page visibility report."""

    hidden: bool = Field(..., description="True when the dashboard tab is hidden")


class VisibilityStatus(BaseModel):
    hidden: bool
    changed: bool
    state: PollingState


def _status(controller: PollingController) -> PollingStatus:
    return PollingStatus(state=controller.state, interval_ms=controller.interval_ms)


@router.get("/metrics", response_model=MetricsSnapshot)
async def get_metrics(controller: PollingController = Depends(get_controller)) -> MetricsSnapshot:
    """Current overview metrics with loading and error flags."""
    return controller.get_snapshot()


@router.post("/metrics/refresh", response_model=MetricsSnapshot)
async def refresh_metrics(controller: PollingController = Depends(get_controller)) -> MetricsSnapshot:
    """
    Fetch once without touching the polling timer.

    Fetch failures do not fail the request; they show up as the
    snapshot's ``error``.
    """
    await controller.refresh()
    return controller.get_snapshot()


@router.post("/metrics/polling/start", response_model=PollingStatus)
async def start_polling(controller: PollingController = Depends(get_controller)) -> PollingStatus:
    controller.start()
    return _status(controller)


@router.post("/metrics/polling/stop", response_model=PollingStatus)
async def stop_polling(controller: PollingController = Depends(get_controller)) -> PollingStatus:
    controller.stop()
    return _status(controller)


@router.put("/metrics/polling/config", response_model=PollingStatus)
async def configure_polling(
    config: PollingConfig,
    controller: PollingController = Depends(get_controller),
) -> PollingStatus:
    """
    Change the polling interval.

    A running poller is restarted so the new cadence applies right away.
    """
    controller.configure(config.interval_ms)
    if controller.state is PollingState.POLLING:
        controller.start()

    logger.info("polling_interval_updated", interval_ms=config.interval_ms, state=controller.state.value)
    return _status(controller)


@router.post("/metrics/visibility", response_model=VisibilityStatus)
async def update_visibility(
    update: VisibilityUpdate,
    visibility: ManualVisibilitySource = Depends(get_visibility),
    controller: PollingController = Depends(get_controller),
) -> VisibilityStatus:
    """Hidden pauses polling; visible resumes it with an immediate fetch."""
    changed = visibility.set_hidden(update.hidden)
    return VisibilityStatus(hidden=visibility.hidden, changed=changed, state=controller.state)
