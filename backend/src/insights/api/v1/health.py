"""Health check endpoints for Kubernetes liveness and readiness probes."""
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK, tags=["Health"])
async def health_check() -> dict[str, str]:
    """
    Liveness probe for Kubernetes.

    Returns basic health status if the service is alive (process running).
    Does not look at the metrics poller.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "0.1.0",
    }


@router.get("/health/ready", tags=["Health"])
async def readiness_check(request: Request) -> JSONResponse:
    """
    Readiness probe for Kubernetes.

    Ready once the poller is live and the latest snapshot holds metrics
    without an error.

    Returns:
        JSONResponse: 200 when ready, 503 otherwise, with per-check detail
    """
    checks = {
        "poller": "unknown",
        "metrics": "unknown",
    }
    ready = True

    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None or runtime.controller.is_disposed:
        checks["poller"] = "unavailable"
        checks["metrics"] = "unavailable"
        ready = False
    else:
        controller = runtime.controller
        checks["poller"] = controller.state.value
        snapshot = controller.get_snapshot()
        if snapshot.error:
            logger.warning("metrics_readiness_check_failed", error=snapshot.error)
            checks["metrics"] = "error"
            ready = False
        elif not snapshot.metrics:
            checks["metrics"] = "pending"
            ready = False
        else:
            checks["metrics"] = "available"

    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "checks": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
