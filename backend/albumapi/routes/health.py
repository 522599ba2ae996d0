"""
Album API — Health Check Route
===============================

What:  Liveness endpoint for process supervisors and load balancers.
How:   Reports version, uptime and the configured table. It does not call
       Airtable: every backend call costs API quota and the albums endpoints
       already relay backend failures.
"""

import time

from fastapi import APIRouter, Request

from albumapi import __version__
from albumapi.schemas.album import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service liveness check")
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        table=request.app.state.settings.airtable_table,
    )
