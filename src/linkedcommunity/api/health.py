"""Health check endpoint.

Learn: Liveness only — answers as long as the process is serving
requests. It does not touch the database, so a slow DB never makes the
load balancer kill healthy workers.
"""

from fastapi import APIRouter

from linkedcommunity import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "OK", "message": "Server is running", "version": __version__}
