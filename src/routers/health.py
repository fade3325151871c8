"""
Health check router with analyzer configuration status.
"""
from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint.

    Reports whether the analyzer was configured at startup.
    """
    analyzer = getattr(request.app.state, "analyzer", None)
    return {
        "status": "healthy",
        "service": "ratemyspeak-backend",
        "analyzer": "configured" if analyzer is not None else "not_configured",
        "model": analyzer.config.model if analyzer is not None else None,
        "runs": analyzer.runs if analyzer is not None else None,
    }
