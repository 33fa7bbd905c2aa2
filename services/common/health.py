from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse, summary="Liveness")
async def root() -> str:
    """Target group health check path."""
    return "OK"


@router.get("/health", summary="Health check")
async def health() -> dict:
    return {"status": "healthy"}
