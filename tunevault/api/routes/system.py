"""Liveness check and folder mapping cache invalidation."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tunevault.api.state import AppState, get_state

router = APIRouter()


class MessageResponse(BaseModel):
    message: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/test", response_model=MessageResponse)
def test():
    """Return a fixed message so clients can check the backend is up."""
    return MessageResponse(message="Backend is working!", timestamp=_now())


@router.get("/clear-cache", response_model=MessageResponse)
def clear_cache(state: AppState = Depends(get_state)):
    """Drop the folder mapping cache; the next lookup lists the bucket again."""
    state.folder_cache.invalidate()
    return MessageResponse(message="Cache cleared successfully", timestamp=_now())
