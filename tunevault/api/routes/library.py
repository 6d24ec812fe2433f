"""Album listing: artist -> album -> tracks, images, original folder."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from tunevault.api.state import AppState, get_state
from tunevault.config import LIBRARY_PREFIX
from tunevault.core.errors import ListingIncomplete
from tunevault.core.indexer import index_library, library_to_dict

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/albums")
def list_albums(state: AppState = Depends(get_state)):
    """List the whole library, grouped by parsed artist and album."""
    try:
        objects = state.store.list_all(LIBRARY_PREFIX)
    except ListingIncomplete as e:
        logger.error("Album listing failed: %s", e)
        return JSONResponse(status_code=500, content={"error": "Error listing files"})
    keys = [o.key for o in objects]
    # Same listing feeds the mapping cache, saving a second full scan
    state.folder_cache.refresh_from(keys)
    return library_to_dict(index_library(keys))
