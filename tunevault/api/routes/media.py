"""Audio and image retrieval: stream through the API or hand out a signed URL.

Both modes share the key resolver; clients always send Artist/Album/File and
never see bucket credentials.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from tunevault.api.state import AppState, get_state
from tunevault.config import SIGNED_URL_EXPIRES
from tunevault.core.errors import (
    CandidatesExhausted,
    ListingIncomplete,
    MalformedRequest,
    RangeNotSatisfiable,
    UpstreamTransient,
)
from tunevault.core.resolver import resolve_key
from tunevault.core.streaming import StreamResult, locate, open_stream, parse_range_header

router = APIRouter()
logger = logging.getLogger(__name__)


class SignedUrlResponse(BaseModel):
    url: str


def _candidates(state: AppState, key: str) -> List[str]:
    return resolve_key(key, state.folder_cache.get_mapping())


def _stream_response(result: StreamResult) -> StreamingResponse:
    return StreamingResponse(
        result.iter_bytes(),
        status_code=result.status_code,
        headers=result.headers,
    )


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": message},
    )


@router.get("/audio-proxy")
def audio_proxy(
    key: str,
    range_header: Optional[str] = Header(None, alias="Range"),
    state: AppState = Depends(get_state),
):
    """Stream a track (e.g. key=Artist/Album/01 - Song.mp3); honors Range."""
    logger.info("Audio request for key: %s (range=%s)", key, range_header)
    # Reject a bad Range before anything touches the bucket
    try:
        range_spec = parse_range_header(range_header) if range_header else None
    except MalformedRequest as e:
        return JSONResponse(
            status_code=400,
            content={"error": "Malformed request", "message": str(e)},
        )
    try:
        result = open_stream(
            state.store,
            _candidates(state, key),
            requested_key=key,
            range_header=range_header,
            default_content_type="audio/mpeg",
            range_spec=range_spec,
        )
    except RangeNotSatisfiable as e:
        return JSONResponse(
            status_code=416,
            content={"error": "Range not satisfiable", "message": str(e)},
            headers={"Content-Range": f"bytes */{e.size}"},
        )
    except CandidatesExhausted as e:
        if e.not_found:
            logger.warning("Audio not found for key %s", key)
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Audio not found",
                    "requestedKey": key,
                    "message": "File not found in bucket. Check if the file exists at the expected path.",
                },
            )
        logger.error("Audio retrieval failed for key %s: %s", key, e.last_error)
        return _server_error(str(e.last_error))
    except ListingIncomplete as e:
        logger.error("Folder mapping refresh failed: %s", e)
        return _server_error(str(e))
    return _stream_response(result)


@router.get("/image-proxy")
def image_proxy(key: str, state: AppState = Depends(get_state)):
    """Stream album artwork (e.g. key=Artist/Album/cover.jpg)."""
    try:
        result = open_stream(
            state.store,
            _candidates(state, key),
            requested_key=key,
            default_content_type="image/jpeg",
        )
    except (CandidatesExhausted, ListingIncomplete) as e:
        logger.warning("Image not found for key %s: %s", key, e)
        return JSONResponse(status_code=404, content={"error": "Image not found"})
    return _stream_response(result)


def _signed_url(state: AppState, key: str, not_found_error: str):
    try:
        info = locate(state.store, _candidates(state, key), requested_key=key)
        url = state.store.presign(info.key, SIGNED_URL_EXPIRES)
    except CandidatesExhausted as e:
        if e.not_found:
            return JSONResponse(
                status_code=404,
                content={"error": not_found_error, "requestedKey": key},
            )
        logger.error("Signing failed for key %s: %s", key, e.last_error)
        return JSONResponse(status_code=500, content={"error": "Error generating URL"})
    except (ListingIncomplete, UpstreamTransient) as e:
        logger.error("Signing failed for key %s: %s", key, e)
        return JSONResponse(status_code=500, content={"error": "Error generating URL"})
    return SignedUrlResponse(url=url)


@router.get("/song", response_model=SignedUrlResponse)
def song_url(key: str, state: AppState = Depends(get_state)):
    """Return a temporary direct URL for a track."""
    return _signed_url(state, key, "Audio not found")


@router.get("/image", response_model=SignedUrlResponse)
def image_url(key: str, state: AppState = Depends(get_state)):
    """Return a temporary direct URL for album artwork."""
    return _signed_url(state, key, "Image not found")
