"""Clip REST API: read a clip, record processing results, fetch a download URL."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models import Clip, ClipStatus
from routes.deps import get_request_context, http_exception, identify
from services.clip_record import build_clip_update
from services.episode_response import format_clip
from services.errors import PipelineError
from services.gcs import generate_clip_url
from services.store import apply_clip_update, clips

router = APIRouter(tags=["clips"])
logger = logging.getLogger(__name__)


class ClipUpdateRequest(BaseModel):
    """Partial update; only the fields the caller sends are forwarded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    clip_storage_key: str | None = None
    file_size: int | None = None
    status: ClipStatus | None = None
    processing_started_at: str | None = None
    duration: float | None = None
    processing_metadata: dict[str, Any] | None = None
    error: dict[str, Any] | str | None = None


class ClipUrlResponse(BaseModel):
    url: str


def _get_clip(tenant_id: str, episode_id: str, clip_id: str) -> Clip:
    clip = clips.get((tenant_id, episode_id, clip_id))
    if clip is None:
        raise HTTPException(
            status_code=404,
            detail=f"Clip with ID '{clip_id}' was not found in episode '{episode_id}'",
        )
    return clip


@router.get("/episodes/{episode_id}/clips/{clip_id}")
def get_clip(
    episode_id: str,
    clip_id: str,
    request_context: dict[str, Any] = Depends(get_request_context),
) -> dict[str, Any]:
    identity = identify({"episodeId": episode_id}, request_context)
    clip = _get_clip(identity.tenant_id, identity.episode_id, clip_id)
    return format_clip(clip, identity.episode_id)


@router.patch("/episodes/{episode_id}/clips/{clip_id}")
def update_clip_record(
    episode_id: str,
    clip_id: str,
    body: ClipUpdateRequest,
    request_context: dict[str, Any] = Depends(get_request_context),
) -> dict[str, Any]:
    """Record clip processing results and return the sparse update that was applied."""
    identity = identify({"episodeId": episode_id}, request_context)
    clip = _get_clip(identity.tenant_id, identity.episode_id, clip_id)

    request = {
        "episodeId": identity.episode_id,
        "clipId": clip_id,
        **body.model_dump(mode="json", by_alias=True, exclude_unset=True),
    }
    try:
        update = build_clip_update(request)
    except PipelineError as exc:
        raise http_exception(exc) from exc

    apply_clip_update(clip, update)
    logger.info("[clips] Clip %s/%s updated to status=%s", episode_id, clip_id, update["status"])
    return update


@router.get("/episodes/{episode_id}/clips/{clip_id}/url", response_model=ClipUrlResponse)
def get_clip_url(
    episode_id: str,
    clip_id: str,
    request_context: dict[str, Any] = Depends(get_request_context),
) -> ClipUrlResponse:
    identity = identify({"episodeId": episode_id}, request_context)
    clip = _get_clip(identity.tenant_id, identity.episode_id, clip_id)
    if not clip.clip_storage_key:
        raise HTTPException(status_code=404, detail=f"Clip '{clip_id}' has no stored file yet")
    url = generate_clip_url(clip.clip_storage_key, download_name=f"{clip_id}.mp4")
    return ClipUrlResponse(url=url)
