"""Episode REST API: read an episode and request lifecycle transitions."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from routes.deps import get_request_context, http_exception, identify
from services.episode_response import format_episode
from services.episode_status import check_episode_transition
from services.errors import PipelineError
from services.status_history import build_status_update
from services.store import apply_episode_update, episodes, tracks

router = APIRouter(tags=["episodes"])
logger = logging.getLogger(__name__)


class EpisodeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    status: str | None
    episode_number: int
    created_at: str
    updated_at: str
    summary: str | None = None
    air_date: str | None = None
    platforms: list[str] | None = None
    themes: list[str] | None = None
    series_name: str | None = None


class EpisodeStatusRequest(BaseModel):
    status: str | None = None


@router.get(
    "/episodes/{episode_id}",
    response_model=EpisodeResponse,
    response_model_exclude_unset=True,
)
def get_episode(
    episode_id: str,
    request_context: dict[str, Any] = Depends(get_request_context),
) -> dict[str, Any]:
    identity = identify({"episodeId": episode_id}, request_context)
    episode = episodes.get((identity.tenant_id, identity.episode_id))
    if episode is None:
        raise HTTPException(status_code=404, detail=f"Episode with ID '{episode_id}' was not found")
    return format_episode(episode, identity.episode_id)


@router.put("/episodes/{episode_id}/status", status_code=204, response_class=Response)
def update_episode_status(
    episode_id: str,
    body: EpisodeStatusRequest,
    request_context: dict[str, Any] = Depends(get_request_context),
) -> Response:
    """Append a caller-requested status to the episode's history."""
    identity = identify({"episodeId": episode_id}, request_context)
    key = (identity.tenant_id, identity.episode_id)
    episode = episodes.get(key)
    if episode is None:
        raise HTTPException(status_code=404, detail=f"Episode with ID '{episode_id}' was not found")

    try:
        status = check_episode_transition(episode, tracks.get(key, []), body.status)
    except PipelineError as exc:
        raise http_exception(exc) from exc

    apply_episode_update(episode, build_status_update(episode.status_history, status))
    logger.info("[episodes] Episode %s moved to %r", episode_id, status)
    return Response(status_code=204)
