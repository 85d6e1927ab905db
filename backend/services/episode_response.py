"""External representations of episodes and clips."""

from __future__ import annotations

from typing import Any

from models import Clip, Episode
from services.status_history import resolve_status

# (attribute, response key) pairs copied only when the stored value is truthy.
EPISODE_OPTIONAL_FIELDS = (
    ("summary", "summary"),
    ("air_date", "airDate"),
    ("platforms", "platforms"),
    ("themes", "themes"),
    ("series_name", "seriesName"),
)

CLIP_OPTIONAL_FIELDS = (
    ("clip_storage_key", "clipStorageKey"),
    ("file_size", "fileSize"),
    ("duration", "duration"),
    ("processed_at", "processedAt"),
    ("processing_duration", "processingDuration"),
    ("processing_metadata", "processingMetadata"),
    ("error_info", "errorInfo"),
)


def format_episode(episode: Episode, episode_id: str) -> dict[str, Any]:
    """
    Build the episode read response.

    Status comes from the history when it yields one, else from the legacy
    ``status`` field. Empty strings, empty lists and zero count as absent for
    the optional fields.
    """
    response: dict[str, Any] = {
        "id": episode_id,
        "title": episode.title,
        "status": resolve_status(episode.status_history, episode.status).value,
        "episodeNumber": episode.episode_number,
        "createdAt": episode.created_at,
        "updatedAt": episode.updated_at,
    }
    for attr, key in EPISODE_OPTIONAL_FIELDS:
        value = getattr(episode, attr)
        if value:
            response[key] = value
    return response


def format_clip(clip: Clip, episode_id: str) -> dict[str, Any]:
    response: dict[str, Any] = {
        "id": clip.clip_id,
        "episodeId": episode_id,
        "status": resolve_status(clip.status_history, clip.status).value,
        "segments": [
            {"startTime": segment.start_time, "endTime": segment.end_time}
            for segment in clip.segments
        ],
        "createdAt": clip.created_at,
        "updatedAt": clip.updated_at,
    }
    for attr, key in CLIP_OPTIONAL_FIELDS:
        value = getattr(clip, attr)
        if value:
            response[key] = value
    return response
