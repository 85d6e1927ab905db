"""In-memory episode/track/clip store standing in for the persistence layer."""

from typing import Any

from models import Clip, Episode, StatusEntry, Track

# (tenant_id, episode_id) -> Episode
episodes: dict[tuple[str, str], Episode] = {}
# (tenant_id, episode_id) -> tracks of that episode
tracks: dict[tuple[str, str], list[Track]] = {}
# (tenant_id, episode_id, clip_id) -> Clip
clips: dict[tuple[str, str, str], Clip] = {}

# Wire name -> Clip attribute for fields a sparse update may set.
CLIP_UPDATE_FIELDS = {
    "status": "status",
    "updatedAt": "updated_at",
    "clipStorageKey": "clip_storage_key",
    "fileSize": "file_size",
    "duration": "duration",
    "processedAt": "processed_at",
    "processingDuration": "processing_duration",
    "processingMetadata": "processing_metadata",
    "errorInfo": "error_info",
}


def clear() -> None:
    episodes.clear()
    tracks.clear()
    clips.clear()


def apply_clip_update(clip: Clip, update: dict[str, Any]) -> Clip:
    """Set only the fields present in ``update``; everything else is left as stored."""
    for wire_name, attr in CLIP_UPDATE_FIELDS.items():
        if wire_name in update:
            setattr(clip, attr, update[wire_name])
    # Keep history authoritative: a status write is also a history entry.
    if "status" in update:
        clip.status_history = [
            *clip.status_history,
            StatusEntry(status=update["status"], timestamp=update.get("updatedAt") or ""),
        ]
    return clip


def apply_episode_update(episode: Episode, update: dict[str, Any]) -> Episode:
    if "statusHistory" in update:
        episode.status_history = [
            entry if isinstance(entry, StatusEntry) else StatusEntry(entry["status"], entry["timestamp"])
            for entry in update["statusHistory"]
        ]
    if "status" in update:
        episode.status = update["status"]
    if "updatedAt" in update:
        episode.updated_at = update["updatedAt"]
    return episode
