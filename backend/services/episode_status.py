"""Episode lifecycle transitions requested through the API."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from models import TRACK_PROCESSED, Episode, EpisodeStatus, Track
from services.errors import InvalidStatus, PrerequisiteNotMet
from services.status_history import resolve_status

logger = logging.getLogger(__name__)

VALID_REQUESTED_STATUSES = frozenset({EpisodeStatus.READY_FOR_CLIP_GEN.value})


def check_episode_transition(episode: Episode, tracks: Iterable[Track], new_status: str | None) -> str:
    """
    Validate a caller-requested episode status and its prerequisites.

    Returns the normalized status. Moving to "Ready for Clip Gen" requires the
    episode to be at "tracks uploaded" and every track to be processed.
    """
    status = (new_status or "").strip()
    if status not in VALID_REQUESTED_STATUSES:
        raise InvalidStatus(
            f"Status is required and must be one of: {', '.join(sorted(VALID_REQUESTED_STATUSES))}"
        )

    if status == EpisodeStatus.READY_FOR_CLIP_GEN.value:
        reasons: list[str] = []
        current = resolve_status(episode.status_history, episode.status).value
        if current != EpisodeStatus.TRACKS_UPLOADED.value:
            reasons.append(
                f"Episode has status '{current}', expected '{EpisodeStatus.TRACKS_UPLOADED.value}'"
            )
        for track in tracks:
            track_status = resolve_status(track.status_history, track.status).value
            if track_status != TRACK_PROCESSED:
                reasons.append(
                    f"Track '{track.track_name}' has status '{track_status}', expected '{TRACK_PROCESSED}'"
                )
        if reasons:
            logger.info("[episode_status] Episode %s not ready: %s", episode.id, reasons)
            raise PrerequisiteNotMet("Episode is not ready for clip generation", reasons)

    return status
