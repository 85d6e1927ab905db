from dataclasses import dataclass
from enum import Enum


class ClipStatus(str, Enum):
    DETECTED = "detected"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"
    REVIEWED = "reviewed"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"


class EpisodeStatus(str, Enum):
    DRAFT = "Draft"
    TRACKS_UPLOADED = "tracks uploaded"
    READY_FOR_CLIP_GEN = "Ready for Clip Gen"


# Tracks reuse the clip vocabulary for their own preprocessing state.
TRACK_PROCESSED = ClipStatus.PROCESSED.value


@dataclass(frozen=True)
class StatusEntry:
    status: str                # status label, e.g. "Draft" or a ClipStatus value
    timestamp: str             # ISO-8601 UTC, e.g. "2024-01-01T00:00:00.000Z"

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status, "timestamp": self.timestamp}


@dataclass(frozen=True)
class ResolvedStatus:
    """Current status of a record plus where it came from ("history" or "legacy")."""

    value: str | None
    source: str | None = None
