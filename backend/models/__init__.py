from .clip import ChunkBoundaries, ChunkMapping, Clip, HlsChunk, HlsManifest, TimeRange
from .episode import Episode, Track
from .status import ClipStatus, EpisodeStatus, ResolvedStatus, StatusEntry, TRACK_PROCESSED

__all__ = [
    "Episode",
    "Track",
    "Clip",
    "TimeRange",
    "HlsChunk",
    "HlsManifest",
    "ChunkMapping",
    "ChunkBoundaries",
    "ClipStatus",
    "EpisodeStatus",
    "ResolvedStatus",
    "StatusEntry",
    "TRACK_PROCESSED",
]
