from dataclasses import dataclass, field
from typing import Any

from .status import StatusEntry


@dataclass(frozen=True)
class TimeRange:
    start_time: str            # "MM:SS" or "HH:MM:SS"
    end_time: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeRange":
        return cls(start_time=data.get("startTime"), end_time=data.get("endTime"))


@dataclass
class Clip:
    episode_id: str
    clip_id: str
    status: str | None = None
    status_history: list[StatusEntry] = field(default_factory=list)
    segments: list[TimeRange] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    clip_storage_key: str | None = None
    file_size: int | None = None
    duration: float | None = None
    processed_at: str | None = None
    processing_started_at: str | None = None
    processing_duration: float | None = None
    processing_metadata: dict[str, Any] | None = None
    error_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class HlsChunk:
    key: str                   # storage key of the .ts chunk
    filename: str
    start: float               # seconds from track start
    end: float
    duration: float
    index: int


@dataclass
class HlsManifest:
    episode_id: str
    track_name: str
    total_duration: float
    chunks: list[HlsChunk]
    version: int | None = None
    target_duration: int | None = None

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True)
class ChunkMapping:
    chunk_key: str
    filename: str
    start_offset: float        # offset into the chunk where extraction begins
    end_offset: float
    duration: float
    chunk_index: int
    mapping_index: int


@dataclass(frozen=True)
class ChunkBoundaries:
    first_chunk_index: int
    last_chunk_index: int

    @property
    def chunk_count(self) -> int:
        if self.first_chunk_index < 0 or self.last_chunk_index < 0:
            return 0
        return self.last_chunk_index - self.first_chunk_index + 1
