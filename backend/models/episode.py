from dataclasses import dataclass, field

from .status import StatusEntry


@dataclass
class Episode:
    id: str
    tenant_id: str
    title: str
    episode_number: int
    created_at: str
    updated_at: str
    status: str | None = None                           # legacy scalar, superseded by history
    status_history: list[StatusEntry] = field(default_factory=list)
    summary: str | None = None
    air_date: str | None = None
    platforms: list[str] | None = None
    themes: list[str] | None = None
    series_name: str | None = None


@dataclass
class Track:
    episode_id: str
    track_name: str
    status: str | None = None
    status_history: list[StatusEntry] = field(default_factory=list)
