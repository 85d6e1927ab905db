from models import Clip, ClipStatus, Episode, EpisodeStatus, StatusEntry, TimeRange
from models.clip import ChunkBoundaries


def test_episode_defaults() -> None:
    episode = Episode(
        id="ep-1",
        tenant_id="tenant-a",
        title="Pilot",
        episode_number=1,
        created_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-01T00:00:00.000Z",
    )
    assert episode.status is None
    assert episode.status_history == []
    assert episode.platforms is None


def test_clip_status_values() -> None:
    assert [status.value for status in ClipStatus] == [
        "detected",
        "processing",
        "processed",
        "failed",
        "reviewed",
        "approved",
        "rejected",
        "published",
    ]
    assert ClipStatus("published") is ClipStatus.PUBLISHED
    assert EpisodeStatus.READY_FOR_CLIP_GEN == "Ready for Clip Gen"


def test_clip_defaults_and_time_range() -> None:
    clip = Clip(episode_id="ep-1", clip_id="clip-1")
    assert clip.segments == []
    assert clip.error_info is None
    assert TimeRange.from_dict({"startTime": "00:01", "endTime": "00:02"}) == TimeRange("00:01", "00:02")


def test_status_entry_to_dict() -> None:
    assert StatusEntry("Draft", "2024-01-01T00:00:00.000Z").to_dict() == {
        "status": "Draft",
        "timestamp": "2024-01-01T00:00:00.000Z",
    }


def test_chunk_boundaries_count() -> None:
    assert ChunkBoundaries(2, 4).chunk_count == 3
    assert ChunkBoundaries(-1, -1).chunk_count == 0
