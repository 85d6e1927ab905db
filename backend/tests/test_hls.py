import pytest

from models import TimeRange
from services.errors import InvalidManifest, InvalidSegment
from services.hls import (
    estimate_processing_seconds,
    find_chunk_boundaries,
    map_range_to_chunks,
    parse_hls_manifest,
)

PLAYLIST = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:10
#EXTINF:10.0,
host_000.ts
#EXTINF:10.0,
host_001.ts
#EXTINF:0,
skipped.ts
#EXTINF:5.5,
host_002.ts
#EXT-X-ENDLIST
"""


def _manifest():
    return parse_hls_manifest(PLAYLIST, "ep-1", "host", tenant_id="tenant-a")


def test_parse_hls_manifest() -> None:
    manifest = _manifest()
    assert manifest.version == 3
    assert manifest.target_duration == 10
    assert manifest.chunk_count == 3
    assert manifest.total_duration == pytest.approx(25.5)
    assert [chunk.filename for chunk in manifest.chunks] == ["host_000.ts", "host_001.ts", "host_002.ts"]
    assert manifest.chunks[2].start == 20.0
    assert manifest.chunks[2].index == 2
    assert manifest.chunks[0].key == "tenant-a/ep-1/videos/host/chunks/host_000.ts"


@pytest.mark.parametrize("text", ["", "not a playlist\n", "#EXTM3U\n#EXT-X-VERSION:3\n", "#EXTM3U\n#EXTINF:4.0,\n"])
def test_parse_hls_manifest_rejects(text: str) -> None:
    with pytest.raises(InvalidManifest):
        parse_hls_manifest(text, "ep-1", "host", tenant_id="tenant-a")


def test_map_range_within_single_chunk() -> None:
    mappings = map_range_to_chunks({"startTime": "00:02", "endTime": "00:07"}, _manifest().chunks)
    assert len(mappings) == 1
    assert mappings[0].start_offset == 2
    assert mappings[0].end_offset == 7
    assert mappings[0].duration == 5


def test_map_range_across_chunks() -> None:
    mappings = map_range_to_chunks(TimeRange("00:05", "00:22"), _manifest().chunks)
    assert [m.chunk_index for m in mappings] == [0, 1, 2]
    assert [m.mapping_index for m in mappings] == [0, 1, 2]
    assert mappings[0].start_offset == 5
    assert mappings[1].duration == 10
    assert mappings[2].end_offset == 2
    assert sum(m.duration for m in mappings) == pytest.approx(17)


def test_map_range_outside_playlist() -> None:
    with pytest.raises(InvalidSegment, match="No chunks found"):
        map_range_to_chunks(TimeRange("01:00", "01:10"), _manifest().chunks)


def test_map_range_requires_chunks() -> None:
    with pytest.raises(InvalidSegment):
        map_range_to_chunks(TimeRange("00:00", "00:10"), [])


def test_find_chunk_boundaries() -> None:
    boundaries = find_chunk_boundaries(TimeRange("00:05", "00:15"), _manifest().chunks)
    assert (boundaries.first_chunk_index, boundaries.last_chunk_index) == (0, 1)
    assert boundaries.chunk_count == 2


def test_estimate_processing_seconds() -> None:
    assert estimate_processing_seconds(TimeRange("00:00", "00:10"), 1) == 20
    assert estimate_processing_seconds({"startTime": "00:00", "endTime": "00:10"}, 3) == 30
