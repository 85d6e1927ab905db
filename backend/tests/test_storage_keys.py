import pytest

from services.storage_keys import chunk_key, clip_key, manifest_key, segment_key


def test_clip_key() -> None:
    assert clip_key("ep1", "clip9") == "ep1/clips/clip9/clip.mp4"


@pytest.mark.parametrize(
    ("index", "expected"),
    [
        (0, "e/clips/c/segments/000.mp4"),
        (5, "e/clips/c/segments/005.mp4"),
        (42, "e/clips/c/segments/042.mp4"),
        (123, "e/clips/c/segments/123.mp4"),
        (1000, "e/clips/c/segments/1000.mp4"),
    ],
)
def test_segment_key_pads_without_truncating(index: int, expected: str) -> None:
    assert segment_key("e", "c", index) == expected


def test_keys_are_deterministic() -> None:
    assert segment_key("e", "c", 7) == segment_key("e", "c", 7)
    assert clip_key("e", "c") == clip_key("e", "c")


def test_tenant_scoped_keys() -> None:
    assert clip_key("e", "c", tenant_id="t1") == "t1/e/clips/c/clip.mp4"
    assert segment_key("e", "c", 3, tenant_id="t1") == "t1/e/clips/c/segments/003.mp4"


def test_chunk_and_manifest_keys() -> None:
    assert chunk_key("t1", "e", "host", "host_001.ts") == "t1/e/videos/host/chunks/host_001.ts"
    assert manifest_key("t1", "e", "host") == "t1/e/videos/host/chunks/host_chunk.m3u8"
