"""Concat manifest for the external stitching step (ffmpeg concat demuxer input)."""

from collections.abc import Sequence

from services.errors import EmptySegmentList


def build_concat_manifest(segment_keys: Sequence[str] | None) -> str:
    """One ``file '<key>'`` line per segment, in order, without a trailing newline."""
    if not segment_keys or isinstance(segment_keys, str):
        raise EmptySegmentList("Segment files list is required and must not be empty")
    return "\n".join(f"file '{key}'" for key in segment_keys)
