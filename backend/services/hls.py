"""Planning over a track's HLS chunk playlist: which chunks cover a time range."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from models import ChunkBoundaries, ChunkMapping, HlsChunk, HlsManifest, TimeRange
from services.errors import InvalidManifest, InvalidSegment
from services.storage_keys import chunk_key
from services.time_codec import parse_time_code, validate_time_range

logger = logging.getLogger(__name__)

_EXTINF_RE = re.compile(r"#EXTINF:([\d.]+)")
DURATION_TOLERANCE_SECONDS = 0.1


def _header_int(line: str) -> int | None:
    try:
        return int(line.split(":", 1)[1])
    except ValueError:
        return None


def parse_hls_manifest(
    text: str,
    episode_id: str,
    track_name: str,
    *,
    tenant_id: str,
) -> HlsManifest:
    """Parse an .m3u8 playlist into chunks laid end to end from time 0."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidManifest("Invalid manifest content: must be a non-empty string")

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if not lines[0].startswith("#EXTM3U"):
        raise InvalidManifest("Invalid M3U8 format: missing #EXTM3U header")

    chunks: list[HlsChunk] = []
    current_time = 0.0
    version: int | None = None
    target_duration: int | None = None

    for i, line in enumerate(lines):
        if line.startswith("#EXT-X-VERSION:"):
            version = _header_int(line)
        elif line.startswith("#EXT-X-TARGETDURATION:"):
            target_duration = _header_int(line)
        elif line.startswith("#EXTINF:"):
            match = _EXTINF_RE.match(line)
            try:
                duration = float(match.group(1)) if match else None
            except ValueError:
                duration = None
            if duration is None:
                logger.warning("[hls] Invalid #EXTINF format at line %d: %s", i, line)
                continue
            if duration <= 0:
                logger.warning("[hls] Invalid segment duration %s at line %d", duration, i)
                continue

            next_line = lines[i + 1] if i + 1 < len(lines) else None
            if not next_line or next_line.startswith("#"):
                logger.warning("[hls] Missing segment filename after #EXTINF at line %d", i)
                continue

            chunks.append(
                HlsChunk(
                    key=chunk_key(tenant_id, episode_id, track_name, next_line),
                    filename=next_line,
                    start=current_time,
                    end=current_time + duration,
                    duration=duration,
                    index=len(chunks),
                )
            )
            current_time += duration

    if not chunks:
        raise InvalidManifest("No valid segments found in manifest")

    return HlsManifest(
        episode_id=episode_id,
        track_name=track_name,
        total_duration=current_time,
        chunks=chunks,
        version=version,
        target_duration=target_duration,
    )


def map_range_to_chunks(
    time_range: TimeRange | Mapping[str, Any],
    chunks: list[HlsChunk],
) -> list[ChunkMapping]:
    """Per-chunk extraction offsets for every chunk overlapping ``time_range``."""
    start, end = validate_time_range(time_range)
    if not chunks:
        raise InvalidSegment("Invalid HLS segments: must be a non-empty list")

    relevant = [chunk for chunk in chunks if chunk.start < end and chunk.end > start]
    if not relevant:
        raise InvalidSegment(
            f"No chunks found for range {start}s - {end}s. Available range: 0 - {chunks[-1].end}s"
        )

    mappings: list[ChunkMapping] = []
    for mapping_index, chunk in enumerate(relevant):
        start_offset = max(0.0, start - chunk.start)
        end_offset = min(chunk.duration, end - chunk.start)
        mappings.append(
            ChunkMapping(
                chunk_key=chunk.key,
                filename=chunk.filename,
                start_offset=start_offset,
                end_offset=end_offset,
                duration=end_offset - start_offset,
                chunk_index=chunk.index,
                mapping_index=mapping_index,
            )
        )

    mapped = sum(mapping.duration for mapping in mappings)
    if abs(mapped - (end - start)) > DURATION_TOLERANCE_SECONDS:
        logger.warning("[hls] Duration mismatch: expected %ss, got %ss", end - start, mapped)
    return mappings


def find_chunk_boundaries(
    time_range: TimeRange | Mapping[str, Any],
    chunks: list[HlsChunk],
) -> ChunkBoundaries:
    start, end = validate_time_range(time_range)
    first = -1
    last = -1
    for i, chunk in enumerate(chunks):
        if first == -1 and chunk.end > start:
            first = i
        if chunk.start < end:
            last = i
    return ChunkBoundaries(first_chunk_index=first, last_chunk_index=last)


def estimate_processing_seconds(time_range: TimeRange | Mapping[str, Any], chunk_count: int) -> int:
    """Rough extraction cost: twice the range length plus half of it per extra chunk."""
    if isinstance(time_range, Mapping):
        time_range = TimeRange.from_dict(time_range)
    duration = parse_time_code(time_range.end_time) - parse_time_code(time_range.start_time)
    return math.ceil(duration * 2 + (chunk_count - 1) * duration * 0.5)
