"""Conversion between human time codes ("MM:SS" / "HH:MM:SS") and seconds."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from models import TimeRange
from services.errors import InvalidDuration, InvalidFormat, InvalidSegment


def parse_time_code(text: str) -> int:
    """
    Parse "MM:SS" or "HH:MM:SS" into whole seconds.

    Fields are base-10 integers; zero padding is optional on input.
    """
    if not text or not isinstance(text, str):
        raise InvalidFormat(f"Invalid time string: {text!r}")

    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise InvalidFormat(f"Time string must be in HH:MM:SS or MM:SS format: {text!r}")

    values: list[int] = []
    for part in parts:
        if not part.isascii() or not part.isdigit():
            raise InvalidFormat(f"Time string has a non-numeric field {part!r}: {text!r}")
        values.append(int(part, 10))

    if len(values) == 2:
        minutes, seconds = values
        return minutes * 60 + seconds
    hours, minutes, seconds = values
    return hours * 3600 + minutes * 60 + seconds


def format_seconds(seconds: float) -> str:
    """Render seconds as zero-padded "HH:MM:SS". Hours are not wrapped at 24."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidDuration(f"Seconds must be a non-negative number, got {seconds!r}")
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        raise InvalidDuration(f"Seconds must be a non-negative number, got {seconds!r}")

    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _as_range(value: TimeRange | Mapping[str, Any]) -> TimeRange:
    if isinstance(value, TimeRange):
        return value
    return TimeRange.from_dict(value)


def total_duration(ranges: Iterable[TimeRange | Mapping[str, Any]] | None) -> int:
    """
    Sum ``end - start`` across ordered time ranges.

    Nothing to sum yields 0. Ranges whose end precedes their start contribute a
    negative delta; malformed endpoints raise InvalidFormat.
    """
    if not ranges:
        return 0
    total = 0
    for item in ranges:
        time_range = _as_range(item)
        total += parse_time_code(time_range.end_time) - parse_time_code(time_range.start_time)
    return total


def validate_time_range(value: TimeRange | Mapping[str, Any] | None) -> tuple[int, int]:
    """Check a single range is well-formed and strictly increasing; return (start, end) seconds."""
    if value is None or not isinstance(value, (TimeRange, Mapping)):
        raise InvalidSegment("Segment must be an object")
    time_range = _as_range(value)
    if not time_range.start_time or not time_range.end_time:
        raise InvalidSegment("Segment must have startTime and endTime")

    start = parse_time_code(time_range.start_time)
    end = parse_time_code(time_range.end_time)
    if start >= end:
        raise InvalidSegment(
            f"Segment startTime ({time_range.start_time}) must be before endTime ({time_range.end_time})"
        )
    return start, end


def validate_range_sequence(ranges: list[TimeRange | Mapping[str, Any]]) -> None:
    """Every range valid and none overlapping the one before it."""
    if not isinstance(ranges, list):
        raise InvalidSegment("Segments must be a list")

    previous_end: int | None = None
    for index, item in enumerate(ranges):
        start, end = validate_time_range(item)
        if previous_end is not None and previous_end > start:
            raise InvalidSegment(
                f"Segment {index - 1} overlaps with segment {index}: "
                f"{format_seconds(previous_end)} > {format_seconds(start)}"
            )
        previous_end = end
