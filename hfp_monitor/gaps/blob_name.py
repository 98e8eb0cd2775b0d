"""HFP blob name parsing.

Current blob name format: ``yyyy-MM-ddTHH-S<anything>.csv.zst``, e.g.
``2024-05-01T08-2_VP.csv.zst``. Only date, hour and segment are read; the
rest of the name is opaque.
"""

from __future__ import annotations

from dataclasses import dataclass

from hfp_monitor.gaps.segments import HOURS_PER_DAY, SEGMENTS_PER_HOUR, SegmentKey

BLOB_SUFFIX = ".csv.zst"


@dataclass(frozen=True)
class ParsedBlobName:
    date: str  # "YYYY-MM-DD"
    hour: int
    segment: int

    @property
    def key(self) -> SegmentKey:
        return SegmentKey(self.hour, self.segment)

    @property
    def hour_key(self) -> str:
        """Date + hour, e.g. '2024-05-01T08'. Same-hour blobs share freshness."""
        return f"{self.date}T{self.hour:02d}"


def parse_blob_name(name: str) -> ParsedBlobName | None:
    """Parse '2024-05-01T08-2...' -> ParsedBlobName('2024-05-01', 8, 2).

    Returns None for names that do not follow the format.
    """
    date, sep, rest = name.partition("T")
    if not sep or not date:
        return None

    tail = rest[:4]
    if len(tail) < 4 or tail[2] != "-":
        return None
    hour_str, segment_str = tail[:2], tail[3]
    if not (tail.isascii() and hour_str.isdigit() and segment_str.isdigit()):
        return None

    hour, segment = int(hour_str), int(segment_str)
    if hour >= HOURS_PER_DAY or not 1 <= segment <= SEGMENTS_PER_HOUR:
        return None
    return ParsedBlobName(date=date, hour=hour, segment=segment)
