"""Coalesce missing segments into human-readable time ranges.

    08-2 08-3 08-4 09-1 11-3   ->   ["08:15 - 09:15", "11:30 - 11:45"]

Ranges are half-open: the end bound is the start of the first segment after
the gap, or "24:00" when the gap runs to the end of the day.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from hfp_monitor.gaps.segments import DAY_END_LABEL, SEGMENT_MINUTES, SegmentKey


@dataclass(frozen=True)
class GapRange:
    start: SegmentKey
    end: SegmentKey | None  # exclusive; None = end of day
    segments: int

    @property
    def minutes(self) -> int:
        return self.segments * SEGMENT_MINUTES

    @property
    def label(self) -> str:
        end_label = self.end.label if self.end is not None else DAY_END_LABEL
        return f"{self.start.label} - {end_label}"


def coalesce_ranges(gaps: Sequence[SegmentKey]) -> list[GapRange]:
    """Merge chronologically ordered gaps into minimal contiguous ranges."""
    if not gaps:
        return []

    ranges: list[GapRange] = []
    start = prev = gaps[0]
    count = 1
    for cur in gaps[1:]:
        if cur.follows(prev):
            prev = cur
            count += 1
            continue
        ranges.append(GapRange(start, prev.successor(), count))
        start = prev = cur
        count = 1

    ranges.append(GapRange(start, prev.successor(), count))
    return ranges


def coalesce(gaps: Sequence[SegmentKey]) -> list[str]:
    """Same as coalesce_ranges but rendered as 'HH:MM - HH:MM' strings."""
    return [r.label for r in coalesce_ranges(gaps)]


def format_gap_alert(target_date: str, ranges: Sequence[str]) -> str:
    return (
        f"Found gap(s) in HFP data ({target_date}): [{' '.join(ranges)}]. "
        "Investigate and fix the problem as soon as possible."
    )
