"""Quarter-hour segment keys.

HFP-sink writes one blob per quarter hour, so a day has 24 * 4 = 96 slots.
Segment numbering restarts every hour (1 = :00, 2 = :15, 3 = :30, 4 = :45).
"""

from __future__ import annotations

from dataclasses import dataclass

HOURS_PER_DAY = 24
SEGMENTS_PER_HOUR = 4
SEGMENT_MINUTES = 15
DAY_END_LABEL = "24:00"


@dataclass(frozen=True, order=True)
class SegmentKey:
    hour: int  # 0-23
    segment: int  # 1-4

    def __post_init__(self) -> None:
        if not 0 <= self.hour < HOURS_PER_DAY:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 1 <= self.segment <= SEGMENTS_PER_HOUR:
            raise ValueError(f"segment out of range: {self.segment}")

    @property
    def start_minute(self) -> int:
        """Minutes since midnight at which this segment starts."""
        return self.hour * 60 + (self.segment - 1) * SEGMENT_MINUTES

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{(self.segment - 1) * SEGMENT_MINUTES:02d}"

    def successor(self) -> SegmentKey | None:
        """Next segment of the same day, None after 23:45."""
        if self.segment < SEGMENTS_PER_HOUR:
            return SegmentKey(self.hour, self.segment + 1)
        if self.hour + 1 < HOURS_PER_DAY:
            return SegmentKey(self.hour + 1, 1)
        return None

    def follows(self, other: SegmentKey) -> bool:
        """True if self comes immediately after other."""
        if self.hour == other.hour:
            return self.segment == other.segment + 1
        return other.segment == SEGMENTS_PER_HOUR and self.segment == 1 and self.hour == other.hour + 1


def all_day_keys() -> list[SegmentKey]:
    """All 96 keys of a day in chronological order."""
    return [
        SegmentKey(hour, segment)
        for hour in range(HOURS_PER_DAY)
        for segment in range(1, SEGMENTS_PER_HOUR + 1)
    ]
