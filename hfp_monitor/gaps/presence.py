"""Per-day presence tracking of quarter-hour blobs."""

from __future__ import annotations

import logging

from hfp_monitor.gaps.blob_name import parse_blob_name
from hfp_monitor.gaps.segments import SegmentKey, all_day_keys

logger = logging.getLogger(__name__)


class PresenceSet:
    """Observed flag for each of the 96 segments of one target day.

    Built fresh for every monitor run and owned by it.
    """

    def __init__(self, target_date: str) -> None:
        self.target_date = target_date
        self._observed: dict[SegmentKey, bool] = {key: False for key in all_day_keys()}
        self.skipped_names: list[str] = []

    @classmethod
    def build(cls, target_date: str) -> PresenceSet:
        return cls(target_date)

    def __len__(self) -> int:
        return len(self._observed)

    def is_observed(self, key: SegmentKey) -> bool:
        return self._observed[key]

    def mark(self, blob_name: str) -> bool:
        """Mark the segment of blob_name as observed.

        Returns True when the name belongs to the target day. Names of other
        days are ignored: blobs tagged for the target day may start on the
        neighbouring day when traffic runs past midnight.
        """
        parsed = parse_blob_name(blob_name)
        if parsed is None:
            logger.warning("Skipping blob with unexpected name: %s", blob_name)
            self.skipped_names.append(blob_name)
            return False
        if parsed.date != self.target_date:
            return False
        self._observed[parsed.key] = True
        return True

    @property
    def observed_count(self) -> int:
        return sum(1 for seen in self._observed.values() if seen)

    def snapshot(self) -> dict[SegmentKey, bool]:
        return dict(self._observed)


def extract_gaps(presence: PresenceSet) -> list[SegmentKey]:
    """Unobserved segments in chronological order. Empty means no gaps."""
    observed = presence.snapshot()
    return [key for key in sorted(observed) if not observed[key]]
