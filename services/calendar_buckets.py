"""
Calendar Bucketer
Groups entries by calendar day for the training heatmap
"""

from collections import defaultdict
from datetime import date, timedelta
from enum import Enum
from typing import Dict, List

from .models import ExerciseRecord, PrEntry

UNKNOWN_EXERCISE = "unknown"


class Intensity(str, Enum):
    """Heatmap cell shading"""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def intensity_for_count(count: int) -> Intensity:
    if count <= 0:
        return Intensity.NONE
    if count <= 2:
        return Intensity.LOW
    if count <= 4:
        return Intensity.MEDIUM
    return Intensity.HIGH


def group_by_date(entries: List[PrEntry]) -> Dict[date, List[PrEntry]]:
    """Entries keyed by calendar day; entries with unparseable dates are skipped"""
    grouped: Dict[date, List[PrEntry]] = defaultdict(list)
    for entry in entries:
        if entry.day is not None:
            grouped[entry.day].append(entry)
    return dict(grouped)


class CalendarBuckets:
    """
    Day-keyed view over the entry list.

    Built once per refresh; answers intensity and per-day detail lookups
    for the calendar view.
    """

    def __init__(self, entries: List[PrEntry]):
        self.by_date = group_by_date(entries)

    def count(self, day: date) -> int:
        return len(self.by_date.get(day, []))

    def intensity(self, day: date) -> Intensity:
        return intensity_for_count(self.count(day))

    def day_detail(self, day: date, exercises: List[ExerciseRecord]) -> List[Dict]:
        """
        Entries logged on `day`, each with its exercise name.

        Entries whose reference does not resolve to a known exercise are
        labelled "unknown".
        """
        names = {ex.id.lower(): ex.name for ex in exercises}
        return [
            {'entry': entry, 'exercise_name': names.get(entry.ref.exercise_id, UNKNOWN_EXERCISE)}
            for entry in self.by_date.get(day, [])
        ]

    def heatmap(self, start: date, end: date) -> List[Dict]:
        """One cell per day from start to end inclusive"""
        cells = []
        day = start
        while day <= end:
            count = self.count(day)
            cells.append({
                'date': day.isoformat(),
                'count': count,
                'intensity': intensity_for_count(count).value,
            })
            day += timedelta(days=1)
        return cells
