"""
Activity Grouper - reshapes filtered units for the downstream scheduler
"""
from typing import Dict, List, Mapping

from models import ActivityGroup, FilteredUnit, GroupedUnit

SCHEDULE_DAYS = ["MON", "TUE", "WED", "THU", "FRI"]


def group_activities_by_unit(filtered: Mapping[str, FilteredUnit]) -> List[GroupedUnit]:
    """
    Bucket each unit's offerings by activity, keeping the order activities
    were first seen. Nothing is dropped or validated here.
    """
    grouped = []
    for unit_code, unit in filtered.items():
        buckets: Dict[str, list] = {}
        for offering in unit.offerings:
            buckets.setdefault(offering.activity, []).append(offering)

        grouped.append(GroupedUnit(
            unit_code=unit_code,
            unit_name=unit.unit_name,
            activities=tuple(
                ActivityGroup(activity_type=activity, offerings=tuple(offerings))
                for activity, offerings in buckets.items()
            ),
        ))
    return grouped


def initialize_schedule_data() -> Dict:
    """Empty per-day booking lists and final schedule for one scheduling run."""
    return {
        "scheduledTimesPerDay": {day: [] for day in SCHEDULE_DAYS},
        "finalSchedule": {},
    }
