"""
Domain records shared by the filter, the grouper and the API.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


# ======================================================================
# Catalogue
# ======================================================================

@dataclass(frozen=True)
class Offering:
    """
    One scheduled instance of an activity for a unit.

    activity:       "Lecture" / "Tutorial" / "Workshop" ...
    day:            "MON" ... "SUN"
    time:           "2:30pm - 4:30pm"
    room:           "GP VIRTOLT ..." / "KG VIRTOLT ..." for online sessions
    teaching_staff: passed through unchanged
    """

    activity: str
    day: str
    time: str
    room: str = ""
    teaching_staff: str = ""
    class_type: str = ""
    period: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "Offering":
        return cls(
            activity=str(data.get("activity") or ""),
            day=str(data.get("day") or ""),
            time=str(data.get("time") or ""),
            room=str(data.get("room") or ""),
            teaching_staff=str(data.get("teachingStaff") or data.get("teaching_staff") or ""),
            class_type=str(data.get("classType") or data.get("class_type") or ""),
            period=str(data.get("periodName") or data.get("period") or ""),
        )

    def as_dict(self) -> Dict:
        return {
            "activity": self.activity,
            "day": self.day,
            "time": self.time,
            "room": self.room,
            "teachingStaff": self.teaching_staff,
            "classType": self.class_type,
            "periodName": self.period,
        }


@dataclass(frozen=True)
class Unit:
    unit_code: str
    unit_name: str
    offerings: tuple = ()

    def activities(self) -> List[str]:
        """Distinct activity tags in order of first appearance."""
        seen = []
        for offering in self.offerings:
            if offering.activity not in seen:
                seen.append(offering.activity)
        return seen


# ======================================================================
# Filter output
# ======================================================================

@dataclass(frozen=True)
class FilteredUnit:
    unit_name: str
    offerings: tuple = ()


@dataclass(frozen=True)
class FilterSuccess:
    """Every activity of every unit has at least one usable offering."""

    units: Dict[str, FilteredUnit]
    warnings: List[str] = field(default_factory=list)

    @property
    def feasible(self) -> bool:
        return True


@dataclass(frozen=True)
class Infeasible:
    """
    No physical or virtual offering of `activity` in `unit_code` fits the
    availability, so no schedule exists for the batch.
    """

    unit_code: str
    activity: str
    warnings: List[str] = field(default_factory=list)

    @property
    def feasible(self) -> bool:
        return False


# ======================================================================
# Grouper output
# ======================================================================

@dataclass(frozen=True)
class ActivityGroup:
    activity_type: str
    offerings: tuple = ()

    def as_dict(self) -> Dict:
        return {
            "activityType": self.activity_type,
            "offerings": [o.as_dict() for o in self.offerings],
        }


@dataclass(frozen=True)
class GroupedUnit:
    unit_code: str
    unit_name: str
    activities: tuple = ()

    def group(self, activity_type: str) -> Optional[ActivityGroup]:
        for group in self.activities:
            if group.activity_type == activity_type:
                return group
        return None

    def as_dict(self) -> Dict:
        return {
            "unitCode": self.unit_code,
            "unitName": self.unit_name,
            "activities": [g.as_dict() for g in self.activities],
        }
