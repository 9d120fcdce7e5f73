"""
Availability Filter - keeps the offerings that fit inside a student's free time

Every activity of every unit must end up with at least one offering, either a
physical one that fits or an online one. If any activity cannot be covered the
whole batch is infeasible.
"""
import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, Union

from config import VIRTUAL_ROOM_PREFIXES
from models import FilteredUnit, FilterSuccess, Infeasible, Offering, Unit
from time_utils import DAY_NAMES, TimeFormatError, day_abbreviation_to_full_name, discretize, parse_range

logger = logging.getLogger(__name__)

AvailabilityMap = Mapping[str, Iterable[str]]
FilterOutcome = Union[FilterSuccess, Infeasible]

FULL_DAY_NAMES = frozenset(DAY_NAMES.values())


def is_virtual(offering: Offering) -> bool:
    """Online sessions are recognised by their room prefix."""
    return offering.room.startswith(VIRTUAL_ROOM_PREFIXES)


def offering_slots(offering: Offering) -> List[str]:
    """The 30-minute slot labels an offering occupies. Raises TimeFormatError."""
    start, end = parse_range(offering.time)
    return discretize(start, end)


def offering_fits(offering: Offering, availability: AvailabilityMap) -> bool:
    """
    True if every 30-minute slot of the offering is free on its day.
    An unknown day never fits; an unparseable time raises TimeFormatError.
    """
    day = day_abbreviation_to_full_name(offering.day)
    if day is None:
        return False

    available = availability.get(day) or ()
    if not available:
        return False
    return all(slot in available for slot in offering_slots(offering))


def virtual_fallback(unit: Unit, activity: str) -> List[Offering]:
    """Online offerings of an activity, taken from the unfiltered unit."""
    return [o for o in unit.offerings if o.activity == activity and is_virtual(o)]


def _warn(warnings: List[str], message: str):
    logger.warning(message)
    warnings.append(message)


def _filter_unit(unit: Unit, availability: AvailabilityMap, warnings: List[str]):
    """
    Returns the FilteredUnit, or the first activity nothing can cover.
    """
    by_activity: Dict[str, List[Offering]] = {}

    for offering in unit.offerings:
        day = day_abbreviation_to_full_name(offering.day)
        if day is None:
            _warn(warnings, f"{unit.unit_code}: unrecognized day abbreviation {offering.day!r}")
            continue
        # Online rooms only come in through the fallback below
        if is_virtual(offering):
            continue

        available = availability.get(day) or ()
        if not available:
            continue
        try:
            slots = offering_slots(offering)
        except TimeFormatError as e:
            _warn(warnings, f"{unit.unit_code}: skipping {offering.activity} on {offering.day}: {e}")
            continue

        if all(slot in available for slot in slots):
            if not slots:
                _warn(warnings, f"{unit.unit_code}: empty time range {offering.time!r} accepted")
            by_activity.setdefault(offering.activity, []).append(offering)

    for activity in unit.activities():
        if by_activity.get(activity):
            continue
        online = virtual_fallback(unit, activity)
        if not online:
            return activity
        logger.debug("%s: using %d online %s offering(s)", unit.unit_code, len(online), activity)
        by_activity[activity] = online

    # Activities that fit physically come first, fallbacks after
    flattened = []
    for offerings in by_activity.values():
        flattened.extend(offerings)
    return FilteredUnit(unit_name=unit.unit_name, offerings=tuple(flattened))


def filter_by_availability(units: Mapping[str, Unit], availability: AvailabilityMap) -> FilterOutcome:
    """
    Filter every unit against the availability map.

    Returns FilterSuccess with one FilteredUnit per unit code, or Infeasible
    naming the first unit/activity that could not be covered. Diagnostics are
    collected in `warnings` on either result.
    """
    warnings: List[str] = []
    filtered: Dict[str, FilteredUnit] = {}

    for unit_code, unit in units.items():
        logger.debug("Processing unit %s (%d offerings)", unit_code, len(unit.offerings))
        result = _filter_unit(unit, availability, warnings)
        if not isinstance(result, FilteredUnit):
            logger.info("No offering of %s for %s fits the availability", result, unit_code)
            return Infeasible(unit_code=unit_code, activity=result, warnings=warnings)
        filtered[unit_code] = result

    return FilterSuccess(units=filtered, warnings=warnings)


# ======================================================================
# Availability input
# ======================================================================

def normalize_availability(raw: Mapping[str, Iterable[str]]) -> Dict[str, FrozenSet[str]]:
    """
    Turn submitted availability into {full day name: frozenset of labels}.
    Accepts 'MON' style keys too; anything else is dropped.
    """
    availability: Dict[str, FrozenSet[str]] = {}
    for day, slots in (raw or {}).items():
        full_day = day if day in FULL_DAY_NAMES else day_abbreviation_to_full_name(day)
        if full_day is None:
            logger.warning("Ignoring availability for unknown day %r", day)
            continue
        if isinstance(slots, str):
            raise TypeError(f"Availability for {day} must be a list of slots, not a string")
        labels = frozenset(str(s).strip() for s in (slots or []))
        availability[full_day] = availability.get(full_day, frozenset()) | labels
    return availability


def availability_from_windows(windows: Mapping[str, Iterable[str]]) -> Dict[str, FrozenSet[str]]:
    """
    {'Monday': ['9:00am - 12:00pm']} -> {'Monday': {'9:00', '9:30', ..., '11:30'}}
    """
    slots = {}
    for day, ranges in (windows or {}).items():
        if isinstance(ranges, str):
            raise TypeError(f"Availability windows for {day} must be a list of ranges, not a string")
        labels = []
        for window in ranges or []:
            start, end = parse_range(window)
            labels.extend(discretize(start, end))
        slots[day] = labels
    return normalize_availability(slots)
