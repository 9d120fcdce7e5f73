"""
Catalogue Service - Handles fetching and caching unit offerings
"""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd
import requests

from config import CACHE_DIR, CATALOGUE_API_KEY, CATALOGUE_API_URL
from models import Offering, Unit

logger = logging.getLogger(__name__)

HEADERS = {
    'accept': 'application/json',
    'x-api-key': CATALOGUE_API_KEY
} if CATALOGUE_API_KEY else {'accept': 'application/json'}

REQUIRED_COLUMNS = ["unitCode", "unitName", "activity", "day", "time", "room", "teachingStaff"]


class InvalidUnitCode(ValueError):
    pass


def get_cache_path(unit_code: str) -> Path:
    """Get the cache file path for a unit code; the path must stay inside CACHE_DIR"""
    if not unit_code or "/" in unit_code or "\\" in unit_code or ".." in unit_code:
        raise InvalidUnitCode(f"Invalid unit code: {unit_code!r}")
    path = CACHE_DIR / f"{unit_code}.json"
    if path.resolve().parent != CACHE_DIR.resolve():
        raise InvalidUnitCode(f"Invalid unit code: {unit_code!r}")
    return path


def fetch_unit_data(unit_code: str) -> Optional[Dict]:
    """Fetch a unit and its offerings from the catalogue API"""
    cache_path = get_cache_path(unit_code)
    if not CATALOGUE_API_URL:
        return None

    url = f"{CATALOGUE_API_URL}/units/{unit_code}"

    try:
        response = requests.get(url, headers=HEADERS, timeout=10)
        if response.status_code == 200:
            data = response.json()
            if data and "unitCode" in data:
                with open(cache_path, 'w') as f:
                    json.dump(data, f, indent=2)
                return data
        logger.warning("Catalogue returned %s for unit %s", response.status_code, unit_code)
    except (requests.RequestException, ValueError) as e:
        logger.warning("Error fetching unit %s: %s", unit_code, e)

    return None


def get_unit_data(unit_code: str, use_cache: bool = True) -> Optional[Dict]:
    """Get unit data, using cache if available"""
    if use_cache:
        cache_path = get_cache_path(unit_code)
        if cache_path.exists():
            try:
                with open(cache_path, 'r') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable cache file %s: %s", cache_path, e)

    return fetch_unit_data(unit_code)


def unit_from_record(record: Dict) -> Unit:
    """Build a Unit from an API/cache record ('offerings' or 'classes' list)."""
    rows = record.get("offerings")
    if rows is None:
        rows = record.get("classes", [])
    return Unit(
        unit_code=str(record.get("unitCode", "")),
        unit_name=str(record.get("unitName", "")),
        offerings=tuple(Offering.from_dict(row) for row in rows),
    )


def get_units(unit_codes: Iterable[str]) -> Dict[str, Unit]:
    """Look up several units; codes that cannot be found are left out."""
    units = {}
    for code in unit_codes:
        try:
            data = get_unit_data(code)
        except InvalidUnitCode as e:
            logger.warning("%s", e)
            continue
        if not data:
            logger.warning("Unit %s not found in catalogue", code)
            continue
        units[code] = unit_from_record(data)
    return units


def load_catalogue_csv(path, period: Optional[str] = None) -> Dict[str, Unit]:
    """
    Load a class export (one row per offering) into units keyed by unit code.
    If `period` is given only rows whose periodName matches are kept.
    """
    df = pd.read_csv(path, dtype=str).fillna("")

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Catalogue CSV is missing columns: {', '.join(missing)}")

    if period is not None:
        if "periodName" not in df.columns:
            raise ValueError("Catalogue CSV has no periodName column to filter on")
        df = df[df["periodName"] == period]

    units = {}
    for unit_code, rows in df.groupby("unitCode", sort=False):
        units[unit_code] = Unit(
            unit_code=unit_code,
            unit_name=rows["unitName"].iloc[0],
            offerings=tuple(Offering.from_dict(row) for row in rows.to_dict(orient="records")),
        )
    logger.info("Loaded %d units from %s", len(units), path)
    return units
