import logging

from flask import Flask, jsonify, request

from activity_grouper import group_activities_by_unit
from availability_filter import availability_from_windows, filter_by_availability, normalize_availability
from catalogue_service import InvalidUnitCode, get_unit_data, get_units, unit_from_record
from config import CATALOGUE_API_URL, LOG_LEVEL
from models import Offering, Unit
from time_utils import TimeFormatError

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = Flask(__name__)

if not CATALOGUE_API_URL:
    logger.warning("CATALOGUE_API_URL not set. Only cached units can be looked up.")


class BadRequest(Exception):
    pass


def units_from_payload(data):
    """Units given inline take precedence over unit codes looked up in the catalogue."""
    if data.get("units"):
        units = {}
        for code, unit in data["units"].items():
            if not isinstance(unit, dict):
                raise BadRequest(f"Unit {code} must be an object")
            units[code] = Unit(
                unit_code=code,
                unit_name=unit.get("unitName", ""),
                offerings=tuple(Offering.from_dict(o) for o in unit.get("offerings", [])),
            )
        return units

    unit_codes = data.get("unitCodes", [])
    if not unit_codes:
        raise BadRequest("No units provided")
    units = get_units(unit_codes)
    missing = [code for code in unit_codes if code not in units]
    if missing:
        raise BadRequest(f"Units not found: {', '.join(missing)}")
    return units


def availability_from_payload(data):
    if "availabilityWindows" in data:
        return availability_from_windows(data["availabilityWindows"])
    return normalize_availability(data.get("availability", {}))


@app.route("/api/filter", methods=["POST"])
def api_filter():
    """Filter units by the student's availability and group offerings by activity"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"success": False, "error": "Expected a JSON object"}), 400

    try:
        units = units_from_payload(data)
        availability = availability_from_payload(data)
    except (BadRequest, TimeFormatError, AttributeError, TypeError) as e:
        return jsonify({"success": False, "error": str(e)}), 400

    try:
        outcome = filter_by_availability(units, availability)
        if not outcome.feasible:
            return jsonify({
                "success": False,
                "error": "Cannot build a schedule from the given availability",
                "unitCode": outcome.unit_code,
                "activity": outcome.activity,
                "warnings": outcome.warnings,
            }), 422

        grouped = group_activities_by_unit(outcome.units)
        return jsonify({
            "success": True,
            "units": [unit.as_dict() for unit in grouped],
            "warnings": outcome.warnings,
        })
    except Exception as e:
        logger.exception("Filtering failed")
        return jsonify({"success": False, "error": str(e)}), 500


@app.route("/api/units/<path:unit_code>")
def api_unit(unit_code):
    """Get a unit and its offerings from the catalogue"""
    try:
        data = get_unit_data(unit_code.strip())
    except InvalidUnitCode as e:
        return jsonify({"success": False, "error": str(e)}), 400
    if not data:
        return jsonify({"success": False, "error": f"Unit not found: {unit_code}"}), 404

    unit = unit_from_record(data)
    return jsonify({
        "success": True,
        "unit": {
            "unitCode": unit.unit_code,
            "unitName": unit.unit_name,
            "offerings": [o.as_dict() for o in unit.offerings],
        },
    })


if __name__ == "__main__":
    app.run(debug=True, port=5000)
