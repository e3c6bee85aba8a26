"""Export HAC grades to YAML.

Usage:
    python -m hac_session --config hac.yaml [--period 2-2025] [--all-periods]
                          [--district ID] [--weights PATH] [--output PATH]
"""
import argparse
import asyncio
import logging
from pathlib import Path
import sys
from typing import Any

import aiohttp
import yaml

from .config import HACConfig, load_config
from .exceptions import HACConfigError
from .hac_client import HACClient
from .models import Course, MarkingPeriod, Student
from .weights import NeutralWeightLookup, TableWeightLookup, WeightLookup

_LOGGER = logging.getLogger(__name__)


def student_to_dict(student: Student) -> dict[str, str]:
    return {
        "student_id": student.student_id,
        "name": student.name,
        "birthdate": student.birthdate,
        "counselor": student.counselor,
        "building": student.building,
        "grade": student.grade,
        "language": student.language,
    }


def course_to_dict(course: Course) -> dict[str, Any]:
    return {
        "name": course.name,
        "score": course.score,
        "weight": course.weight,
        "credits": course.credits,
        "missing_category_weights": course.missing_category_weights,
        "categories": {
            name: {
                "points_earned": category.points_earned,
                "points_possible": category.points_possible,
                "weight": category.weight,
                "missing_weight": category.missing_weight,
            }
            for name, category in course.categories.items()
        },
        "assignments": [
            {
                "due_date": assignment.due_date,
                "assigned_date": assignment.assigned_date,
                "name": assignment.name,
                "category": assignment.category,
                "score": assignment.score,
                "total_points": assignment.total_points,
                "weight": assignment.weight,
                "weighted_score": assignment.weighted_score,
                "weighted_total_points": assignment.weighted_total_points,
                "strike_through": assignment.strike_through,
            }
            for assignment in course.assignments
        ],
    }


def marking_period_to_dict(marking_period: MarkingPeriod) -> dict[str, Any]:
    return {
        "period": marking_period.period,
        "courses": [course_to_dict(course) for course in marking_period.courses],
    }


def load_weights(path: Path | None) -> WeightLookup:
    """Read a district -> course -> multiplier table, if one was given."""
    if path is None:
        return NeutralWeightLookup()
    try:
        with open(path, "r", encoding="utf-8") as f:
            table = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as err:
        raise HACConfigError(f"Could not read weight table {path}: {err}") from err
    if not isinstance(table, dict):
        raise HACConfigError(f"{path} must map districts to course weights")
    return TableWeightLookup(table)


async def export_grades(
    config: HACConfig,
    weight_lookup: WeightLookup,
    district: str,
    periods: list[str],
    all_periods: bool,
) -> dict[str, Any] | None:
    """Log in and collect the profile and the requested marking periods."""
    async with aiohttp.ClientSession() as session:
        client = HACClient(config, session, weight_lookup)

        if not await client.login():
            _LOGGER.error("Login failed")
            return None

        profile = await client.fetch_profile()
        if not profile:
            _LOGGER.warning("Could not read student profile (%s)", profile.error)

        listing = await client.list_periods_with_current_grades(district)
        if not listing:
            _LOGGER.error("Could not read marking periods (%s)", listing.error)
            return None

        wanted = list(listing.periods) if all_periods else periods
        for period in wanted:
            if period == listing.current:
                continue
            if period not in listing.periods:
                _LOGGER.warning("Marking period %s is not offered, skipping", period)
                continue
            result = await client.fetch_grades(district, period, listing.postback)
            if not result:
                _LOGGER.warning("Could not fetch marking period %s (%s)", period, result.error)

        return {
            "student": student_to_dict(profile.student),
            "current_period": listing.current,
            "available_periods": list(listing.periods),
            "marking_periods": [
                marking_period_to_dict(marking_period)
                for marking_period in client.marking_periods
            ],
        }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Export grades from Home Access Center")
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="YAML file with host, username, password and hac_name",
    )
    parser.add_argument(
        "--district",
        type=str,
        default="",
        help="District identifier passed to the course weight table",
    )
    parser.add_argument(
        "--weights",
        type=Path,
        default=None,
        help="YAML table of district -> course name -> credit multiplier",
    )
    parser.add_argument(
        "--period",
        action="append",
        default=[],
        help="Report card run to fetch besides the current one (repeatable, e.g. 2-2025)",
    )
    parser.add_argument(
        "--all-periods",
        action="store_true",
        help="Fetch every report card run the portal offers",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output YAML file path (default: stdout)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)
        weight_lookup = load_weights(args.weights)
    except HACConfigError as err:
        _LOGGER.error("%s", err)
        return 1

    report = asyncio.run(
        export_grades(config, weight_lookup, args.district, args.period, args.all_periods)
    )
    if report is None:
        return 1

    dump_options = {
        "default_flow_style": False,
        "sort_keys": False,
        "allow_unicode": True,
        "width": 1000,
    }
    if args.output is None:
        yaml.safe_dump(report, sys.stdout, **dump_options)
        return 0

    try:
        with open(args.output, "w", encoding="utf-8") as f:
            yaml.safe_dump(report, f, **dump_options)
    except OSError as err:
        _LOGGER.error("Failed to write output: %s", err)
        return 1

    _LOGGER.info("Wrote %d marking periods to %s", len(report["marking_periods"]), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
