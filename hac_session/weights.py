"""Course credit-weight lookups."""
from collections.abc import Mapping
import logging
from typing import Protocol

from .const import DEFAULT_COURSE_WEIGHT

_LOGGER = logging.getLogger(__name__)


class WeightLookup(Protocol):
    """Resolves the GPA multiplier a district gives a course."""

    def weight(self, district: str, course_name: str) -> float:
        """Return the multiplier for ``course_name`` in ``district``."""


class NeutralWeightLookup:
    """Gives every course the same multiplier."""

    def __init__(self, default: float = DEFAULT_COURSE_WEIGHT) -> None:
        self.default = default

    def weight(self, district: str, course_name: str) -> float:
        return self.default


class TableWeightLookup:
    """Looks courses up in a district -> course name -> multiplier table.

    Course names are matched case-insensitively. Unknown districts or
    courses get ``default``.
    """

    def __init__(
        self,
        table: Mapping[str, Mapping[str, float]],
        default: float = DEFAULT_COURSE_WEIGHT,
    ) -> None:
        self.default = default
        self._table = {
            district: {name.casefold(): float(value) for name, value in courses.items()}
            for district, courses in table.items()
        }

    def weight(self, district: str, course_name: str) -> float:
        courses = self._table.get(district)
        if courses is None:
            _LOGGER.debug("No weight table for district %s", district)
            return self.default
        return courses.get(course_name.casefold(), self.default)
