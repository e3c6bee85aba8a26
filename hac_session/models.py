"""Data records returned by the HAC session client."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .const import (
    PLACEHOLDER_POINTS_EARNED,
    PLACEHOLDER_POINTS_POSSIBLE,
    PLACEHOLDER_WEIGHT,
)


class SessionStatus(str, Enum):
    """Coarse outcome of a session operation."""

    PASSED = "passed"
    FAILED = "failed"


class UserStatus(str, Enum):
    """Login status published to listeners."""

    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


class AuthState(str, Enum):
    """States of the login handshake."""

    LOGGED_OUT = "logged_out"
    AWAITING_TOKEN = "awaiting_token"
    AUTHENTICATING = "authenticating"
    LOGGED_IN = "logged_in"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why an operation failed."""

    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    MARKUP = "markup"
    NOT_LOGGED_IN = "not_logged_in"


@dataclass(frozen=True)
class Student:
    """Registration details of the logged-in student."""

    student_id: str
    name: str
    birthdate: str
    counselor: str
    building: str
    grade: str
    language: str

    @classmethod
    def empty(cls) -> Student:
        """Return the blank record used when the profile could not be read."""
        return cls("", "", "", "", "", "", "")


@dataclass(frozen=True)
class Assignment:
    """One row of a course's assignment table.

    Every value is kept exactly as the portal formats it. ``strike_through``
    marks assignments the school voided but still lists; ``custom`` is for
    entries added by the caller rather than scraped.
    """

    due_date: str
    assigned_date: str
    name: str
    category: str
    score: str
    total_points: str
    weight: str
    weighted_score: str
    weighted_total_points: str
    strike_through: bool = False
    custom: bool = False


@dataclass(frozen=True)
class CategoryWeight:
    """Points and weight of one grading category."""

    points_earned: str
    points_possible: str
    weight: str
    missing_weight: bool = False

    @classmethod
    def placeholder(cls) -> CategoryWeight:
        """Neutral entry for a category the portal gave no weight for."""
        return cls(
            PLACEHOLDER_POINTS_EARNED,
            PLACEHOLDER_POINTS_POSSIBLE,
            PLACEHOLDER_WEIGHT,
            missing_weight=True,
        )


@dataclass(frozen=True)
class Course:
    """A course and its grades for one marking period."""

    name: str
    score: str
    weight: float
    credits: float
    assignments: tuple[Assignment, ...] = ()
    categories: Mapping[str, CategoryWeight] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignments", tuple(self.assignments))
        object.__setattr__(self, "categories", MappingProxyType(dict(self.categories)))

    @property
    def missing_category_weights(self) -> bool:
        """True when at least one category weight had to be synthesized."""
        return any(category.missing_weight for category in self.categories.values())


@dataclass(frozen=True)
class MarkingPeriod:
    """Courses of one report card run."""

    period: str
    courses: tuple[Course, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "courses", tuple(self.courses))


@dataclass(frozen=True)
class PeriodListing:
    """Report card runs offered by the Assignments page.

    ``postback`` holds the hidden form fields that have to be sent back
    unchanged, apart from the run selector, to load another run.
    """

    current: str
    periods: tuple[str, ...]
    postback: dict[str, str]


@dataclass(frozen=True)
class LoginResult:
    """Outcome of login()."""

    status: SessionStatus
    error: FailureKind | None = None

    def __bool__(self) -> bool:
        return self.status is SessionStatus.PASSED


@dataclass(frozen=True)
class ProfileResult:
    """Outcome of fetch_profile()."""

    status: SessionStatus
    student: Student = field(default_factory=Student.empty)
    error: FailureKind | None = None

    def __bool__(self) -> bool:
        return self.status is SessionStatus.PASSED


@dataclass(frozen=True)
class PeriodsResult:
    """Outcome of list_periods() and list_periods_with_current_grades()."""

    status: SessionStatus
    current: str = ""
    periods: tuple[str, ...] = ()
    postback: dict[str, str] = field(default_factory=dict)
    marking_period: MarkingPeriod | None = None
    error: FailureKind | None = None

    def __bool__(self) -> bool:
        return self.status is SessionStatus.PASSED


@dataclass(frozen=True)
class GradesResult:
    """Outcome of fetch_grades()."""

    status: SessionStatus
    marking_period: MarkingPeriod | None = None
    error: FailureKind | None = None

    def __bool__(self) -> bool:
        return self.status is SessionStatus.PASSED
