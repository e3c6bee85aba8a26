"""Extract HAC data from the portal's server-rendered pages."""
from __future__ import annotations

from collections.abc import Mapping
import logging
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from .const import (
    COURSE_ASSIGNMENTS_ID,
    COURSE_AVERAGE_ID,
    COURSE_CATEGORIES_ID,
    COURSE_CONTAINER_CLASS,
    COURSE_NAME_PREFIX_TOKENS,
    DATA_ROW_CLASS,
    DEFAULT_CREDIT_HOURS,
    DEFAULT_FALLBACK_PERIOD,
    DEFAULT_POSTBACK_FIELDS,
    EVENTVALIDATION_FIELD,
    FIELD_DATABASE,
    FIELD_TOKEN,
    LOGIN_PATH,
    NBSP_PLACEHOLDERS,
    NOT_AVAILABLE,
    PERIOD_FIELD,
    PERIOD_SELECT_ID,
    PROFILE_FIELD_IDS,
    VIEWSTATE_FIELD,
)
from .exceptions import PortalMarkupError
from .models import Assignment, CategoryWeight, Course, PeriodListing, Student
from .weights import WeightLookup

_LOGGER = logging.getLogger(__name__)

ASSIGNMENT_CELL_COUNT = 9
CATEGORY_CELL_COUNT = 5
STRIKE_TAGS = ["strike", "s", "del"]


def make_soup(document: str | BeautifulSoup) -> BeautifulSoup:
    """Parse a page, passing already parsed documents through."""
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document, "lxml")


def _text(element: Tag) -> str:
    """Element text with runs of whitespace collapsed to single spaces."""
    return " ".join(element.get_text().split())


def _or_not_available(value: str) -> str:
    if not value or value in NBSP_PLACEHOLDERS:
        return NOT_AVAILABLE
    return value


# ---------------------------------------------------------------------------
# Login page
# ---------------------------------------------------------------------------


def parse_login_form(document: str | BeautifulSoup, hac_name: str) -> tuple[str, str]:
    """Return the anti-forgery token and database value of the login form.

    Districts that host several databases render ``Database`` as a select;
    the option whose text is ``hac_name`` is used then.
    """
    soup = make_soup(document)

    token_input = soup.find("input", attrs={"name": FIELD_TOKEN})
    token = token_input.get("value", "") if token_input else ""
    if not token:
        raise PortalMarkupError("Login page has no anti-forgery token")
    _LOGGER.debug("Found anti-forgery token (%d characters)", len(token))

    selector = soup.find(id=FIELD_DATABASE)
    if selector is None:
        raise PortalMarkupError("Login page has no database selector")

    database = (selector.get("value") or "").strip()
    if database:
        _LOGGER.debug("Database from login form: %s", database)
        return token, database

    if selector.name != "select":
        raise PortalMarkupError("Database selector is blank and offers no options")

    for option in selector.find_all("option"):
        if option.get_text().strip() == hac_name:
            database = option.get("value", "")
            _LOGGER.debug("Database %s selected for %s", database, hac_name)
            return token, database

    raise PortalMarkupError(f"No database option named {hac_name!r}")


def login_rejected(document: str | BeautifulSoup) -> bool:
    """True when the page's form still posts to the login action."""
    soup = make_soup(document)
    form = soup.find("form")
    if form is None:
        return False
    action_path = urlparse(form.get("action", "")).path.rstrip("/")
    return action_path.lower() == LOGIN_PATH.lower()


# ---------------------------------------------------------------------------
# Report card runs
# ---------------------------------------------------------------------------


def parse_marking_periods(
    document: str | BeautifulSoup,
    *,
    static_fields: Mapping[str, str] | None = None,
    fallback_period: str | None = None,
) -> PeriodListing:
    """Read the report card runs and the postback needed to request one."""
    soup = make_soup(document)

    selector = soup.find(id=PERIOD_SELECT_ID)
    options = selector.find_all("option") if selector else []
    if not options:
        raise PortalMarkupError("No marking periods available, is the session logged in?")

    periods = []
    current = ""
    for option in options:
        value = option.get("value", "")
        periods.append(value)
        if option.has_attr("selected"):
            current = value

    if not current:
        _LOGGER.debug("No marking period is selected, falling back to the default term")

    postback = dict(DEFAULT_POSTBACK_FIELDS if static_fields is None else static_fields)
    postback[VIEWSTATE_FIELD] = _hidden_value(soup, VIEWSTATE_FIELD)
    postback[EVENTVALIDATION_FIELD] = _hidden_value(soup, EVENTVALIDATION_FIELD)
    postback[PERIOD_FIELD] = current or fallback_period or DEFAULT_FALLBACK_PERIOD

    _LOGGER.debug("Found %d marking periods, current: %s", len(periods), current or "none")
    return PeriodListing(current=current, periods=tuple(periods), postback=postback)


def _hidden_value(soup: BeautifulSoup, element_id: str) -> str:
    element = soup.find(id=element_id)
    if element is None:
        _LOGGER.warning("Hidden field %s missing from page", element_id)
        return ""
    return element.get("value", "")


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


def parse_courses(
    document: str | BeautifulSoup,
    *,
    district: str,
    weight_lookup: WeightLookup,
) -> tuple[Course, ...]:
    """Extract every course, with assignments and category weights.

    A course that fails to parse is logged and skipped. Sub-tables are found
    by the course's position among the containers on the page.
    """
    soup = make_soup(document)

    containers = soup.find_all(class_=COURSE_CONTAINER_CLASS)
    if not containers:
        raise PortalMarkupError("Could not get grades, no course containers on page")

    courses = []
    for index, container in enumerate(containers):
        try:
            courses.append(_parse_course(container, index, district, weight_lookup))
        except Exception as err:  # pylint: disable=broad-except
            _LOGGER.warning("Error parsing course %s: %s", index, err)

    _LOGGER.info("Extracted %d of %d courses", len(courses), len(containers))
    return tuple(courses)


def _parse_course(
    container: Tag,
    index: int,
    district: str,
    weight_lookup: WeightLookup,
) -> Course:
    name = parse_course_name(container)
    score = _parse_course_score(container, index)
    assignments = _parse_assignments(container, index)
    categories = _parse_categories(container, index)

    missing = reconcile_categories(assignments, categories)
    if missing:
        _LOGGER.warning(
            "No category weight for %s in %s, using placeholders",
            ", ".join(missing),
            name,
        )

    return Course(
        name=name,
        score=score,
        weight=weight_lookup.weight(district, name),
        credits=DEFAULT_CREDIT_HOURS,
        assignments=tuple(assignments),
        categories=categories,
    )


def parse_course_name(container: Tag) -> str:
    """Course name from the header link, without the section prefix.

    The link reads like ``"ALG2 - 3 Algebra II"``; the first three tokens
    are the course code, a dash and the section.
    """
    link = container.find("a")
    if link is None:
        raise PortalMarkupError("Course header has no link")
    name = " ".join(link.get_text().split()[COURSE_NAME_PREFIX_TOKENS:])
    if not name:
        raise PortalMarkupError(f"Course header {_text(link)!r} has no name")
    return name


def _parse_course_score(container: Tag, index: int) -> str:
    label = container.find(id=COURSE_AVERAGE_ID.format(index=index))
    if label is None:
        return NOT_AVAILABLE
    tokens = label.get_text().split()
    if not tokens:
        return NOT_AVAILABLE
    return tokens[-1].rstrip("%")


def _data_rows(container: Tag, table_id: str) -> list[Tag]:
    table = container.find(id=table_id)
    if table is None:
        return []
    return table.find_all("tr", class_=DATA_ROW_CLASS)


def _parse_assignments(container: Tag, index: int) -> list[Assignment]:
    assignments = []
    for row in _data_rows(container, COURSE_ASSIGNMENTS_ID.format(index=index)):
        cells = row.find_all("td")
        if len(cells) < ASSIGNMENT_CELL_COUNT:
            _LOGGER.debug("Skipping assignment row with %d cells", len(cells))
            continue
        assignments.append(parse_assignment_row(cells))
    return assignments


def parse_assignment_row(cells: list[Tag]) -> Assignment:
    """Build an assignment from the cells of one table row."""
    name_cell = cells[2]
    links = name_cell.find_all("a")
    if links:
        name = " ".join(_text(link) for link in links)
    else:
        name = _text(name_cell)

    return Assignment(
        due_date=_or_not_available(_text(cells[0])),
        assigned_date=_or_not_available(_text(cells[1])),
        name=name,
        category=_text(cells[3]) or NOT_AVAILABLE,
        score=_text(cells[4]) or NOT_AVAILABLE,
        total_points=_text(cells[5]),
        weight=_text(cells[6]),
        weighted_score=_text(cells[7]),
        weighted_total_points=_text(cells[8]),
        strike_through=name_cell.find(STRIKE_TAGS) is not None,
    )


def _parse_categories(container: Tag, index: int) -> dict[str, CategoryWeight]:
    categories = {}
    for row in _data_rows(container, COURSE_CATEGORIES_ID.format(index=index)):
        cells = row.find_all("td")
        if len(cells) < CATEGORY_CELL_COUNT:
            _LOGGER.debug("Skipping category row with %d cells", len(cells))
            continue
        categories[_text(cells[0])] = CategoryWeight(
            points_earned=_text(cells[1]),
            points_possible=_text(cells[2]),
            weight=_text(cells[4]),
        )
    return categories


def reconcile_categories(
    assignments: list[Assignment],
    categories: dict[str, CategoryWeight],
) -> list[str]:
    """Add placeholders for assignment categories with no weight row.

    Mutates ``categories`` and returns the names that were added.
    """
    missing = []
    for assignment in assignments:
        if assignment.category not in categories:
            categories[assignment.category] = CategoryWeight.placeholder()
            missing.append(assignment.category)
    return missing


# ---------------------------------------------------------------------------
# Registration page
# ---------------------------------------------------------------------------


def parse_student(document: str | BeautifulSoup) -> Student:
    """Read the student's registration details."""
    soup = make_soup(document)

    values = {}
    for field_name, element_id in PROFILE_FIELD_IDS.items():
        element = soup.find(id=element_id)
        values[field_name] = _text(element) if element is not None else NOT_AVAILABLE

    if values["name"] != NOT_AVAILABLE:
        values["name"] = format_person_name(values["name"])

    return Student(**values)


def format_person_name(raw_name: str) -> str:
    """Turn ``"Last, First Middle"`` into ``"First Middle Last"``.

    Names without a comma only get their whitespace collapsed. Anything that
    does not split into a family and a given part is returned unchanged.
    """
    if "," not in raw_name:
        return " ".join(raw_name.split()) or raw_name

    family, given = raw_name.split(",", 1)
    family = " ".join(family.split())
    given = " ".join(given.split())
    if not family or not given:
        return raw_name
    return f"{given} {family}"
