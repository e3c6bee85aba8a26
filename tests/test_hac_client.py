# tests/test_hac_client.py

from urllib.parse import parse_qsl

import aiohttp
import pytest

from hac_session import HACClient, TableWeightLookup
from hac_session.const import PERIOD_FIELD
from hac_session.models import FailureKind, SessionStatus, Student, UserStatus
from tests import pages
from tests.conftest import UndecodableResponse

pytestmark = pytest.mark.anyio

ASSIGNMENTS_URL = "https://hac.example.org/HomeAccess/Content/Student/Assignments.aspx"


def _two_course_page(periods=(("1-2025", False), ("2-2025", True))):
    return pages.assignments_page(
        periods=periods,
        courses=[
            pages.course_block(
                0,
                assignments=[
                    pages.assignment_row(name="Unit Test", category="Tests"),
                    pages.assignment_row(name="Worksheet", category="Homework"),
                ],
                categories=[pages.category_row("Tests")],
            ),
            pages.course_block(1, header="CHEM - 5 Chemistry", average="Average 81.5%"),
        ],
    )


# ---------------------------------------------------------------------------
# Not logged in
# ---------------------------------------------------------------------------


async def test_operations_fail_before_login(client, session):
    profile = await client.fetch_profile()
    periods = await client.list_periods()
    current = await client.list_periods_with_current_grades("example")
    grades = await client.fetch_grades("example", "2-2025", {"__VIEWSTATE": "x"})

    for result in (profile, periods, current, grades):
        assert result.status is SessionStatus.FAILED
        assert result.error is FailureKind.NOT_LOGGED_IN
    assert profile.student == Student.empty()
    assert client.marking_periods == ()
    assert session.requests == []


async def test_operations_fail_after_rejected_login(client, session):
    session.queue(pages.login_page(), pages.login_page())
    assert not await client.login()

    result = await client.fetch_grades("example", "2-2025", {})

    assert result.error is FailureKind.NOT_LOGGED_IN
    assert client.status is UserStatus.LOGGED_OUT
    assert client.marking_periods == ()


# ---------------------------------------------------------------------------
# Login status
# ---------------------------------------------------------------------------


async def test_login_updates_status_and_notifies(client, session):
    calls = []
    client.add_listener(lambda: calls.append(client.status))
    session.queue(pages.login_page(), pages.landing_page())

    result = await client.login()

    assert result
    assert client.status is UserStatus.LOGGED_IN
    assert calls == [UserStatus.LOGGED_IN]


async def test_removed_listener_is_not_called(client, session):
    calls = []
    remove = client.add_listener(lambda: calls.append(1))
    remove()
    session.queue(pages.login_page(), pages.landing_page())

    await client.login()

    assert calls == []


async def test_failing_listener_does_not_break_login(client, session):
    def broken():
        raise RuntimeError("listener failed")

    client.add_listener(broken)
    session.queue(pages.login_page(), pages.landing_page())

    assert await client.login()


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


async def test_fetch_profile(logged_in_client, session):
    session.queue(pages.registration_page())

    result = await logged_in_client.fetch_profile()

    assert result.status is SessionStatus.PASSED
    assert result.student.name == "Jane Marie Doe"
    assert result.student.student_id == "123456"
    assert session.requests[0].method == "GET"
    assert session.requests[0].url.endswith("/HomeAccess/Content/Student/Registration.aspx")


async def test_fetch_profile_transport_failure(logged_in_client, session):
    session.queue(aiohttp.ClientConnectionError("down"))

    result = await logged_in_client.fetch_profile()

    assert result.error is FailureKind.TRANSPORT
    assert result.student == Student.empty()


async def test_fetch_profile_undecodable_body(logged_in_client, session):
    session.queue(UndecodableResponse())

    result = await logged_in_client.fetch_profile()

    assert result.status is SessionStatus.FAILED
    assert result.error is FailureKind.TRANSPORT


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------


async def test_list_periods(logged_in_client, session):
    session.queue(_two_course_page())

    result = await logged_in_client.list_periods()

    assert result.status is SessionStatus.PASSED
    assert result.current == "2-2025"
    assert result.periods == ("1-2025", "2-2025")
    assert result.postback[PERIOD_FIELD] == "2-2025"
    assert result.marking_period is None
    assert logged_in_client.marking_periods == ()
    assert (session.requests[0].method, session.requests[0].url) == ("GET", ASSIGNMENTS_URL)


async def test_list_periods_without_selector(logged_in_client, session):
    session.queue(pages.assignments_page(periods=None))

    result = await logged_in_client.list_periods()

    assert result.status is SessionStatus.FAILED
    assert result.error is FailureKind.MARKUP
    assert result.periods == ()
    assert result.postback == {}


async def test_list_periods_with_current_grades_appends(logged_in_client, session):
    calls = []
    logged_in_client.add_listener(lambda: calls.append(len(logged_in_client.marking_periods)))
    session.queue(_two_course_page())

    result = await logged_in_client.list_periods_with_current_grades("example")

    assert result.status is SessionStatus.PASSED
    assert result.marking_period.period == "2-2025"
    assert [c.name for c in result.marking_period.courses] == ["Algebra II", "Chemistry"]
    assert logged_in_client.marking_periods == (result.marking_period,)
    assert calls == [1]
    assert len(session.requests) == 1

    algebra = result.marking_period.courses[0]
    assert algebra.categories["Homework"].missing_weight
    assert algebra.missing_category_weights


async def test_list_periods_with_current_grades_without_courses(logged_in_client, session):
    session.queue(pages.assignments_page(courses=[]))

    result = await logged_in_client.list_periods_with_current_grades("example")

    assert result.error is FailureKind.MARKUP
    assert result.marking_period is None
    assert logged_in_client.marking_periods == ()


# ---------------------------------------------------------------------------
# Grades
# ---------------------------------------------------------------------------


async def test_fetch_grades_replays_postback_with_new_period(logged_in_client, session):
    session.queue(_two_course_page())
    listing = await logged_in_client.list_periods()
    session.requests.clear()
    session.queue(_two_course_page(periods=(("1-2025", True), ("2-2025", False))))

    result = await logged_in_client.fetch_grades("example", "1-2025", listing.postback)

    assert result.status is SessionStatus.PASSED
    assert result.marking_period.period == "1-2025"
    (post,) = session.requests
    assert (post.method, post.url) == ("POST", ASSIGNMENTS_URL)
    sent = dict(parse_qsl(post.data, keep_blank_values=True))
    expected = dict(listing.postback)
    expected[PERIOD_FIELD] = "1-2025"
    assert sent == expected
    assert listing.postback[PERIOD_FIELD] == "2-2025"


async def test_fetch_grades_accumulates_duplicates(logged_in_client, session):
    session.queue(_two_course_page(), _two_course_page())

    await logged_in_client.fetch_grades("example", "2-2025", {"__VIEWSTATE": "VS"})
    await logged_in_client.fetch_grades("example", "2-2025", {"__VIEWSTATE": "VS"})

    assert [mp.period for mp in logged_in_client.marking_periods] == ["2-2025", "2-2025"]


async def test_fetch_grades_failure_leaves_periods_unchanged(logged_in_client, session):
    session.queue(pages.assignments_page(courses=[]), aiohttp.ClientConnectionError("reset"))

    no_courses = await logged_in_client.fetch_grades("example", "3-2025", {})
    no_response = await logged_in_client.fetch_grades("example", "3-2025", {})

    assert no_courses.error is FailureKind.MARKUP
    assert no_response.error is FailureKind.TRANSPORT
    assert logged_in_client.marking_periods == ()


async def test_fetch_grades_uses_injected_weight_lookup(config, session):
    client = HACClient(config, session, TableWeightLookup({"example": {"Chemistry": 1.2}}))
    session.queue(pages.login_page(), pages.landing_page(), _two_course_page())
    await client.login()

    result = await client.fetch_grades("example", "2-2025", {})

    assert [c.weight for c in result.marking_period.courses] == [1.0, 1.2]
