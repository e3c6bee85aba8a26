"""HAC (Home Access Center) session client."""
from collections.abc import Callable, Mapping
import logging

import aiohttp
from bs4 import BeautifulSoup

from .auth import HACAuthenticator
from .config import HACConfig
from .const import ASSIGNMENTS_PATH, PERIOD_FIELD, REGISTRATION_PATH
from .exceptions import HACError, PortalTransportError
from .form_codec import percent_encode
from .models import (
    AuthState,
    FailureKind,
    GradesResult,
    LoginResult,
    MarkingPeriod,
    PeriodListing,
    PeriodsResult,
    ProfileResult,
    SessionStatus,
    UserStatus,
)
from .parser import make_soup, parse_courses, parse_marking_periods, parse_student
from .transport import fetch_text
from .weights import NeutralWeightLookup, WeightLookup

_LOGGER = logging.getLogger(__name__)

Listener = Callable[[], None]


class HACClient:
    """Client to interact with Home Access Center.

    Call login() first. Marking periods fetched afterwards are appended to
    ``marking_periods``; listeners registered with add_listener() are called
    whenever that list or the login status changes.
    """

    def __init__(
        self,
        config: HACConfig,
        session: aiohttp.ClientSession,
        weight_lookup: WeightLookup | None = None,
    ) -> None:
        """Initialize the HAC client."""
        self.config = config
        self.session = session
        self.weight_lookup = weight_lookup or NeutralWeightLookup()
        self.auth = HACAuthenticator(config, session, on_state_change=self._state_changed)
        self._status = UserStatus.LOGGED_OUT
        self._marking_periods: list[MarkingPeriod] = []
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def marking_periods(self) -> tuple[MarkingPeriod, ...]:
        return tuple(self._marking_periods)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for state changes; returns its remover."""
        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Error in state listener %s", listener)

    def _state_changed(self, state: AuthState) -> None:
        status = UserStatus.LOGGED_IN if state is AuthState.LOGGED_IN else UserStatus.LOGGED_OUT
        if status is not self._status:
            self._status = status
            self._notify()

    def _append_marking_period(self, marking_period: MarkingPeriod) -> None:
        self._marking_periods.append(marking_period)
        self._notify()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def login(self) -> LoginResult:
        """Log in to HAC. Must succeed before anything else is fetched."""
        return await self.auth.login()

    async def fetch_profile(self) -> ProfileResult:
        """Fetch the student's registration details."""
        if not self.auth.is_logged_in:
            _LOGGER.error("Not logged in, will not fetch the student profile")
            return ProfileResult(SessionStatus.FAILED, error=FailureKind.NOT_LOGGED_IN)

        try:
            html = await self._get(REGISTRATION_PATH)
            student = parse_student(html)
        except HACError as err:
            _LOGGER.error("Error fetching student profile: %s", err)
            return ProfileResult(SessionStatus.FAILED, error=err.kind)

        _LOGGER.info("Fetched profile for student %s", student.student_id)
        return ProfileResult(SessionStatus.PASSED, student=student)

    async def list_periods(self) -> PeriodsResult:
        """List the report card runs and the postback needed to load one."""
        if not self.auth.is_logged_in:
            _LOGGER.error("Not logged in, will not list marking periods")
            return PeriodsResult(SessionStatus.FAILED, error=FailureKind.NOT_LOGGED_IN)

        try:
            html = await self._get(ASSIGNMENTS_PATH)
            listing = self._parse_periods(html)
        except HACError as err:
            _LOGGER.error("Error listing marking periods: %s", err)
            return PeriodsResult(SessionStatus.FAILED, error=err.kind)

        return PeriodsResult(
            SessionStatus.PASSED,
            current=listing.current,
            periods=listing.periods,
            postback=listing.postback,
        )

    async def list_periods_with_current_grades(self, district: str) -> PeriodsResult:
        """List report card runs and read the grades of the selected one.

        The marking period is labelled with the selected run and appended to
        ``marking_periods``.
        """
        if not self.auth.is_logged_in:
            _LOGGER.error("Not logged in, will not list marking periods")
            return PeriodsResult(SessionStatus.FAILED, error=FailureKind.NOT_LOGGED_IN)

        try:
            soup = make_soup(await self._get(ASSIGNMENTS_PATH))
            listing = self._parse_periods(soup)
            courses = parse_courses(soup, district=district, weight_lookup=self.weight_lookup)
        except HACError as err:
            _LOGGER.error("Error fetching current marking period: %s", err)
            return PeriodsResult(SessionStatus.FAILED, error=err.kind)

        marking_period = MarkingPeriod(period=listing.current, courses=courses)
        self._append_marking_period(marking_period)
        _LOGGER.info(
            "Fetched %d courses for current marking period %s",
            len(courses),
            listing.current or "unknown",
        )
        return PeriodsResult(
            SessionStatus.PASSED,
            current=listing.current,
            periods=listing.periods,
            postback=listing.postback,
            marking_period=marking_period,
        )

    async def fetch_grades(
        self,
        district: str,
        period: str,
        postback: Mapping[str, str],
    ) -> GradesResult:
        """Request the grades of ``period`` by replaying a postback.

        ``postback`` comes from list_periods(); only the report card run
        field is changed before it is sent back.
        """
        if not self.auth.is_logged_in:
            _LOGGER.error("Not logged in, will not fetch grades for %s", period)
            return GradesResult(SessionStatus.FAILED, error=FailureKind.NOT_LOGGED_IN)

        fields = dict(postback)
        fields[PERIOD_FIELD] = period

        try:
            body = percent_encode(fields)
            if body is None:
                raise PortalTransportError("Postback could not be encoded")
            html = await fetch_text(
                self.session,
                "POST",
                self._url(ASSIGNMENTS_PATH),
                timeout=self.config.timeout,
                data=body,
                headers={"User-Agent": self.config.user_agent},
            )
            courses = parse_courses(html, district=district, weight_lookup=self.weight_lookup)
        except HACError as err:
            _LOGGER.error("Could not fetch grades for %s: %s", period, err)
            return GradesResult(SessionStatus.FAILED, error=err.kind)

        marking_period = MarkingPeriod(period=period, courses=courses)
        self._append_marking_period(marking_period)
        _LOGGER.info("Fetched %d courses for marking period %s", len(courses), period)
        return GradesResult(SessionStatus.PASSED, marking_period=marking_period)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    async def _get(self, path: str) -> str:
        return await fetch_text(
            self.session,
            "GET",
            self._url(path),
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    def _parse_periods(self, document: str | BeautifulSoup) -> PeriodListing:
        return parse_marking_periods(
            document,
            static_fields=self.config.postback_fields,
            fallback_period=self.config.fallback_period,
        )
