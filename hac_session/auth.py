"""Login handshake for Home Access Center."""
from collections.abc import Callable
import logging
from urllib.parse import urlparse

import aiohttp

from .config import HACConfig
from .const import FIELD_DATABASE, FIELD_PASSWORD, FIELD_TOKEN, FIELD_USERNAME, LOGIN_PATH
from .exceptions import HACError, PortalTransportError
from .form_codec import percent_encode
from .models import AuthState, FailureKind, LoginResult, SessionStatus
from .parser import login_rejected, parse_login_form
from .transport import fetch_text

_LOGGER = logging.getLogger(__name__)


class HACAuthenticator:
    """Owns the anti-forgery token, the database id and the login state.

    The login is two requests: a GET of the login page for the token and
    database, then a POST of the credentials. The cookies HAC issues live in
    the shared aiohttp session. Not safe for concurrent use.
    """

    def __init__(
        self,
        config: HACConfig,
        session: aiohttp.ClientSession,
        on_state_change: Callable[[AuthState], None] | None = None,
    ) -> None:
        """Initialize the authenticator."""
        self.config = config
        self.session = session
        self._on_state_change = on_state_change
        self._state = AuthState.LOGGED_OUT
        self._token = ""
        self._database = ""

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def token(self) -> str:
        return self._token

    @property
    def database(self) -> str:
        return self._database

    @property
    def is_logged_in(self) -> bool:
        return self._state is AuthState.LOGGED_IN

    @property
    def login_url(self) -> str:
        return f"{self.config.base_url}{LOGIN_PATH}"

    def _clear_cookies(self) -> None:
        # The session may be shared, only drop what the portal issued.
        self.session.cookie_jar.clear_domain(urlparse(self.config.base_url).hostname)

    def _set_state(self, state: AuthState) -> None:
        if state is self._state:
            return
        _LOGGER.debug("Login state %s -> %s", self._state.value, state.value)
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)

    def _fail(self, err: HACError) -> LoginResult:
        _LOGGER.error("Login to %s failed: %s", self.config.host, err)
        self._token = ""
        self._database = ""
        self._clear_cookies()
        self._set_state(AuthState.FAILED)
        return LoginResult(SessionStatus.FAILED, error=err.kind)

    async def login(self) -> LoginResult:
        """Log in to HAC, starting over if a previous attempt exists."""
        if self._state in (AuthState.LOGGED_IN, AuthState.FAILED):
            _LOGGER.debug("Discarding previous session before logging in again")
            self._token = ""
            self._database = ""
            self._clear_cookies()

        self._set_state(AuthState.AWAITING_TOKEN)
        try:
            html = await fetch_text(
                self.session,
                "GET",
                self.login_url,
                timeout=self.config.timeout,
                headers={"User-Agent": self.config.user_agent},
            )
            self._token, self._database = parse_login_form(html, self.config.hac_name)
        except HACError as err:
            return self._fail(err)

        self._set_state(AuthState.AUTHENTICATING)
        body = percent_encode(
            {
                FIELD_TOKEN: self._token,
                FIELD_DATABASE: self._database,
                FIELD_USERNAME: self.config.username,
                FIELD_PASSWORD: self.config.password,
            }
        )
        if body is None:
            return self._fail(PortalTransportError("Login form could not be encoded"))

        try:
            html = await fetch_text(
                self.session,
                "POST",
                self.login_url,
                timeout=self.config.timeout,
                data=body,
                headers=self._login_headers(),
            )
        except HACError as err:
            return self._fail(err)

        if login_rejected(html):
            return self._fail(
                HACError("Still on login page (invalid credentials)", FailureKind.NOT_LOGGED_IN)
            )

        self._set_state(AuthState.LOGGED_IN)
        _LOGGER.info("Successfully logged in to %s (database %s)", self.config.host, self._database)
        return LoginResult(SessionStatus.PASSED)

    def _login_headers(self) -> dict[str, str]:
        # HAC only issues the session cookie to requests that look like the
        # browser's own XHR login.
        return {
            "User-Agent": self.config.user_agent,
            "X-Requested-With": "XMLHttpRequest",
            "Origin": self.config.base_url,
            "Referer": self.login_url,
            FIELD_TOKEN: self._token,
        }
