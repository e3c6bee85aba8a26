"""Exceptions raised inside the HAC session client."""
from .models import FailureKind


class HACError(Exception):
    """Base error carrying the failure kind reported to callers."""

    kind: FailureKind | None = None

    def __init__(self, message: str, kind: FailureKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class PortalTransportError(HACError):
    """The portal could not be reached or answered with an error status."""

    kind = FailureKind.TRANSPORT


class EmptyResponseError(HACError):
    """The portal answered without a body."""

    kind = FailureKind.EMPTY_RESPONSE


class PortalMarkupError(HACError):
    """An element the client depends on is missing from the page."""

    kind = FailureKind.MARKUP


class HACConfigError(HACError):
    """Invalid client configuration."""
