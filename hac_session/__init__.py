"""Browser-session client for Home Access Center grade portals."""
from .config import HACConfig, load_config
from .exceptions import HACConfigError, HACError, PortalMarkupError
from .form_codec import percent_encode
from .hac_client import HACClient
from .models import (
    Assignment,
    AuthState,
    CategoryWeight,
    Course,
    FailureKind,
    GradesResult,
    LoginResult,
    MarkingPeriod,
    PeriodsResult,
    ProfileResult,
    SessionStatus,
    Student,
    UserStatus,
)
from .weights import NeutralWeightLookup, TableWeightLookup, WeightLookup

__all__ = [
    "Assignment",
    "AuthState",
    "CategoryWeight",
    "Course",
    "FailureKind",
    "GradesResult",
    "HACClient",
    "HACConfig",
    "HACConfigError",
    "HACError",
    "LoginResult",
    "MarkingPeriod",
    "NeutralWeightLookup",
    "PeriodsResult",
    "PortalMarkupError",
    "ProfileResult",
    "SessionStatus",
    "Student",
    "TableWeightLookup",
    "UserStatus",
    "WeightLookup",
    "load_config",
    "percent_encode",
]
