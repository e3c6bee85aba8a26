"""Configuration for the HAC session client."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import voluptuous as vol
import yaml

from .const import (
    CONF_FALLBACK_PERIOD,
    CONF_HAC_NAME,
    CONF_HOST,
    CONF_PASSWORD,
    CONF_POSTBACK_FIELDS,
    CONF_TIMEOUT,
    CONF_USE_ANIMATION,
    CONF_USER_AGENT,
    CONF_USERNAME,
    DEFAULT_FALLBACK_PERIOD,
    DEFAULT_POSTBACK_FIELDS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from .exceptions import HACConfigError

_LOGGER = logging.getLogger(__name__)


def _base_url(value: Any) -> str:
    """Accept a bare host or a URL and return scheme://host[:port]."""
    text = str(value).strip().rstrip("/")
    if not text:
        raise vol.Invalid("host must not be empty")
    if "://" not in text:
        text = f"https://{text}"
    parsed = urlparse(text)
    if not parsed.netloc:
        raise vol.Invalid(f"invalid host: {value}")
    return f"{parsed.scheme}://{parsed.netloc}"


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): _base_url,
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
        vol.Required(CONF_HAC_NAME): str,
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(CONF_USE_ANIMATION, default=False): bool,
        vol.Optional(CONF_USER_AGENT, default=DEFAULT_USER_AGENT): str,
        vol.Optional(CONF_FALLBACK_PERIOD, default=DEFAULT_FALLBACK_PERIOD): vol.All(
            str, vol.Length(min=1)
        ),
        vol.Optional(CONF_POSTBACK_FIELDS, default={}): {str: vol.Coerce(str)},
    }
)


@dataclass(frozen=True)
class HACConfig:
    """Validated client settings.

    ``use_animation`` is carried for presentation layers; the client never
    reads it.
    """

    base_url: str
    username: str
    password: str = field(repr=False)
    hac_name: str
    timeout: float = DEFAULT_TIMEOUT
    use_animation: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    fallback_period: str = DEFAULT_FALLBACK_PERIOD
    postback_fields: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_POSTBACK_FIELDS), repr=False
    )

    @property
    def host(self) -> str:
        return urlparse(self.base_url).netloc

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HACConfig:
        """Validate raw settings, raising HACConfigError when they are invalid."""
        try:
            validated = CONFIG_SCHEMA(dict(data))
        except vol.Invalid as err:
            raise HACConfigError(f"Invalid configuration: {err}") from err

        postback_fields = dict(DEFAULT_POSTBACK_FIELDS)
        postback_fields.update(validated[CONF_POSTBACK_FIELDS])

        return cls(
            base_url=validated[CONF_HOST],
            username=validated[CONF_USERNAME],
            password=validated[CONF_PASSWORD],
            hac_name=validated[CONF_HAC_NAME],
            timeout=validated[CONF_TIMEOUT],
            use_animation=validated[CONF_USE_ANIMATION],
            user_agent=validated[CONF_USER_AGENT],
            fallback_period=validated[CONF_FALLBACK_PERIOD],
            postback_fields=postback_fields,
        )


def load_config(path: Path) -> HACConfig:
    """Load and validate a YAML settings file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as err:
        raise HACConfigError(f"Could not read {path}: {err}") from err

    if not isinstance(data, dict):
        raise HACConfigError(f"{path} must contain a mapping of settings")

    _LOGGER.debug("Loaded configuration from %s", path)
    return HACConfig.from_dict(data)
