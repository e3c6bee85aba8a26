"""Form body encoding for HAC postbacks."""
from collections.abc import Mapping
import logging
from typing import Any
from urllib.parse import quote

_LOGGER = logging.getLogger(__name__)

# Query-safe characters minus the general (:#[]@) and sub (!$&'()*+,;=)
# delimiters. quote() always leaves letters, digits and "-._~" alone.
SAFE_CHARACTERS = "/?"


def percent_encode(fields: Mapping[str, Any]) -> str | None:
    """Encode a mapping as an application/x-www-form-urlencoded body.

    Pairs keep the mapping's iteration order. Returns None when a key or
    value cannot be encoded as UTF-8.
    """
    try:
        return "&".join(
            f"{quote(str(key), safe=SAFE_CHARACTERS)}={quote(str(value), safe=SAFE_CHARACTERS)}"
            for key, value in fields.items()
        )
    except UnicodeEncodeError as err:
        _LOGGER.error("Could not encode form body: %s", err)
        return None
