"""
Input Validators

Checks applied to user input before it reaches the mapping store.
"""

import re

ALLOWED_URL_PREFIXES = ("http://", "https://")

# Upper bound for codes accepted on the redirect path. Generated codes are
# 8 characters; anything longer cannot exist in the store.
MAX_SHORT_CODE_LENGTH = 20

_SHORT_CODE_RE = re.compile(r"[0-9a-zA-Z]+")


def is_valid_long_url(url: str) -> bool:
    """
    Check that a URL may be shortened.

    The URL must be a non-empty string starting with http:// or https://.
    Nothing else about it is inspected; it is stored as given.
    """
    if not url or not isinstance(url, str):
        return False
    return url.startswith(ALLOWED_URL_PREFIXES)


def is_well_formed_short_code(short_code: str) -> bool:
    """
    Check that a short code could have been generated by this service.

    Only base62 characters [0-9a-zA-Z] are allowed. Codes failing this check
    are reported as not found without querying the database.
    """
    if not short_code or len(short_code) > MAX_SHORT_CODE_LENGTH:
        return False
    return _SHORT_CODE_RE.fullmatch(short_code) is not None
