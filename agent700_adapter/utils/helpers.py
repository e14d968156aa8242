# agent700_adapter/utils/helpers.py

import re
from urllib.parse import quote

APP_PASSWORD_PREFIX = "app_a7_"
_APP_PASSWORD_RE = re.compile(r"^app_a7_\S{32}$")

# Same reserved set as JavaScript's encodeURIComponent; the remote routes are matched on it.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def normalize_base_url(base_url: str) -> str:
    """
    Strip a single trailing slash so paths can be appended with '/api/...'.
    """
    base = (base_url or "").strip()
    return base[:-1] if base.endswith("/") else base


def encode_path_segment(text: str) -> str:
    """
    Percent-encode a key/pattern/template for use in a URL path or query value.
    """
    return quote(text, safe=_URI_COMPONENT_SAFE)


def is_valid_app_password(secret: str) -> bool:
    """
    App passwords look like 'app_a7_' followed by 32 characters.
    """
    return bool(secret) and bool(_APP_PASSWORD_RE.match(secret))


def is_blank(value) -> bool:
    """
    True for None and for strings that are empty after trimming.
    """
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_empty(value) -> bool:
    """
    True only for None and "". Whitespace is data for optional body fields.
    """
    return value is None or value == ""
