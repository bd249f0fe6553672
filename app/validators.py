"""Syntax checks shared by the registrar and the resolver.

These are the single source of truth for what a code or a target URL may look
like. Anything the browser checks beforehand is advisory only.
"""

import re
from urllib.parse import urlsplit

CODE_MIN_LENGTH = 6
CODE_MAX_LENGTH = 8
MAX_URL_LENGTH = 2048

# ASCII only: str.isalnum() would accept unicode digits and letters
CODE_RE = re.compile(r"[A-Za-z0-9]{%d,%d}" % (CODE_MIN_LENGTH, CODE_MAX_LENGTH))
ALLOWED_SCHEMES = ("http", "https")


def is_valid_code(code) -> bool:
    """True iff ``code`` is 6-8 ASCII letters or digits."""
    if not isinstance(code, str):
        return False
    return CODE_RE.fullmatch(code) is not None


def is_valid_url(url) -> bool:
    """True iff ``url`` is an absolute http(s) URL with a host.

    Rejects relative paths, scheme-less strings and every other scheme
    (``javascript:``, ``data:``, ``ftp:``...), so a stored link can never
    redirect anywhere but to a web address.
    """
    if not isinstance(url, str) or not url or len(url) > MAX_URL_LENGTH:
        return False
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False
    try:
        # lone surrogates cannot be stored or sent in a Location header
        url.encode("utf-8")
        parts = urlsplit(url)
        # .port raises on a non-numeric or out-of-range port
        parts.port
    except ValueError:  # UnicodeEncodeError included
        return False
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False
    return bool(parts.hostname)
