"""Link target capabilities: syntactic parsing, detection and openability.

The renderer consults these through the render style, so hosts can swap in
platform services (a system link detector, an "can this app open this URL"
check). The defaults here are pure functions built on urllib.parse.

Example:
    >>> detect_link("see www.example.com.")
    'http://www.example.com'
    >>> can_open_link("bad://url")
    False

"""

import re
from urllib.parse import urlsplit

OPENABLE_SCHEMES: frozenset[str] = frozenset({"http", "https", "ftp", "mailto", "tel", "sms"})
_HOST_SCHEMES: frozenset[str] = frozenset({"http", "https", "ftp"})

_LINK_PATTERN = re.compile(
    r"""
    (?P<url>[A-Za-z][A-Za-z0-9+.\-]*://[^\s<>"]+)
    | (?P<scheme_only>(?:mailto|tel|sms):[^\s<>"]+)
    | (?P<www>www\.[^\s<>"]+)
    | (?P<email>[\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+)
    """,
    re.VERBOSE | re.IGNORECASE,
)
_TRAILING_PUNCTUATION = ".,;:!?)]}'"
_BRACKET_PAIRS = {")": "(", "]": "[", "}": "{"}


def parse_url(raw: str | None) -> str | None:
    """Return ``raw`` if it is a syntactically valid URL reference, else None.

    Empty strings, strings with whitespace or control characters, and
    strings urllib cannot split (e.g. unbalanced IPv6 brackets) are rejected.
    """
    if not raw:
        return None
    if any(char.isspace() or ord(char) < 0x20 for char in raw):
        return None
    try:
        urlsplit(raw)
    except ValueError:
        return None
    return raw


def _trim_trailing_punctuation(found: str) -> str:
    # Closing brackets stay when they balance an opener inside the link
    while found and found[-1] in _TRAILING_PUNCTUATION:
        closer = found[-1]
        opener = _BRACKET_PAIRS.get(closer)
        if opener is not None and found.count(opener) >= found.count(closer):
            break
        found = found[:-1]
    return found


def detect_link(text: str) -> str | None:
    """Return the first link found in ``text``, normalized to a full URL.

    Bare ``www.`` hosts get an ``http://`` scheme and e-mail addresses a
    ``mailto:`` scheme. Trailing sentence punctuation is not part of a link
    found inside running text; a link that is the whole of ``text`` (such as
    an explicit link destination) is kept as written.
    """
    match = _LINK_PATTERN.search(text)
    if match is None:
        return None
    found = match.group(0)
    if match.span() != (0, len(text)):
        found = _trim_trailing_punctuation(found)
    if match.lastgroup == "www":
        return f"http://{found}"
    if match.lastgroup == "email":
        return f"mailto:{found}"
    return found


def can_open_link(url: str) -> bool:
    """Return True if ``url`` uses a scheme a viewer can open.

    Web schemes additionally need a host.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    scheme = parts.scheme.lower()
    if scheme not in OPENABLE_SCHEMES:
        return False
    if scheme in _HOST_SCHEMES:
        return bool(parts.netloc)
    return bool(parts.path)


__all__ = ["OPENABLE_SCHEMES", "can_open_link", "detect_link", "parse_url"]
