"""Parse and normalize locations typed into, or suggested for, the URL bar."""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from urlbar_suggestions.urls.models import ParsedURL

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_LABEL_RE = re.compile(r"^[a-z0-9\-_]+$")
_TLD_RE = re.compile(r"^(?:[a-z]{2,63}|xn--[a-z0-9\-]+)$")

# Schemes that never carry a host but are still complete URLs.
_HOSTLESS_SCHEMES = {"about", "data", "file", "javascript", "mailto", "view-source", "blob"}
_EXPLICIT_PREFIXES = ("http://", "https://", "www.")


def parse_url(url: str | None) -> ParsedURL:
    """Split a location into its components without ever raising.

    Input without a ``scheme://`` authority (e.g. a partially typed host) keeps
    everything in ``pathname`` and leaves ``host`` as ``None``. Input that
    ``urlsplit`` rejects (such as an unclosed IPv6 bracket) is returned whole
    as ``pathname``.
    """
    text = (url or "").strip()
    if not text:
        return ParsedURL()

    try:
        parts = urlsplit(text)
    except ValueError:
        return ParsedURL(pathname=text, path=text)

    # urlsplit drops empty "?" and "#" markers; keep them visible.
    before_hash, has_hash, _ = text.partition("#")
    has_query = "?" in before_hash

    protocol = f"{parts.scheme}:" if parts.scheme else None
    has_authority = bool(protocol) and text[len(protocol):].startswith("//")

    host = parts.netloc.rpartition("@")[2].lower() or None
    pathname = parts.path or ("/" if has_authority else None)
    search = f"?{parts.query}" if has_query else None

    return ParsedURL(
        protocol=protocol,
        host=host,
        hostname=parts.hostname or None,
        pathname=pathname,
        search=search,
        query=parts.query or None,
        hash=f"#{parts.fragment}" if has_hash else None,
        path=((pathname or "") + (search or "")) or None,
    )


def normalize_location(location):
    """Drop the first ``www.`` and a leading ``http://`` or ``https://``.

    Non-string values are returned unchanged.
    """
    if isinstance(location, str):
        location = location.replace("www.", "", 1)
        location = re.sub(r"^http://", "", location)
        location = re.sub(r"^https://", "", location)
    return location


def should_normalize_location(user_input: str) -> bool:
    """Return False while the user is spelling out an explicit URL prefix.

    Typing ``htt``, ``https:/`` or ``ww`` means the prefix is deliberate, so
    locations being compared should keep theirs.
    """
    for prefix in _EXPLICIT_PREFIXES:
        if len(user_input) <= len(prefix) and prefix.startswith(user_input):
            return False
    return True


def is_url(text: str | None) -> bool:
    """Heuristic: does the input already look like a URL rather than a search?"""
    value = (text or "").strip()
    if not value:
        return False

    match = _SCHEME_RE.match(value)
    if match:
        scheme = match.group(1).lower()
        if value[match.end():].startswith("//"):
            return not any(c.isspace() for c in value)
        if scheme in _HOSTLESS_SCHEMES:
            return True

    if any(c.isspace() for c in value):
        return False

    try:
        hostname = urlsplit(f"//{value}").hostname or ""
    except ValueError:
        return False
    if hostname == "localhost":
        return True
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass

    labels = hostname.split(".")
    if len(labels) < 2 or not all(labels):
        return False
    if not all(_LABEL_RE.match(label) for label in labels):
        return False
    return bool(_TLD_RE.match(labels[-1]))
