"""Data models for the URL parsing module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedURL:
    """Components of a location string.

    Absent components are ``None``; only a root path is ever the bare ``'/'``.
    ``path`` is ``pathname`` followed by ``search``.
    """

    protocol: str | None = None
    host: str | None = None
    hostname: str | None = None
    pathname: str | None = None
    search: str | None = None
    query: str | None = None
    hash: str | None = None
    path: str | None = None
