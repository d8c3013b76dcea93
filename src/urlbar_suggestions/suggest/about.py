"""Built-in ``about:`` pages offered as suggestions."""

from __future__ import annotations

ABOUT_SOURCE_PREFIX = "chrome-extension://"
ABOUT_PAGE_SUFFIX = "/about-"

ABOUT_PAGES = (
    "about:about",
    "about:adblock",
    "about:autofill",
    "about:blank",
    "about:bookmarks",
    "about:brave",
    "about:certerror",
    "about:contributors",
    "about:downloads",
    "about:error",
    "about:extensions",
    "about:history",
    "about:newtab",
    "about:passwords",
    "about:preferences",
    "about:safebrowsing",
    "about:styles",
    "about:welcome",
)

# Error and interstitial pages only make sense when the browser opens them.
_INTERNAL_ONLY = {
    "about:certerror",
    "about:error",
    "about:newtab",
    "about:safebrowsing",
}


def is_navigatable_about_page(location: str) -> bool:
    return location.startswith("about:") and location not in _INTERNAL_ONLY


def navigatable_about_pages(pages=ABOUT_PAGES) -> list[str]:
    return [page for page in pages if is_navigatable_about_page(page)]


def is_source_about_url(url: str | None) -> bool:
    """True for the internal page URL an ``about:`` page is served from."""
    if not url:
        return False
    lowered = url.lower()
    return lowered.startswith("about:") or (
        lowered.startswith(ABOUT_SOURCE_PREFIX) and ABOUT_PAGE_SUFFIX in lowered
    )
