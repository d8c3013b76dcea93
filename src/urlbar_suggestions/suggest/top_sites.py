"""Popular domains offered as top-site suggestions when the host supplies none."""

from __future__ import annotations

# Bare domains, most popular first; matched by substring against the typed query.
TOP_SITES = (
    "google.com",
    "youtube.com",
    "facebook.com",
    "wikipedia.org",
    "amazon.com",
    "twitter.com",
    "instagram.com",
    "linkedin.com",
    "reddit.com",
    "yahoo.com",
    "netflix.com",
    "bing.com",
    "microsoft.com",
    "apple.com",
    "github.com",
    "stackoverflow.com",
    "ebay.com",
    "paypal.com",
    "twitch.tv",
    "wordpress.com",
    "imdb.com",
    "nytimes.com",
    "bbc.co.uk",
    "cnn.com",
    "duckduckgo.com",
)
