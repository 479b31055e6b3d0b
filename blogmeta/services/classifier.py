"""Crawler detection from the ``User-Agent`` header.

Social-media and search crawlers do not execute client-side script, so they
must receive a fully rendered document with every meta tag in place.  Any
other client is treated as a human visitor and sent into the SPA.

The signature list is matched as case-insensitive substrings.  An empty or
missing header is classified as *not* a crawler: browsers always send one,
and a client that omits it should not receive the static document.
"""

from typing import Optional

CRAWLER_SIGNATURES = (
    # Social platforms
    "facebookexternalhit",
    "linkedinbot",
    "twitterbot",
    "whatsapp",
    "skypeuripreview",
    "slackbot",
    "telegrambot",
    "discordbot",
    "pinterest/0.",
    "redditbot",
    "vkshare",
    "tumblr",
    "flipboard",
    # Search engines
    "googlebot",
    "bingbot",
    "yahoo! slurp",
    "applebot",
    "yandexbot",
    "duckduckbot",
    # Link-preview and validation services
    "embedly",
    "showyoubot",
    "outbrain",
    "developers.google.com/+/web/snippet",
    "www.google.com/webmasters/tools/richsnippets",
    "bitlybot",
    "nuzzel",
    "w3c_validator",
)


def is_crawler(user_agent: Optional[str]) -> bool:
    """Return *True* when *user_agent* contains a known crawler signature."""
    if not user_agent:
        return False
    lowered = user_agent.lower()
    return any(signature in lowered for signature in CRAWLER_SIGNATURES)
