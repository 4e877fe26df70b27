"""Outside-world collaborators: opening links and timing HTTP probes.

The terminal core never talks to the network or the desktop directly.
It calls two small functions instead, which a session receives at
construction time and tests replace with fakes:

- ``open_link(url)`` — hand a URL to whatever can show it.
- ``probe(url, timeout)`` — issue one best-effort request and return
  when it finishes (any HTTP status counts as an answer).  Raises on
  network failure or timeout.

``ping`` measures round-trip time around ``probe``; the numbers are
indicative only.
"""

from __future__ import annotations

from typing import TypeAlias

import re
import webbrowser
from collections.abc import Callable
from urllib.parse import urlsplit

import requests

LinkOpener: TypeAlias = Callable[[str], None]
Prober: TypeAlias = Callable[[str, float], None]

USER_AGENT = "StellarTerminal/1.1"

_SCHEME_RE = re.compile(r"://")


def to_url(target: str) -> str:
    """Return *target* as a URL, adding ``https://`` when it has no scheme."""
    return target if _SCHEME_RE.search(target) else f"https://{target}"


def validate_url(url: str) -> str:
    """Check that *url* has a scheme and a host.

    Returns:
        The URL unchanged.

    Raises:
        ValueError: If the URL cannot be parsed or has no host.

    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc or " " in parts.netloc:
        msg = f"invalid URL: {url}"
        raise ValueError(msg)
    return url


def http_probe(url: str, timeout: float) -> None:
    """Send one ``HEAD`` request to *url* and wait for any response.

    Raises:
        requests.RequestException: On connection failure or timeout.

    """
    headers = {"User-Agent": USER_AGENT, "Cache-Control": "no-store"}
    with requests.head(url, headers=headers, timeout=timeout, allow_redirects=False):
        pass


def browser_open(url: str) -> None:
    """Open *url* in a new browser tab."""
    webbrowser.open_new_tab(url)


def discard_link(_url: str) -> None:
    """A link opener that does nothing (headless sessions)."""
