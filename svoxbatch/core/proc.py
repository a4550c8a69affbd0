from __future__ import annotations

from urllib.parse import urlparse

import requests

from .errors import EntryPointUnreachable


def probe_entry_point(url: str, timeout: int = 10) -> bool:
    """GET the playground URL once so an unreachable server fails the run up front.

    Returns False without probing for non-HTTP URLs (file:// pages).
    """
    scheme = urlparse(url).scheme.lower()
    if scheme not in ("http", "https"):
        return False
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise EntryPointUnreachable(url, str(e)) from e
    if r.status_code >= 400:
        raise EntryPointUnreachable(url, f"HTTP {r.status_code}")
    return True
