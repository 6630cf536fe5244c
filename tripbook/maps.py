"""Map-search links for free-text locations."""

from typing import Protocol
from urllib.parse import quote

from tripbook.config import Settings, get_settings


class MapOpener(Protocol):
    """External collaborator that opens a map view (fire-and-forget)."""

    def open(self, url: str) -> None:
        """Open the given map URL."""
        ...


def maps_search_url(query: str | None, settings: Settings | None = None) -> str | None:
    """Build a location-search URL.

    Args:
        query: Free-text location
        settings: Source of maps_search_base_url (defaults to get_settings())

    Returns:
        URL, or None when the query is blank (no affordance shown)
    """
    if query is None or not query.strip():
        return None
    base = (settings or get_settings()).maps_search_base_url
    return f"{base}?api=1&query={quote(query, safe='')}"


def open_location(opener: MapOpener, text: str | None, settings: Settings | None = None) -> bool:
    """Ask the map collaborator to show a location.

    Returns:
        True if a request was made, False when text was blank
    """
    url = maps_search_url(text, settings=settings)
    if url is None:
        return False
    opener.open(url)
    return True
