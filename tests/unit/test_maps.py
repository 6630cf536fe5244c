"""Unit tests for map-search links."""

from tripbook.config import Settings
from tripbook.maps import maps_search_url, open_location
from tripbook.session.pool_session import PoolSession
from tripbook.session.trip_session import TripSession

BASE = "https://www.google.com/maps/search/"


class RecordingOpener:
    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


def test_maps_search_url_encodes_query(settings) -> None:
    """Test the query is URL-encoded into the search link."""
    url = maps_search_url("Taipei 101 / 觀景台", settings=settings)
    assert url == f"{BASE}?api=1&query=Taipei%20101%20%2F%20%E8%A7%80%E6%99%AF%E5%8F%B0"


def test_maps_search_url_uses_injected_settings() -> None:
    """Test the base URL comes from the caller's settings."""
    settings = Settings(_env_file=None, maps_search_base_url="https://maps.example/search/")  # type: ignore[call-arg]

    url = maps_search_url("Shibuya", settings=settings)

    assert url == "https://maps.example/search/?api=1&query=Shibuya"


def test_maps_search_url_falls_back_to_global_settings() -> None:
    """Test the cached settings are used when none are passed."""
    url = maps_search_url("Shibuya")
    assert url is not None
    assert url.endswith("?api=1&query=Shibuya")


def test_blank_location_has_no_link() -> None:
    """Test blank text suppresses the affordance."""
    assert maps_search_url("") is None
    assert maps_search_url("   ") is None
    assert maps_search_url(None) is None


def test_open_location_calls_collaborator(settings) -> None:
    """Test non-blank text is handed to the map opener."""
    opener = RecordingOpener()

    assert open_location(opener, "Asakusa", settings=settings) is True
    assert opener.opened == [f"{BASE}?api=1&query=Asakusa"]


def test_open_location_blank_is_suppressed(settings) -> None:
    """Test whitespace-only text makes no request."""
    opener = RecordingOpener()

    assert open_location(opener, "  \t ", settings=settings) is False
    assert opener.opened == []


def test_sessions_build_links_from_their_own_settings(store, clock) -> None:
    """Test both sessions use the settings they were opened with."""
    settings = Settings(_env_file=None, maps_search_base_url="https://maps.example/search/")  # type: ignore[call-arg]

    trip_session = TripSession.open(store, settings, clock=clock)
    pool_session = PoolSession.open(store, settings, clock=clock)

    assert trip_session.location_link("Ueno Park") == (
        "https://maps.example/search/?api=1&query=Ueno%20Park"
    )
    assert pool_session.location_link("Ueno Park") == (
        "https://maps.example/search/?api=1&query=Ueno%20Park"
    )
    assert trip_session.location_link("  ") is None
