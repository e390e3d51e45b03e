"""Best-effort flight lookup by scraping a web search results page.

Fetches the results page for ``"<flight> flight status"`` and applies text
heuristics to the visible text: airport codes, aircraft family, duration and
status.  Anything it cannot read confidently is left empty for the
normalizer.  Reliability is explicitly not a goal.
"""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup

from skylog.contracts.enums import DataSource, FlightStatus
from skylog.contracts.flight import PartialFlight
from skylog.reference.airports import AIRPORTS
from skylog.services.errors import TransientSourceError

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.google.com/search"

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

_IATA_RE = re.compile(r"\b([A-Z]{3})\b")
_AIRCRAFT_RE = re.compile(
    r"(Boeing\s*7[0-8]7(?:[\s-]*(?:MAX\s*\d*|\d{1,3}(?:ER|LR)?))?"
    r"|Airbus\s*A3\d\d(?:[\s-]*(?:neo|\d{3}))?"
    r"|Embraer\s*E?1\d\d|ATR\s*\d{2}|CRJ\s*\d{3})",
    re.I,
)
_DURATION_RE = re.compile(r"\b(\d{1,2})\s*h(?:rs?|ours?)?\s*(\d{1,2})\s*m(?:in)?\b", re.I)
_STATUS_RE = re.compile(r"\b(On\s+time|Scheduled|Delayed|Cancelled|Departed|Arrived|Landed|Boarding|In\s+air)\b", re.I)

_STATUS_MAP = {
    "on time": FlightStatus.SCHEDULED,
    "scheduled": FlightStatus.SCHEDULED,
    "delayed": FlightStatus.DELAYED,
    "cancelled": FlightStatus.CANCELLED,
    "departed": FlightStatus.DEPARTED,
    "in air": FlightStatus.AIRBORNE,
    "arrived": FlightStatus.LANDED,
    "landed": FlightStatus.LANDED,
    "boarding": FlightStatus.BOARDING,
}


class LiveScrapeSource:
    """Scrapes a search results page; enabled unless ``SKYLOG_LIVE_SCRAPE=0``."""

    name = "live-scrape"
    source = DataSource.LIVE_SCRAPE

    def __init__(self, enabled: bool = True, http_client: httpx.AsyncClient | None = None):
        self._enabled = enabled
        self._client = http_client or httpx.AsyncClient(timeout=10.0, follow_redirects=True)

    @property
    def is_configured(self) -> bool:
        return self._enabled

    async def lookup(self, flight_number: str, date: str | None = None) -> PartialFlight | None:
        query = f"{flight_number} flight status"
        if date:
            query += f" {date}"
        try:
            resp = await self._client.get(SEARCH_URL, params={"q": query}, headers=HEADERS)
        except httpx.TransportError as exc:
            raise TransientSourceError(f"Search page unreachable: {exc}") from exc
        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientSourceError(f"Search page returned {resp.status_code}")
        resp.raise_for_status()
        return parse_search_page(resp.text, flight_number)


def parse_search_page(html: str, flight_number: str) -> PartialFlight | None:
    """Extract flight details from a results page, or None if the page has none."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = " ".join(soup.get_text(separator=" ").split())

    lowered = text.lower()
    if flight_number.lower() not in lowered.replace(" ", ""):
        return None
    if not any(word in lowered for word in ("flight", "departure", "arrival")):
        return None

    # Only codes present in the airport table count, in order of appearance.
    airports: list[str] = []
    for code in _IATA_RE.findall(text):
        if code in AIRPORTS and code not in airports:
            airports.append(code)
    if len(airports) < 2:
        logger.debug("Search page for %s has no recognizable route", flight_number)
        return None

    aircraft_match = _AIRCRAFT_RE.search(text)
    aircraft = " ".join(aircraft_match.group(1).split()) if aircraft_match else None

    duration = None
    duration_match = _DURATION_RE.search(text)
    if duration_match:
        duration = int(duration_match.group(1)) * 60 + int(duration_match.group(2) or 0)

    status = None
    status_match = _STATUS_RE.search(text)
    if status_match:
        status = _STATUS_MAP.get(" ".join(status_match.group(1).lower().split()))

    return PartialFlight(
        source=DataSource.LIVE_SCRAPE,
        flight_number=flight_number,
        aircraft_type=aircraft,
        departure_iata=airports[0],
        arrival_iata=airports[1],
        duration_minutes=duration or None,
        status=status,
    )
