"""Airline reference table keyed by IATA designator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AirlineRecord:
    code: str
    name: str
    country: str  # ISO 3166-1 alpha-2
    icao: str = ""


_AIRLINES: tuple[AirlineRecord, ...] = (
    AirlineRecord("QP", "Akasa Air", "IN", "AKJ"),
    AirlineRecord("6E", "IndiGo", "IN", "IGO"),
    AirlineRecord("AI", "Air India", "IN", "AIC"),
    AirlineRecord("UK", "Vistara", "IN", "VTI"),
    AirlineRecord("SG", "SpiceJet", "IN", "SEJ"),
    AirlineRecord("EK", "Emirates", "AE", "UAE"),
    AirlineRecord("EY", "Etihad Airways", "AE", "ETD"),
    AirlineRecord("QR", "Qatar Airways", "QA", "QTR"),
    AirlineRecord("TK", "Turkish Airlines", "TR", "THY"),
    AirlineRecord("AA", "American Airlines", "US", "AAL"),
    AirlineRecord("UA", "United Airlines", "US", "UAL"),
    AirlineRecord("DL", "Delta Air Lines", "US", "DAL"),
    AirlineRecord("WN", "Southwest Airlines", "US", "SWA"),
    AirlineRecord("AC", "Air Canada", "CA", "ACA"),
    AirlineRecord("BA", "British Airways", "GB", "BAW"),
    AirlineRecord("VS", "Virgin Atlantic", "GB", "VIR"),
    AirlineRecord("LH", "Lufthansa", "DE", "DLH"),
    AirlineRecord("AF", "Air France", "FR", "AFR"),
    AirlineRecord("KL", "KLM Royal Dutch Airlines", "NL", "KLM"),
    AirlineRecord("LX", "Swiss International Air Lines", "CH", "SWR"),
    AirlineRecord("IB", "Iberia", "ES", "IBE"),
    AirlineRecord("EI", "Aer Lingus", "IE", "EIN"),
    AirlineRecord("SQ", "Singapore Airlines", "SG", "SIA"),
    AirlineRecord("CX", "Cathay Pacific", "HK", "CPA"),
    AirlineRecord("NH", "All Nippon Airways", "JP", "ANA"),
    AirlineRecord("JL", "Japan Airlines", "JP", "JAL"),
    AirlineRecord("KE", "Korean Air", "KR", "KAL"),
    AirlineRecord("QF", "Qantas", "AU", "QFA"),
    AirlineRecord("NZ", "Air New Zealand", "NZ", "ANZ"),
    AirlineRecord("LA", "LATAM Airlines", "CL", "LAN"),
    AirlineRecord("SA", "South African Airways", "ZA", "SAA"),
)

AIRLINES: dict[str, AirlineRecord] = {a.code: a for a in _AIRLINES}
AIRLINES_BY_ICAO: dict[str, AirlineRecord] = {a.icao: a for a in _AIRLINES if a.icao}


def get_airline(code: str | None) -> AirlineRecord | None:
    """Look up an airline by 2-char IATA or 3-letter ICAO designator."""
    if not code:
        return None
    code = code.strip().upper()
    return AIRLINES.get(code) or AIRLINES_BY_ICAO.get(code)


def split_flight_number(flight_number: str) -> tuple[str, str] | None:
    """Split ``QP1457`` into ``("QP", "1457")``.

    Three-character designators are only taken when they name a known ICAO
    airline (``AKJ1457``); otherwise the first two characters are the
    airline code.
    """
    fn = flight_number.strip().upper()
    if len(fn) > 3 and fn[:3] in AIRLINES_BY_ICAO and fn[3:].isdigit():
        return fn[:3], fn[3:]
    if len(fn) > 2 and fn[2:].isdigit():
        return fn[:2], fn[2:]
    return None
