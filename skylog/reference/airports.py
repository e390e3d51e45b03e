"""Static airport reference table.

Covers the airports used by the synthetic generator plus the busiest hubs
live sources are likely to report.  Lookups are by IATA code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Airport:
    iata: str
    icao: str
    name: str
    city: str
    country: str  # ISO 3166-1 alpha-2
    latitude: float
    longitude: float


_AIRPORTS: tuple[Airport, ...] = (
    # India
    Airport("BOM", "VABB", "Chhatrapati Shivaji Maharaj International", "Mumbai", "IN", 19.0896, 72.8656),
    Airport("BLR", "VOBL", "Kempegowda International", "Bengaluru", "IN", 13.1989, 77.7068),
    Airport("DEL", "VIDP", "Indira Gandhi International", "New Delhi", "IN", 28.5665, 77.1031),
    Airport("MAA", "VOMM", "Chennai International", "Chennai", "IN", 12.9941, 80.1709),
    Airport("CCU", "VECC", "Netaji Subhas Chandra Bose International", "Kolkata", "IN", 22.6547, 88.4467),
    Airport("HYD", "VOHS", "Rajiv Gandhi International", "Hyderabad", "IN", 17.2313, 78.4298),
    Airport("GOI", "VOGO", "Goa International", "Goa", "IN", 15.3808, 73.8314),
    Airport("COK", "VOCI", "Cochin International", "Kochi", "IN", 10.1520, 76.4019),
    Airport("PNQ", "VAPO", "Pune Airport", "Pune", "IN", 18.5822, 73.9197),
    # Middle East
    Airport("DOH", "OTHH", "Hamad International", "Doha", "QA", 25.2731, 51.6081),
    Airport("DXB", "OMDB", "Dubai International", "Dubai", "AE", 25.2532, 55.3657),
    Airport("AUH", "OMAA", "Zayed International", "Abu Dhabi", "AE", 24.4330, 54.6511),
    Airport("IST", "LTFM", "Istanbul Airport", "Istanbul", "TR", 41.2753, 28.7519),
    # Europe
    Airport("LHR", "EGLL", "Heathrow", "London", "GB", 51.4700, -0.4543),
    Airport("LGW", "EGKK", "Gatwick", "London", "GB", 51.1537, -0.1821),
    Airport("CDG", "LFPG", "Charles de Gaulle", "Paris", "FR", 49.0097, 2.5479),
    Airport("FRA", "EDDF", "Frankfurt am Main", "Frankfurt", "DE", 50.0379, 8.5622),
    Airport("MUC", "EDDM", "Munich", "Munich", "DE", 48.3537, 11.7750),
    Airport("AMS", "EHAM", "Schiphol", "Amsterdam", "NL", 52.3105, 4.7683),
    Airport("ZRH", "LSZH", "Zurich", "Zurich", "CH", 47.4582, 8.5555),
    Airport("MAD", "LEMD", "Adolfo Suarez Madrid-Barajas", "Madrid", "ES", 40.4983, -3.5676),
    Airport("BCN", "LEBL", "Barcelona-El Prat", "Barcelona", "ES", 41.2974, 2.0833),
    Airport("FCO", "LIRF", "Leonardo da Vinci-Fiumicino", "Rome", "IT", 41.8003, 12.2389),
    Airport("DUB", "EIDW", "Dublin", "Dublin", "IE", 53.4264, -6.2499),
    # North America
    Airport("JFK", "KJFK", "John F. Kennedy International", "New York", "US", 40.6413, -73.7781),
    Airport("EWR", "KEWR", "Newark Liberty International", "Newark", "US", 40.6895, -74.1745),
    Airport("LAX", "KLAX", "Los Angeles International", "Los Angeles", "US", 33.9416, -118.4085),
    Airport("SFO", "KSFO", "San Francisco International", "San Francisco", "US", 37.6213, -122.3790),
    Airport("ORD", "KORD", "O'Hare International", "Chicago", "US", 41.9742, -87.9073),
    Airport("DFW", "KDFW", "Dallas/Fort Worth International", "Dallas", "US", 32.8998, -97.0403),
    Airport("ATL", "KATL", "Hartsfield-Jackson Atlanta International", "Atlanta", "US", 33.6407, -84.4277),
    Airport("SEA", "KSEA", "Seattle-Tacoma International", "Seattle", "US", 47.4502, -122.3088),
    Airport("MIA", "KMIA", "Miami International", "Miami", "US", 25.7959, -80.2870),
    Airport("BOS", "KBOS", "Logan International", "Boston", "US", 42.3656, -71.0096),
    Airport("DEN", "KDEN", "Denver International", "Denver", "US", 39.8561, -104.6737),
    Airport("YYZ", "CYYZ", "Toronto Pearson International", "Toronto", "CA", 43.6777, -79.6248),
    Airport("MEX", "MMMX", "Benito Juarez International", "Mexico City", "MX", 19.4361, -99.0719),
    # Asia / Pacific
    Airport("SIN", "WSSS", "Changi", "Singapore", "SG", 1.3644, 103.9915),
    Airport("NRT", "RJAA", "Narita International", "Tokyo", "JP", 35.7647, 140.3864),
    Airport("HND", "RJTT", "Haneda", "Tokyo", "JP", 35.5494, 139.7798),
    Airport("HKG", "VHHH", "Hong Kong International", "Hong Kong", "HK", 22.3080, 113.9185),
    Airport("ICN", "RKSI", "Incheon International", "Seoul", "KR", 37.4602, 126.4407),
    Airport("BKK", "VTBS", "Suvarnabhumi", "Bangkok", "TH", 13.6900, 100.7501),
    Airport("KUL", "WMKK", "Kuala Lumpur International", "Kuala Lumpur", "MY", 2.7456, 101.7072),
    Airport("PEK", "ZBAA", "Beijing Capital International", "Beijing", "CN", 40.0799, 116.6031),
    Airport("SYD", "YSSY", "Kingsford Smith", "Sydney", "AU", -33.9399, 151.1753),
    Airport("MEL", "YMML", "Melbourne Airport", "Melbourne", "AU", -37.6690, 144.8410),
    Airport("AKL", "NZAA", "Auckland Airport", "Auckland", "NZ", -37.0082, 174.7850),
    # South America / Africa
    Airport("GRU", "SBGR", "Sao Paulo/Guarulhos International", "Sao Paulo", "BR", -23.4356, -46.4731),
    Airport("EZE", "SAEZ", "Ministro Pistarini International", "Buenos Aires", "AR", -34.8222, -58.5358),
    Airport("JNB", "FAOR", "O. R. Tambo International", "Johannesburg", "ZA", -26.1392, 28.2460),
    Airport("CAI", "HECA", "Cairo International", "Cairo", "EG", 30.1219, 31.4056),
    Airport("NBO", "HKJK", "Jomo Kenyatta International", "Nairobi", "KE", -1.3192, 36.9278),
)

AIRPORTS: dict[str, Airport] = {a.iata: a for a in _AIRPORTS}
AIRPORTS_BY_ICAO: dict[str, Airport] = {a.icao: a for a in _AIRPORTS}


def get_airport(code: str | None) -> Airport | None:
    """Look up an airport by IATA (3 letters) or ICAO (4 letters) code."""
    if not code:
        return None
    code = code.strip().upper()
    if len(code) == 4:
        return AIRPORTS_BY_ICAO.get(code)
    return AIRPORTS.get(code)
