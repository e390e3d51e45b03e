"""Country reference data: continent mapping and name → ISO code aliases."""

from __future__ import annotations

UNKNOWN_CONTINENT = "XX"

# ISO 3166-1 alpha-2 → continent code (AF, AN, AS, EU, NA, OC, SA)
CONTINENTS: dict[str, str] = {
    # North America
    "US": "NA", "CA": "NA", "MX": "NA", "CU": "NA", "JM": "NA", "PA": "NA", "CR": "NA",
    # Europe
    "GB": "EU", "FR": "EU", "DE": "EU", "IT": "EU", "ES": "EU", "NL": "EU", "CH": "EU",
    "IE": "EU", "PT": "EU", "BE": "EU", "AT": "EU", "DK": "EU", "SE": "EU", "NO": "EU",
    "FI": "EU", "PL": "EU", "GR": "EU", "CZ": "EU", "HU": "EU", "IS": "EU", "RU": "EU",
    # Asia (incl. Middle East)
    "CN": "AS", "JP": "AS", "IN": "AS", "KR": "AS", "SG": "AS", "TH": "AS", "MY": "AS",
    "HK": "AS", "ID": "AS", "PH": "AS", "VN": "AS", "LK": "AS", "NP": "AS", "BD": "AS",
    "PK": "AS", "AE": "AS", "QA": "AS", "SA": "AS", "OM": "AS", "BH": "AS", "KW": "AS",
    "IL": "AS", "JO": "AS", "TR": "AS", "TW": "AS", "MV": "AS",
    # Oceania
    "AU": "OC", "NZ": "OC", "FJ": "OC",
    # South America
    "BR": "SA", "AR": "SA", "CL": "SA", "PE": "SA", "CO": "SA", "EC": "SA", "UY": "SA",
    # Africa
    "ZA": "AF", "EG": "AF", "MA": "AF", "KE": "AF", "NG": "AF", "ET": "AF", "TZ": "AF",
    "MU": "AF", "TN": "AF",
    # Antarctica
    "AQ": "AN",
}

# Free-form country names sources tend to return.
_COUNTRY_ALIASES: dict[str, str] = {
    "india": "IN",
    "usa": "US",
    "united states": "US",
    "united states of america": "US",
    "uk": "GB",
    "united kingdom": "GB",
    "great britain": "GB",
    "uae": "AE",
    "united arab emirates": "AE",
    "qatar": "QA",
    "france": "FR",
    "germany": "DE",
    "netherlands": "NL",
    "switzerland": "CH",
    "spain": "ES",
    "italy": "IT",
    "ireland": "IE",
    "turkey": "TR",
    "singapore": "SG",
    "japan": "JP",
    "china": "CN",
    "hong kong": "HK",
    "south korea": "KR",
    "republic of korea": "KR",
    "thailand": "TH",
    "malaysia": "MY",
    "australia": "AU",
    "new zealand": "NZ",
    "canada": "CA",
    "mexico": "MX",
    "brazil": "BR",
    "argentina": "AR",
    "south africa": "ZA",
    "egypt": "EG",
    "kenya": "KE",
}


def country_code(value: str | None) -> str | None:
    """Normalize a country name or code to ISO alpha-2, or None."""
    if not value:
        return None
    value = value.strip()
    if len(value) == 2 and value.isalpha():
        return value.upper()
    return _COUNTRY_ALIASES.get(value.lower())


def continent_for(code: str | None) -> str:
    """Continent code for an ISO country code; unmapped codes give ``XX``."""
    if not code:
        return UNKNOWN_CONTINENT
    return CONTINENTS.get(code.upper(), UNKNOWN_CONTINENT)
