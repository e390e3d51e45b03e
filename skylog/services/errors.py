"""Domain exceptions raised by the resolver and gamification services."""


class SkyLogError(Exception):
    """Base exception for service-layer errors."""


class ValidationError(SkyLogError):
    """Caller input is malformed."""


class InvalidFlightNumberError(ValidationError):
    def __init__(self, flight_number: str):
        self.flight_number = flight_number
        super().__init__(
            f"Invalid flight number '{flight_number}': expected an airline code "
            "followed by digits, e.g. QP1457"
        )


class InvalidDateError(ValidationError):
    def __init__(self, date: str):
        self.date = date
        super().__init__(f"Invalid date '{date}': expected YYYY-MM-DD")


class NotFoundError(SkyLogError):
    """Requested entity does not exist."""


class FlightNotFoundError(NotFoundError):
    def __init__(self, flight_number: str):
        self.flight_number = flight_number
        super().__init__(
            f"Could not find flight {flight_number}. Check the flight number and "
            "date, or try again later."
        )


class TransientSourceError(SkyLogError):
    """A data source failed in a way that may succeed on retry (timeouts, 5xx, 429)."""


class LoggedFlightNotFoundError(NotFoundError):
    def __init__(self, flight_id: str):
        self.flight_id = flight_id
        super().__init__(f"Flight record {flight_id} not found")
