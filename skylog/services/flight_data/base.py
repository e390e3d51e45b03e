"""Flight data source interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from skylog.contracts.enums import DataSource
from skylog.contracts.flight import PartialFlight


@runtime_checkable
class FlightSource(Protocol):
    """One strategy in the resolver chain.

    ``lookup`` may return None (nothing found) or raise; the resolver treats
    both as "try the next source".  Raise ``TransientSourceError`` for
    failures worth one retry.
    """

    name: str
    source: DataSource

    @property
    def is_configured(self) -> bool: ...

    async def lookup(self, flight_number: str, date: str | None = None) -> PartialFlight | None: ...
