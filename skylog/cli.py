"""Command-line access to flight resolution and scoring.

Usage:
    python -m skylog.cli lookup QP1457 --date 2026-03-14
    python -m skylog.cli score QP1457 --cabin business --photos 2 --review-length 400
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from dotenv import load_dotenv

from skylog.contracts.enums import CabinClass
from skylog.services.errors import SkyLogError
from skylog.services.flight_data.resolver import build_default_resolver
from skylog.services.gamification.aircraft import manufacturer_bonus, match_aircraft
from skylog.services.gamification.engine import GamificationService
from skylog.services.gamification.scoring import calculate_xp

logger = logging.getLogger(__name__)


async def _lookup(service: GamificationService, args: argparse.Namespace) -> dict:
    result = await service.lookup(args.flight_number, args.date)
    return result.model_dump(mode="json")


async def _score(service: GamificationService, args: argparse.Namespace) -> dict:
    flight = await service.resolve(args.flight_number, args.date)
    award = match_aircraft(flight.aircraft.type)
    bonus = manufacturer_bonus(flight.aircraft.manufacturer)
    base = calculate_xp(
        flight.route.distance_km,
        args.cabin,
        photo_count=args.photos,
        review_length=args.review_length,
        is_new_airport=not args.known_airports,
    )
    return {
        "flight_number": flight.flight_number,
        "route": f"{flight.route.departure.iata}-{flight.route.arrival.iata}",
        "distance_km": flight.route.distance_km,
        "aircraft": flight.aircraft.type,
        "base_xp": base,
        "aircraft_achievement": award.id,
        "aircraft_xp": award.xp,
        "manufacturer_bonus": bonus,
        "total_xp": base + award.xp + bonus,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="SkyLog flight tools")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Resolve a flight number")
    lookup.add_argument("flight_number")
    lookup.add_argument("--date", help="Travel date (YYYY-MM-DD)")

    score = sub.add_parser("score", help="Preview the XP a flight would earn")
    score.add_argument("flight_number")
    score.add_argument("--date", help="Travel date (YYYY-MM-DD)")
    score.add_argument("--cabin", choices=[c.value for c in CabinClass], default=CabinClass.ECONOMY.value)
    score.add_argument("--photos", type=int, default=0)
    score.add_argument("--review-length", type=int, default=0)
    score.add_argument("--known-airports", action="store_true", help="No new-airport bonus")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    service = GamificationService(resolver=build_default_resolver())
    handler = _lookup if args.command == "lookup" else _score
    try:
        output = asyncio.run(handler(service, args))
    except SkyLogError as exc:
        logger.error("%s", exc)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
