"""Route suggestion stub.

There is no optimization here: known lanes come from a fixed table and any
other origin/destination pair is served as a direct lane.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(slots=True, frozen=True)
class RouteSuggestion:
    origin: str
    destination: str
    waypoints: List[str] = field(default_factory=list)
    distance_km: Optional[float] = None
    known_lane: bool = False


# (origin, destination) -> (waypoints, distance_km)
_KNOWN_LANES: Dict[Tuple[str, str], Tuple[List[str], float]] = {
    ("port", "airport"): (["Harbour Gate", "Ring Road"], 42.8),
    ("port", "downtown"): (["Harbour Gate"], 12.5),
    ("airport", "downtown"): (["Ring Road", "Central Avenue"], 31.0),
    ("warehouse district", "downtown"): (["Industrial Bypass"], 8.4),
    ("warehouse district", "airport"): (["Industrial Bypass", "Ring Road"], 27.3),
}


def _normalize(value: str) -> str:
    return " ".join(value.strip().lower().split())


def suggest_route(origin: str, destination: str) -> RouteSuggestion:
    key = (_normalize(origin), _normalize(destination))
    lane = _KNOWN_LANES.get(key)
    reverse = False
    if lane is None:
        lane = _KNOWN_LANES.get((key[1], key[0]))
        reverse = lane is not None
    if lane is None:
        return RouteSuggestion(origin=origin, destination=destination)

    waypoints, distance_km = lane
    if reverse:
        waypoints = list(reversed(waypoints))
    return RouteSuggestion(
        origin=origin,
        destination=destination,
        waypoints=list(waypoints),
        distance_km=distance_km,
        known_lane=True,
    )
