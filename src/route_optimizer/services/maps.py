from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlencode

from route_optimizer.services.types import GeoPoint, TravelMode

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/?api=1"


def google_maps_url(
    start: GeoPoint,
    end: GeoPoint,
    waypoints: Sequence[GeoPoint],
    travel_mode: TravelMode,
) -> str:
    params = {
        "origin": _format_point(start),
        "destination": _format_point(end),
    }
    if waypoints:
        params["waypoints"] = "|".join(_format_point(point) for point in waypoints)
    params["travelmode"] = travel_mode.value

    return f"{GOOGLE_MAPS_DIRECTIONS_URL}&{urlencode(sorted(params.items()))}"


def _format_point(point: GeoPoint) -> str:
    return f"{point.latitude:.6f},{point.longitude:.6f}"
