from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from route_optimizer.exceptions import InvalidProblemError

DistanceMatrix = list[list[float]]
Tour = list[int]


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


class Algorithm(str, Enum):
    NEAREST = "nearest"
    TWO_OPT = "2opt"
    SIMULATED = "simulated"
    GENETIC = "genetic"

    @property
    def display_name(self) -> str:
        return _ALGORITHM_NAMES[self]

    @classmethod
    def resolve(cls, tag: str | None) -> Algorithm:
        """Map a request tag to a strategy, falling back to 2-opt for unknown tags."""
        try:
            return cls(tag)
        except ValueError:
            return cls.TWO_OPT


_ALGORITHM_NAMES = {
    Algorithm.NEAREST: "Nearest Neighbor",
    Algorithm.TWO_OPT: "Nearest Neighbor with 2-opt improvement",
    Algorithm.SIMULATED: "Simulated Annealing",
    Algorithm.GENETIC: "Genetic Algorithm",
}


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"

    @property
    def average_speed_kmh(self) -> float:
        return _AVERAGE_SPEEDS_KMH[self]

    @classmethod
    def resolve(cls, tag: str | None) -> TravelMode:
        try:
            return cls(tag)
        except ValueError:
            return cls.DRIVING


_AVERAGE_SPEEDS_KMH = {
    TravelMode.DRIVING: 60.0,
    TravelMode.WALKING: 5.0,
    TravelMode.BICYCLING: 15.0,
    TravelMode.TRANSIT: 30.0,
}


@dataclass(slots=True, frozen=True)
class RouteProblem:
    start: GeoPoint
    end: GeoPoint
    waypoints: tuple[GeoPoint, ...] = ()
    algorithm: Algorithm = Algorithm.TWO_OPT
    travel_mode: TravelMode = TravelMode.DRIVING

    @classmethod
    def build(
        cls,
        start: GeoPoint | None,
        end: GeoPoint | None,
        waypoints: Sequence[GeoPoint] = (),
        algorithm: str | Algorithm | None = None,
        travel_mode: str | TravelMode | None = None,
    ) -> RouteProblem:
        if start is None or end is None:
            raise InvalidProblemError("Start and end points are required")

        return cls(
            start=start,
            end=end,
            waypoints=tuple(waypoints),
            algorithm=Algorithm.resolve(algorithm),
            travel_mode=TravelMode.resolve(travel_mode),
        )

    @property
    def points(self) -> list[GeoPoint]:
        return [self.start, *self.waypoints, self.end]


@dataclass(slots=True, frozen=True)
class Solution:
    tour: Tour
    points: list[GeoPoint]
    total_distance_km: float
    estimated_duration_seconds: float
    algorithm: Algorithm

    @property
    def algorithm_name(self) -> str:
        return self.algorithm.display_name
