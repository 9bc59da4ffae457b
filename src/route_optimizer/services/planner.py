from __future__ import annotations

import logging

from django.conf import settings

from route_optimizer.exceptions import InvalidProblemError
from route_optimizer.schemas import (
    PointPayload,
    RouteOptimizationRequest,
    RouteOptimizationResponse,
)
from route_optimizer.services.maps import google_maps_url
from route_optimizer.services.optimization import optimize_route
from route_optimizer.services.types import Algorithm, GeoPoint, RouteProblem, TravelMode

logger = logging.getLogger(__name__)


class RouteOptimizerService:
    def __init__(
        self,
        population_size: int | None = None,
        generations: int | None = None,
        max_waypoints: int | None = None,
    ) -> None:
        self.population_size = population_size or int(settings.GENETIC_POPULATION_SIZE)
        self.generations = generations or int(settings.GENETIC_GENERATIONS)
        self.max_waypoints = max_waypoints or int(settings.MAX_WAYPOINTS)

    def optimize(self, request: RouteOptimizationRequest) -> RouteOptimizationResponse:
        waypoints = request.waypoints or []
        if len(waypoints) > self.max_waypoints:
            raise InvalidProblemError(
                f"At most {self.max_waypoints} waypoints are supported per request"
            )

        problem = RouteProblem.build(
            start=_to_point(request.start),
            end=_to_point(request.end),
            waypoints=[_to_point(waypoint) for waypoint in waypoints],
            algorithm=request.algorithm,
            travel_mode=request.travel_mode,
        )
        if request.algorithm and problem.algorithm.value != request.algorithm:
            logger.info("Unknown algorithm %r, using %s", request.algorithm, problem.algorithm.value)
        if request.travel_mode and problem.travel_mode.value != request.travel_mode:
            logger.info(
                "Unknown travel mode %r, using %s", request.travel_mode, problem.travel_mode.value
            )

        seed = request.seed if request.seed is not None else settings.OPTIMIZER_RANDOM_SEED
        solution = optimize_route(
            problem,
            seed=seed,
            population_size=self.population_size,
            generations=self.generations,
        )
        logger.info(
            "Route optimized: %d waypoints, algorithm=%s, distance=%.2f km",
            len(problem.waypoints),
            solution.algorithm.value,
            solution.total_distance_km,
        )

        return RouteOptimizationResponse(
            optimal_route=[
                PointPayload(lat=point.latitude, lng=point.longitude) for point in solution.points
            ],
            total_distance=solution.total_distance_km,
            estimated_duration=solution.estimated_duration_seconds,
            google_maps_url=google_maps_url(
                problem.start,
                problem.end,
                solution.points[1:-1],
                problem.travel_mode,
            ),
            algorithm=solution.algorithm_name,
        )


def supported_algorithms() -> list[str]:
    return [algorithm.value for algorithm in Algorithm]


def supported_travel_modes() -> list[str]:
    return [mode.value for mode in TravelMode]


def _to_point(payload: PointPayload | None) -> GeoPoint | None:
    if payload is None:
        return None
    return GeoPoint(latitude=payload.lat, longitude=payload.lng)
