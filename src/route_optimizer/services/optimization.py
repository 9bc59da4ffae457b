from __future__ import annotations

import logging
import random
from collections.abc import Callable

from route_optimizer.services.annealing import simulated_annealing
from route_optimizer.services.genetic import genetic_algorithm
from route_optimizer.services.geo import build_distance_matrix
from route_optimizer.services.heuristics import nearest_neighbor_tour, tour_cost, two_opt
from route_optimizer.services.types import Algorithm, DistanceMatrix, RouteProblem, Solution, Tour

logger = logging.getLogger(__name__)

DEFAULT_POPULATION_SIZE = 100
DEFAULT_GENERATIONS = 1000
SECONDS_PER_HOUR = 3600.0

Strategy = Callable[[DistanceMatrix, random.Random, int, int], Tour]


def optimize_route(
    problem: RouteProblem,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    population_size: int = DEFAULT_POPULATION_SIZE,
    generations: int = DEFAULT_GENERATIONS,
) -> Solution:
    points = problem.points
    matrix = build_distance_matrix(points)
    if rng is None:
        rng = random.Random(seed)

    strategy = _STRATEGIES[problem.algorithm]
    tour = strategy(matrix, rng, population_size, generations)

    total_distance = tour_cost(tour, matrix)
    estimated_duration = total_distance / problem.travel_mode.average_speed_kmh * SECONDS_PER_HOUR

    logger.debug(
        "Optimized %d points with %s: %.3f km",
        len(points),
        problem.algorithm.value,
        total_distance,
    )

    return Solution(
        tour=tour,
        points=[points[index] for index in tour],
        total_distance_km=round(total_distance, 2),
        estimated_duration_seconds=round(estimated_duration, 2),
        algorithm=problem.algorithm,
    )


def _nearest(matrix: DistanceMatrix, rng: random.Random, population_size: int, generations: int) -> Tour:
    return nearest_neighbor_tour(matrix)


def _nearest_two_opt(
    matrix: DistanceMatrix, rng: random.Random, population_size: int, generations: int
) -> Tour:
    return two_opt(nearest_neighbor_tour(matrix), matrix)


def _simulated(matrix: DistanceMatrix, rng: random.Random, population_size: int, generations: int) -> Tour:
    return simulated_annealing(matrix, rng=rng)


def _genetic(matrix: DistanceMatrix, rng: random.Random, population_size: int, generations: int) -> Tour:
    return genetic_algorithm(
        matrix,
        population_size=population_size,
        generations=generations,
        rng=rng,
    )


_STRATEGIES: dict[Algorithm, Strategy] = {
    Algorithm.NEAREST: _nearest,
    Algorithm.TWO_OPT: _nearest_two_opt,
    Algorithm.SIMULATED: _simulated,
    Algorithm.GENETIC: _genetic,
}
