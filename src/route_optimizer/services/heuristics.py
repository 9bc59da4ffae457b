from __future__ import annotations

import math
from collections.abc import Sequence
from itertools import permutations

from route_optimizer.services.types import DistanceMatrix, Tour

EPSILON = 1e-9


def tour_cost(tour: Sequence[int], matrix: DistanceMatrix) -> float:
    return sum(matrix[current][nxt] for current, nxt in zip(tour[:-1], tour[1:]))


def nearest_neighbor_tour(
    matrix: DistanceMatrix,
    start_index: int = 0,
    end_index: int | None = None,
) -> Tour:
    """Greedy construction: always step to the closest unvisited waypoint.

    The end point is held back until every waypoint has been visited. Ties go
    to the lowest index.
    """
    size = len(matrix)
    if end_index is None:
        end_index = size - 1

    remaining = [index for index in range(size) if index not in (start_index, end_index)]
    tour = [start_index]
    current = start_index

    while remaining:
        nearest = remaining[0]
        min_distance = matrix[current][nearest]
        for candidate in remaining[1:]:
            if matrix[current][candidate] < min_distance:
                min_distance = matrix[current][candidate]
                nearest = candidate

        tour.append(nearest)
        remaining.remove(nearest)
        current = nearest

    tour.append(end_index)
    return tour


def two_opt(tour: Sequence[int], matrix: DistanceMatrix) -> Tour:
    """First-improvement 2-opt that never moves the first or last stop."""
    route = list(tour)
    size = len(route)
    improved = True

    while improved:
        improved = False
        for i in range(size - 3):
            for j in range(i + 2, size - 1):
                current_distance = matrix[route[i]][route[i + 1]] + matrix[route[j]][route[j + 1]]
                swapped_distance = matrix[route[i]][route[j]] + matrix[route[i + 1]][route[j + 1]]
                if swapped_distance + EPSILON < current_distance:
                    route[i + 1 : j + 1] = reversed(route[i + 1 : j + 1])
                    improved = True

    return route


def brute_force_tour(
    matrix: DistanceMatrix,
    start_index: int = 0,
    end_index: int | None = None,
) -> Tour:
    """Exact fixed-endpoint tour by enumerating every waypoint order.

    Factorial time; only meant as a ground truth for small instances.
    """
    size = len(matrix)
    if end_index is None:
        end_index = size - 1

    interior = [index for index in range(size) if index not in (start_index, end_index)]
    best_tour: Tour = [start_index, *interior, end_index]
    best_cost = math.inf

    for order in permutations(interior):
        candidate = [start_index, *order, end_index]
        cost = tour_cost(candidate, matrix)
        if cost < best_cost:
            best_tour, best_cost = candidate, cost

    return best_tour
