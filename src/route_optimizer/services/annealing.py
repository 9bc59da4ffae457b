from __future__ import annotations

import math
import random

from route_optimizer.services.heuristics import nearest_neighbor_tour, tour_cost
from route_optimizer.services.types import DistanceMatrix, Tour

INITIAL_TEMPERATURE = 100.0
COOLING_RATE = 0.99
MIN_TEMPERATURE = 0.01


def simulated_annealing(
    matrix: DistanceMatrix,
    start_index: int = 0,
    end_index: int | None = None,
    *,
    rng: random.Random,
    initial_temperature: float = INITIAL_TEMPERATURE,
    cooling_rate: float = COOLING_RATE,
    min_temperature: float = MIN_TEMPERATURE,
) -> Tour:
    """Refine the nearest-neighbour tour with swap moves and Metropolis acceptance.

    Returns the best tour seen during the run, which is not necessarily the
    state the walk ends in.
    """
    current = nearest_neighbor_tour(matrix, start_index, end_index)
    current_cost = tour_cost(current, matrix)
    best = list(current)
    best_cost = current_cost

    interior_positions = len(current) - 2
    if interior_positions < 2:
        return best

    temperature = initial_temperature
    while temperature > min_temperature:
        i, j = rng.sample(range(1, interior_positions + 1), 2)
        candidate = list(current)
        candidate[i], candidate[j] = candidate[j], candidate[i]
        candidate_cost = tour_cost(candidate, matrix)

        if _accept(current_cost, candidate_cost, temperature, rng):
            current, current_cost = candidate, candidate_cost
            if current_cost < best_cost:
                best, best_cost = list(current), current_cost

        temperature *= cooling_rate

    return best


def _accept(current_cost: float, candidate_cost: float, temperature: float, rng: random.Random) -> bool:
    if candidate_cost < current_cost:
        return True
    return rng.random() < math.exp(-(candidate_cost - current_cost) / temperature)
