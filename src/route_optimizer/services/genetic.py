from __future__ import annotations

import random
from collections.abc import Sequence

from route_optimizer.services.heuristics import nearest_neighbor_tour, tour_cost, two_opt
from route_optimizer.services.types import DistanceMatrix, Tour

MUTATION_RATE = 0.2
MIN_COST = 1e-12


def genetic_algorithm(
    matrix: DistanceMatrix,
    start_index: int = 0,
    end_index: int | None = None,
    *,
    population_size: int,
    generations: int,
    rng: random.Random,
    mutation_rate: float = MUTATION_RATE,
) -> Tour:
    """Evolve fixed-endpoint tours with roulette selection, OX crossover and swap mutation.

    The fittest individual of every generation survives unchanged apart from a
    2-opt polish, and the final winner is polished once more.
    """
    if population_size < 1:
        raise ValueError("population_size must be at least 1")
    if generations < 1:
        raise ValueError("generations must be at least 1")

    size = len(matrix)
    if end_index is None:
        end_index = size - 1

    if size - 2 <= 2:
        return two_opt(nearest_neighbor_tour(matrix, start_index, end_index), matrix)

    population = _initial_population(size, start_index, end_index, population_size, rng)

    for _ in range(generations):
        fitness = [_fitness(individual, matrix) for individual in population]
        total_fitness = sum(fitness)
        best_index = max(range(population_size), key=fitness.__getitem__)

        next_population = [two_opt(population[best_index], matrix)]
        while len(next_population) < population_size:
            parent_a = _select_parent(population, fitness, total_fitness, rng)
            parent_b = _select_parent(population, fitness, total_fitness, rng)
            child = _ordered_crossover(parent_a, parent_b, rng)
            if rng.random() < mutation_rate:
                _swap_mutation(child, rng)
            next_population.append(child)

        population = next_population

    best = min(population, key=lambda individual: tour_cost(individual, matrix))
    return two_opt(best, matrix)


def _initial_population(
    size: int,
    start_index: int,
    end_index: int,
    population_size: int,
    rng: random.Random,
) -> list[Tour]:
    interior = [index for index in range(size) if index not in (start_index, end_index)]
    population: list[Tour] = []
    for _ in range(population_size):
        shuffled = list(interior)
        rng.shuffle(shuffled)
        population.append([start_index, *shuffled, end_index])
    return population


def _fitness(tour: Sequence[int], matrix: DistanceMatrix) -> float:
    # Duplicate points can make a whole tour cost zero.
    return 1.0 / max(tour_cost(tour, matrix), MIN_COST)


def _select_parent(
    population: list[Tour],
    fitness: list[float],
    total_fitness: float,
    rng: random.Random,
) -> Tour:
    threshold = rng.random() * total_fitness
    cumulative = 0.0
    for individual, score in zip(population, fitness):
        cumulative += score
        if cumulative >= threshold:
            return individual
    return population[-1]


def _ordered_crossover(parent_a: Sequence[int], parent_b: Sequence[int], rng: random.Random) -> Tour:
    size = len(parent_a)
    child: list[int | None] = [None] * size
    child[0] = parent_a[0]
    child[-1] = parent_a[-1]

    segment_start = rng.randrange(1, size - 2)
    segment_end = segment_start + rng.randrange(size - segment_start - 1)
    child[segment_start : segment_end + 1] = parent_a[segment_start : segment_end + 1]

    present = set(parent_a[segment_start : segment_end + 1])
    position = 1
    for gene in parent_b[1:-1]:
        if gene in present:
            continue
        while child[position] is not None:
            position += 1
        child[position] = gene
        present.add(gene)

    return [gene for gene in child if gene is not None]


def _swap_mutation(tour: Tour, rng: random.Random) -> None:
    i, j = rng.sample(range(1, len(tour) - 1), 2)
    tour[i], tour[j] = tour[j], tour[i]
