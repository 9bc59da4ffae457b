from __future__ import annotations

import random

import pytest

from route_optimizer.exceptions import InvalidProblemError
from route_optimizer.services.geo import build_distance_matrix, haversine_km
from route_optimizer.services.heuristics import nearest_neighbor_tour, tour_cost, two_opt
from route_optimizer.services.optimization import optimize_route
from route_optimizer.services.types import Algorithm, GeoPoint, RouteProblem, TravelMode

START = GeoPoint(30.00, 31.00)
END = GeoPoint(30.10, 31.20)
WAYPOINTS = [GeoPoint(30.05, 31.05), GeoPoint(30.08, 31.15)]


def _scattered_waypoints(seed: int, count: int) -> list[GeoPoint]:
    rng = random.Random(seed)
    return [GeoPoint(30.0 + rng.random() * 0.3, 31.0 + rng.random() * 0.3) for _ in range(count)]


def _problem(algorithm: str = "2opt", travel_mode: str = "driving", waypoints=None) -> RouteProblem:
    return RouteProblem.build(
        start=START,
        end=END,
        waypoints=WAYPOINTS if waypoints is None else waypoints,
        algorithm=algorithm,
        travel_mode=travel_mode,
    )


def test_two_opt_example_route_is_deterministic() -> None:
    first = optimize_route(_problem())
    second = optimize_route(_problem())

    expected = round(
        haversine_km(START, WAYPOINTS[0])
        + haversine_km(WAYPOINTS[0], WAYPOINTS[1])
        + haversine_km(WAYPOINTS[1], END),
        2,
    )
    assert first.tour == [0, 1, 2, 3]
    assert first.points == [START, WAYPOINTS[0], WAYPOINTS[1], END]
    assert first.total_distance_km == pytest.approx(expected, abs=0.01)
    assert first.algorithm_name == "Nearest Neighbor with 2-opt improvement"
    assert first == second


def test_zero_waypoints_returns_direct_route() -> None:
    solution = optimize_route(_problem(waypoints=[]))

    assert solution.tour == [0, 1]
    assert solution.points == [START, END]
    assert solution.total_distance_km == round(haversine_km(START, END), 2)


@pytest.mark.parametrize("algorithm", ["nearest", "2opt", "simulated", "genetic"])
def test_every_algorithm_returns_valid_tour_with_consistent_cost(algorithm: str) -> None:
    waypoints = _scattered_waypoints(4, 9)
    problem = _problem(algorithm=algorithm, waypoints=waypoints)

    solution = optimize_route(problem, seed=3, population_size=20, generations=25)

    size = len(waypoints) + 2
    assert sorted(solution.tour) == list(range(size))
    assert solution.tour[0] == 0
    assert solution.tour[-1] == size - 1
    assert solution.points[0] == START
    assert solution.points[-1] == END

    matrix = build_distance_matrix(problem.points)
    assert solution.total_distance_km == pytest.approx(tour_cost(solution.tour, matrix), abs=0.005)
    assert solution.algorithm == Algorithm(algorithm)


@pytest.mark.parametrize(
    ("algorithm", "expected_name"),
    [
        ("nearest", "Nearest Neighbor"),
        ("2opt", "Nearest Neighbor with 2-opt improvement"),
        ("simulated", "Simulated Annealing"),
        ("genetic", "Genetic Algorithm"),
        ("dijkstra", "Nearest Neighbor with 2-opt improvement"),
        ("", "Nearest Neighbor with 2-opt improvement"),
    ],
)
def test_algorithm_name_reports_strategy_used(algorithm: str, expected_name: str) -> None:
    solution = optimize_route(_problem(algorithm=algorithm), seed=1, population_size=5, generations=2)

    assert solution.algorithm_name == expected_name


def test_nearest_strategy_skips_local_search() -> None:
    waypoints = _scattered_waypoints(8, 10)
    problem = _problem(algorithm="nearest", waypoints=waypoints)
    matrix = build_distance_matrix(problem.points)

    solution = optimize_route(problem)

    assert solution.tour == nearest_neighbor_tour(matrix)
    assert optimize_route(_problem(waypoints=waypoints)).tour == two_opt(solution.tour, matrix)


@pytest.mark.parametrize(
    ("travel_mode", "speed_kmh"),
    [
        ("driving", 60.0),
        ("walking", 5.0),
        ("bicycling", 15.0),
        ("transit", 30.0),
        ("teleport", 60.0),
    ],
)
def test_estimated_duration_uses_travel_mode_speed(travel_mode: str, speed_kmh: float) -> None:
    problem = _problem(travel_mode=travel_mode)
    matrix = build_distance_matrix(problem.points)

    solution = optimize_route(problem)

    raw_distance = tour_cost(solution.tour, matrix)
    assert solution.estimated_duration_seconds == round(raw_distance / speed_kmh * 3600, 2)


@pytest.mark.parametrize("algorithm", ["simulated", "genetic"])
def test_seeded_runs_are_reproducible(algorithm: str) -> None:
    problem = _problem(algorithm=algorithm, waypoints=_scattered_waypoints(2, 8))

    first = optimize_route(problem, seed=99, population_size=15, generations=10)
    second = optimize_route(problem, rng=random.Random(99), population_size=15, generations=10)

    assert first.tour == second.tour


def test_origin_coordinate_is_a_valid_point() -> None:
    origin = GeoPoint(0.0, 0.0)

    problem = RouteProblem.build(start=origin, end=GeoPoint(0.0, 1.0))

    assert problem.start == origin
    assert problem.algorithm is Algorithm.TWO_OPT
    assert problem.travel_mode is TravelMode.DRIVING


@pytest.mark.parametrize(
    ("start", "end"),
    [(None, END), (START, None), (None, None)],
)
def test_missing_endpoint_is_rejected(start, end) -> None:
    with pytest.raises(InvalidProblemError):
        RouteProblem.build(start=start, end=end, waypoints=WAYPOINTS)
