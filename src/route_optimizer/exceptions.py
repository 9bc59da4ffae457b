class RouteOptimizerError(Exception):
    """Base exception for route optimization errors."""


class InvalidProblemError(RouteOptimizerError):
    """Raised when a route problem is missing its start or end point."""
