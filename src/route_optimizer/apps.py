from django.apps import AppConfig


class RouteOptimizerConfig(AppConfig):
    name = "route_optimizer"
    verbose_name = "Route Optimizer"
