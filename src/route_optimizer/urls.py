from django.urls import path

from route_optimizer import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/optimize-route", views.optimize_route_view, name="optimize-route"),
]
