from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PointPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class RouteOptimizationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    start: PointPayload
    end: PointPayload
    # Missing or null optional fields fall back to their defaults.
    waypoints: list[PointPayload] | None = None
    # Accepted for compatibility and ignored; tours are always ordered by distance.
    optimization: str | None = None
    travel_mode: str | None = Field(default=None, alias="travelMode", max_length=32)
    algorithm: str | None = Field(default=None, max_length=32)
    seed: int | None = None


class RouteOptimizationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    optimal_route: list[PointPayload] = Field(alias="optimalRoute")
    total_distance: float = Field(alias="totalDistance")
    estimated_duration: float = Field(alias="estimatedDuration")
    google_maps_url: str = Field(alias="googleMapsUrl")
    algorithm: str
