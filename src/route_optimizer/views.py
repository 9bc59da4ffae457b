from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from route_optimizer.exceptions import InvalidProblemError
from route_optimizer.schemas import RouteOptimizationRequest
from route_optimizer.services.planner import (
    RouteOptimizerService,
    supported_algorithms,
    supported_travel_modes,
)

_optimizer_service: RouteOptimizerService | None = None


def get_route_optimizer() -> RouteOptimizerService:
    global _optimizer_service
    if _optimizer_service is None:
        _optimizer_service = RouteOptimizerService()
    return _optimizer_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "algorithms": supported_algorithms(),
            "travelModes": supported_travel_modes(),
        }
    )


@csrf_exempt
@require_POST
def optimize_route_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        route_request = RouteOptimizationRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )

    optimizer = get_route_optimizer()
    try:
        response = optimizer.optimize(route_request)
    except InvalidProblemError as exc:
        return _error_response("invalid_problem", str(exc), status=400)

    return JsonResponse(response.model_dump(mode="json", by_alias=True), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
