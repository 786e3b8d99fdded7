"""FastAPI surface for the AI trip plan generator."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


from typing import Any, Dict
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from src.api.dependencies import lifespan, get_planner_service
from src.api.schemas import ErrorResponse, GenerateTripRequest, GenerateTripResponse
from src.core.config import ApiSettings
from src.core.errors import TripPlannerError

logger = logging.getLogger(__name__)

app = FastAPI(title="Trip Planner API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ApiSettings.from_env().cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.exception_handler(TripPlannerError)
async def trip_planner_error_handler(request: Request, exc: TripPlannerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or TripPlannerError.default_message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "invalid value")
        details.append(f"{location}: {message}" if location else message)
    logger.warning(f"Rejected trip request: {details}")
    return JSONResponse(status_code=400, content={"error": "; ".join(details) or "Invalid trip request"})


@app.post(
    "/generate-trip",
    response_model=GenerateTripResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def generate_trip(payload: GenerateTripRequest) -> GenerateTripResponse:
    """Generate a structured trip plan with the hosted model.

    Builds the prompts from the trip parameters, calls the model gateway and
    normalizes its JSON answer so every place and hotel carries an id and an
    image, every hotel a booking URL, and every itinerary stop a resolved place.

    Args:
        payload: origin, destination, startDate, endDate, travelers, budget,
                 travelType and interests.

    Returns:
        ``{"success": true, "tripPlan": {...}}``

    Raises:
        429 when the gateway is rate limited, 402 when credits are exhausted,
        400 for invalid input and 500 for everything else. Errors are
        returned as ``{"error": message}``.

    Example JSON payload:
        ```json
        {
            "origin": "Delhi",
            "destination": "Mumbai",
            "startDate": "2024-12-26",
            "endDate": "2024-12-27",
            "travelers": 2,
            "budget": "medium",
            "travelType": "friends",
            "interests": ["food", "history"]
        }
        ```
    """

    logger.info(f"Trip request: {payload.origin} -> {payload.destination}")
    logger.info(f"Travel dates: {payload.start_date} to {payload.end_date}")

    service = get_planner_service()
    try:
        plan = await service.generate(payload)
    except TripPlannerError as exc:
        logger.error(f"Trip generation failed ({exc.status_code}): {exc.message}")
        raise
    except Exception as exc:
        logger.error(f"Unexpected error generating trip: {str(exc)}", exc_info=True)
        raise TripPlannerError(str(exc) or None) from exc

    return GenerateTripResponse(trip_plan=plan)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness checks."""

    return {"status": "healthy", "service": "trip-planner-api"}


@app.get("/workflow/info")
async def get_workflow_info() -> Dict[str, Any]:
    """Get the configured model gateway (never the credentials)."""
    service = get_planner_service()

    return {
        'workflow_info': {
            'llm_model': service.settings.ai_gateway_model,
            'gateway_url': service.settings.ai_gateway_url,
            'api_key_configured': bool(service.settings.ai_gateway_api_key),
        }
    }
