from __future__ import annotations

import logging
from typing import Optional

from src.core.config import ApiSettings
from src.core.context import TripContext
from src.core.post_processing import normalize_trip_plan
from src.core.prompt_builder import build_prompts
from src.core.schemas import TripPlan, TripRequest
from src.services.ai_gateway import AIGateway, create_ai_gateway

logger = logging.getLogger(__name__)


class TripPlannerService:
    """Runs the generation pipeline: prompts -> model gateway -> normalized plan.

    The gateway is created lazily so a missing API key is reported per request
    (as a ``ConfigurationError``) rather than when the app starts. Apart from
    the gateway client the service holds no state between requests.

    Attributes:
        settings: Gateway configuration
        gateway: Upstream client, created on first use unless injected
    """

    def __init__(self, settings: ApiSettings, gateway: Optional[AIGateway] = None) -> None:
        self.settings = settings
        self.gateway = gateway

    def __repr__(self) -> str:
        return (
            f"TripPlannerService(model='{self.settings.ai_gateway_model}', "
            f"gateway_url='{self.settings.ai_gateway_url}', "
            f"gateway_ready={self.gateway is not None})"
        )

    def _get_gateway(self) -> AIGateway:
        if self.gateway is None:
            self.gateway = create_ai_gateway(self.settings)
        return self.gateway

    async def close(self) -> None:
        if self.gateway is not None:
            await self.gateway.aclose()

    async def generate(self, request: TripRequest, *, context: Optional[TripContext] = None) -> TripPlan:
        """Generate a normalized trip plan for the request.

        Args:
            request: Validated trip parameters.
            context: Optional trip context that receives the plan on success.

        Raises:
            ConfigurationError: the gateway API key is missing.
            UpstreamRateLimited / UpstreamQuotaExhausted / UpstreamError: the gateway call failed.
            GenerationParseError: the model did not answer with a JSON object.
        """
        gateway = self._get_gateway()
        logger.info(f"Generating trip plan for {request.destination} from {request.origin}")

        prompts = build_prompts(request)
        raw = await gateway.complete(prompts.system, prompts.user)
        plan = normalize_trip_plan(raw, request)

        logger.info(
            f"Trip plan ready: {len(plan.places)} places, {len(plan.hotels)} hotels, "
            f"{len(plan.itinerary)}/{prompts.days_number} days"
        )
        if context is not None:
            context.publish(plan, request)
        return plan
