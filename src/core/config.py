"""Configuration helpers for the AI gateway credentials and service settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from src.core.errors import ConfigurationError

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"

# Maps dataclass fields back to the variables they are read from, for error messages.
ENV_VARS = {
    "ai_gateway_api_key": "AI_GATEWAY_API_KEY",
    "ai_gateway_url": "AI_GATEWAY_URL",
    "ai_gateway_model": "AI_GATEWAY_MODEL",
    "ai_gateway_timeout_s": "AI_GATEWAY_TIMEOUT",
    "cors_origins": "CORS_ORIGINS",
}


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the model gateway credentials."""

    ai_gateway_api_key: Optional[str] = None
    ai_gateway_url: str = DEFAULT_GATEWAY_URL
    ai_gateway_model: str = DEFAULT_MODEL
    ai_gateway_timeout_s: float = 60.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables."""

        return cls(
            ai_gateway_api_key=os.getenv("AI_GATEWAY_API_KEY"),
            ai_gateway_url=os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL),
            ai_gateway_model=os.getenv("AI_GATEWAY_MODEL", DEFAULT_MODEL),
            ai_gateway_timeout_s=float(os.getenv("AI_GATEWAY_TIMEOUT", "60")),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise ConfigurationError(f"{ENV_VARS.get(field, field)} is not configured")
        return value
