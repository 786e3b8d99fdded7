"""External service integrations for trip generation.

- AI gateway: hosted chat-completion model that writes the raw trip plan

Each service module exports:
    - create_*: Factory to create the client from ``ApiSettings``
    - the client class itself, for injection in tests

Example Usage:
    >>> from src.services.ai_gateway import create_ai_gateway
    >>> from src.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> gateway = create_ai_gateway(settings)
    >>> raw = await gateway.complete(system_prompt, user_prompt)
"""

from src.services.ai_gateway import AIGateway, create_ai_gateway

__all__ = [
    "AIGateway",
    "create_ai_gateway",
]
