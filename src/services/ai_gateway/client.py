"""OpenAI-compatible chat-completion client for the model gateway."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
import openai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from src.core.config import ApiSettings
from src.core.errors import UpstreamError, UpstreamQuotaExhausted, UpstreamRateLimited

logger = logging.getLogger(__name__)

JSON_OBJECT_FORMAT: Dict[str, str] = {"type": "json_object"}


def _message_text(message: BaseMessage) -> str:
    """Return the text of the first choice, flattening content parts if needed."""

    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            parts.append(part["text"])
    return "".join(parts)


class AIGateway:
    """Thin async wrapper around a hosted chat-completion endpoint.

    Sends one system message and one user message, asks for a JSON object
    response and hands back the raw text. Upstream status codes are mapped to
    the pipeline's error types; nothing is retried here.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        model: str,
        timeout_s: float = 60.0,
        llm: Optional[BaseChatModel] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        # Only owned when the chat model is built here; an injected llm brings its own transport.
        self._client: Optional[httpx.AsyncClient] = None
        if llm is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout_s, connect=10.0),
                transport=transport,
            )
            llm = ChatOpenAI(
                model=model,
                api_key=api_key,
                base_url=self.base_url,
                max_retries=0,
                http_async_client=self._client,
            )
        self.llm = llm

    async def aclose(self) -> None:
        """Close the underlying HTTPX client, if this gateway created one."""

        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> "AIGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion and return the first choice's message content."""

        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            response = await self.llm.ainvoke(messages, response_format=JSON_OBJECT_FORMAT)
        except openai.APIStatusError as exc:
            raise self._map_status_error(exc) from exc
        except openai.APIConnectionError as exc:
            logger.error(f"AI gateway unreachable: {exc}")
            raise UpstreamError(f"AI gateway unreachable: {exc}") from exc

        logger.info("AI response received successfully")
        return _message_text(response)

    @staticmethod
    def _map_status_error(exc: openai.APIStatusError) -> Exception:
        status = exc.status_code
        body: Any = getattr(exc, "body", None) or getattr(exc.response, "text", "")
        logger.error("AI gateway error: %s %s", status, body)

        if status == 429:
            return UpstreamRateLimited()
        if status == 402:
            return UpstreamQuotaExhausted()
        return UpstreamError(upstream_status=status)


def create_ai_gateway(settings: ApiSettings) -> AIGateway:
    """Instantiate the gateway client using project configuration."""

    return AIGateway(
        settings.ensure("ai_gateway_api_key"),
        base_url=settings.ai_gateway_url,
        model=settings.ai_gateway_model,
        timeout_s=settings.ai_gateway_timeout_s,
    )
