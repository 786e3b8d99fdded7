"""Hosted chat-completion model gateway.

Public API:
    - AIGateway: Async client sending a system + user prompt and returning raw text
    - create_ai_gateway: Factory building the client from project configuration
"""
from src.services.ai_gateway.client import AIGateway, create_ai_gateway

__all__ = [
    "AIGateway",
    "create_ai_gateway",
]
