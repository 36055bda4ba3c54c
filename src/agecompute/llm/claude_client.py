"""
Claude API client wrapper for AgeCompute.

Sends a single request per call: no automatic retries, bounded by a
request timeout.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from anthropic import Anthropic
from dotenv import load_dotenv

from agecompute.core.config import DEFAULT_INSIGHT_TIMEOUT
from agecompute.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class ClaudeClient:
    """
    Claude API client wrapper.

    Model Tiers:
        - SONNET: Balanced tasks (default, used for cultural insight)

    Usage:
        client = ClaudeClient()
        text = await client.chat([{"role": "user", "content": "你好"}])
    """

    SONNET = "claude-sonnet-4-20250514"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = DEFAULT_INSIGHT_TIMEOUT,
        model: str | None = None,
    ):
        """
        Initialize Claude client.

        Args:
            api_key: API key (defaults to ANTHROPIC_API_KEY from env/.env)
            timeout: Request timeout in seconds
            model: Default model for chat()

        Raises:
            AuthenticationError: If no API key is available
        """
        if api_key is None:
            load_dotenv()
            api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise AuthenticationError(
                "ANTHROPIC_API_KEY not found in environment or .env file.",
                service="anthropic",
            )
        self.model = model or self.SONNET
        self.client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        logger.debug("Claude client initialized (model=%s, timeout=%ss)", self.model, timeout)

    async def chat(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> str:
        """
        Send messages and receive response.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            model: Model to use (defaults to the client's model)
            system: System prompt (optional)
            max_tokens: Maximum response tokens
            temperature: Sampling temperature (0-1)

        Returns:
            Response text from Claude

        Raises:
            anthropic.APIError: Propagated from the SDK
        """
        model = model or self.model

        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
            "temperature": temperature,
        }

        if system:
            kwargs["system"] = system

        logger.debug("Sending chat request to %s with %d messages", model, len(messages))

        try:
            response = self.client.messages.create(**kwargs)
        except Exception as e:
            logger.error("Chat request failed: %s", e)
            raise

        result = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )
        logger.debug("Received response: %d chars", len(result))
        return result
