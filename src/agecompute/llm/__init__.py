"""
LLM integration module for AgeCompute.

Provides the Claude API client, prompt templates and the cultural
insight service with its static fallback.
"""

from agecompute.llm.claude_client import ClaudeClient
from agecompute.llm.insight import (
    InsightOutcome,
    InsightResponse,
    InsightService,
    fallback_insight,
)
from agecompute.llm.prompts import PromptLoader

__all__ = [
    "ClaudeClient",
    "InsightOutcome",
    "InsightResponse",
    "InsightService",
    "PromptLoader",
    "fallback_insight",
]
