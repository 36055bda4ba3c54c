"""
Cultural insight generation - 年龄文化解读

Asks Claude for three short texts about a person's age and zodiac.
Every failure (missing key, network, error status, malformed reply)
becomes an InsightError inside an InsightOutcome; get_insight() collapses
that to a fixed fallback so callers never see an error.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

import anthropic

from agecompute.core.config import Config
from agecompute.core.exceptions import AuthenticationError, InsightError, InsightFailure
from agecompute.llm.claude_client import ClaudeClient
from agecompute.llm.prompts import PromptLoader

logger = logging.getLogger(__name__)

INSIGHT_FIELDS = {
    "culturalSignificance": "cultural_significance",
    "zodiacReading": "zodiac_reading",
    "lifeStageAdvice": "life_stage_advice",
}

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass(frozen=True)
class InsightResponse:
    """Three display texts returned by the narrative collaborator."""
    cultural_significance: str
    zodiac_reading: str
    life_stage_advice: str

    def to_dict(self) -> dict:
        return {
            "culturalSignificance": self.cultural_significance,
            "zodiacReading": self.zodiac_reading,
            "lifeStageAdvice": self.life_stage_advice,
        }


@dataclass(frozen=True)
class InsightOutcome:
    """Either a response or the error that prevented one."""
    response: Optional[InsightResponse] = None
    error: Optional[InsightError] = None

    @property
    def ok(self) -> bool:
        return self.response is not None


def fallback_insight(zodiac: str) -> InsightResponse:
    """Static texts shown when no insight could be generated."""
    return InsightResponse(
        cultural_significance=(
            "年龄不仅是数字，更是生命的积淀。"
            "在中国传统中，不同的岁数承载着不同的社会责任与期待。"
        ),
        zodiac_reading=f"属{zodiac}的人通常具有独特的魅力与坚韧的品质。",
        life_stage_advice="凡是过往，皆为序章。愿你历经千帆，归来仍是少年。",
    )


def resolve_insight(outcome: InsightOutcome, zodiac: str) -> InsightResponse:
    """Collapse an outcome to a displayable response, logging failures."""
    if outcome.ok:
        return outcome.response
    logger.warning("Cultural insight unavailable: %s", outcome.error)
    return fallback_insight(zodiac)


def parse_insight(text: str) -> InsightResponse:
    """
    Parse a model reply into an InsightResponse.

    Accepts a bare JSON object or one wrapped in a ``` code fence.

    Raises:
        InsightError: MALFORMED if the reply is not a JSON object with
            the three non-empty string fields
    """
    stripped = text.strip()
    fenced = _FENCE_PATTERN.match(stripped)
    if fenced:
        stripped = fenced.group(1)

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise InsightError(
            f"Reply is not valid JSON: {e}", kind=InsightFailure.MALFORMED
        ) from e

    if not isinstance(data, dict):
        raise InsightError("Reply is not a JSON object", kind=InsightFailure.MALFORMED)

    missing = [
        key for key in INSIGHT_FIELDS
        if not isinstance(data.get(key), str) or not data[key].strip()
    ]
    if missing:
        raise InsightError(
            "Reply is missing fields",
            kind=InsightFailure.MALFORMED,
            details={"missing": missing},
        )

    return InsightResponse(**{attr: data[key].strip() for key, attr in INSIGHT_FIELDS.items()})


class InsightService:
    """
    Produces cultural insight texts for computed age facts.

    Usage:
        service = InsightService()
        insight = await service.get_insight(date(1995, 1, 1), 29, 31, "狗")
    """

    def __init__(
        self,
        client: ClaudeClient | None = None,
        config: Config | None = None,
        loader: PromptLoader | None = None,
    ):
        """
        Args:
            client: Claude client; created lazily from config when omitted
            config: Settings for model, timeout and token limit
            loader: Prompt template loader
        """
        self._client = client
        self.config = config or Config()
        self.loader = loader or PromptLoader()

    def _get_client(self) -> ClaudeClient:
        if self._client is None:
            self._client = ClaudeClient(
                api_key=self.config.anthropic_api_key,
                timeout=self.config.insight_timeout,
                model=self.config.insight_model,
            )
        return self._client

    def build_prompt(
        self,
        birth_date: date | str,
        international_age: int,
        nominal_age: int,
        zodiac: str,
    ) -> str:
        if isinstance(birth_date, date):
            birth_date = birth_date.isoformat()
        return self.loader.render(
            "insight",
            birth_date=birth_date,
            international_age=international_age,
            nominal_age=nominal_age,
            zodiac=zodiac,
        )

    async def fetch(
        self,
        birth_date: date | str,
        international_age: int,
        nominal_age: int,
        zodiac: str,
    ) -> InsightOutcome:
        """
        Request an insight once, without retrying.

        Args:
            birth_date: Birth date (rendered as ISO string)
            international_age: 周岁
            nominal_age: 虚岁
            zodiac: 生肖 label

        Returns:
            InsightOutcome with either a response or an InsightError
        """
        # Bad settings and missing templates count as "not configured"
        try:
            client = self._get_client()
            prompt = self.build_prompt(birth_date, international_age, nominal_age, zodiac)
            system = self.loader.load("system")
            max_tokens = self.config.insight_max_tokens
        except (AuthenticationError, ValueError, OSError) as e:
            return InsightOutcome(
                error=InsightError(str(e), kind=InsightFailure.NOT_CONFIGURED)
            )

        messages = [{"role": "user", "content": prompt}]

        try:
            text = await client.chat(
                messages=messages,
                system=system,
                max_tokens=max_tokens,
                temperature=0.7,
            )
        except anthropic.APIConnectionError as e:
            return InsightOutcome(error=InsightError(str(e), kind=InsightFailure.NETWORK))
        except anthropic.APIStatusError as e:
            return InsightOutcome(
                error=InsightError(
                    e.message, kind=InsightFailure.NON_SUCCESS, status_code=e.status_code
                )
            )
        except anthropic.APIError as e:
            return InsightOutcome(error=InsightError(str(e), kind=InsightFailure.MALFORMED))

        try:
            return InsightOutcome(response=parse_insight(text))
        except InsightError as e:
            return InsightOutcome(error=e)

    async def get_insight(
        self,
        birth_date: date | str,
        international_age: int,
        nominal_age: int,
        zodiac: str,
    ) -> InsightResponse:
        """
        Request an insight, substituting the fallback texts on any failure.

        Never raises.
        """
        outcome = await self.fetch(birth_date, international_age, nominal_age, zodiac)
        return resolve_insight(outcome, zodiac)
