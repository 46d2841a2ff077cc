"""Actionable insight aggregation over a video's explained hotspots."""

from typing import Optional, Sequence

from ..models import ActionableInsight, ActionableInsightResponse, Hotspot
from ..understanding.llm_provider import LLMProvider
from .fallbacks import fallback_insight
from .prompts import INSIGHT_SYSTEM_PROMPT, build_insight_prompt


class InsightAggregator:
    """Builds one ActionableInsight from the full set of hotspots.

    Always returns a complete insight: an absent provider, an empty hotspot
    list, or any generation failure yields the fixed fallback insight.
    Fields missing from an otherwise valid response default to empty.
    """

    name = "InsightAggregator"

    def __init__(self, llm_provider: Optional[LLMProvider] = None, verbose: bool = False):
        self.llm_provider = llm_provider
        self.verbose = verbose

    def log(self, message: str) -> None:
        if self.verbose:
            print(f"[{self.name}] {message}")

    async def aggregate(self, hotspots: Sequence[Hotspot]) -> ActionableInsight:
        if self.llm_provider is None or not hotspots:
            return fallback_insight()

        self.log(f"Aggregating insights from {len(hotspots)} hotspot(s)")
        try:
            data = await self.llm_provider.generate_json(
                build_insight_prompt(hotspots), system_prompt=INSIGHT_SYSTEM_PROMPT
            )
            return ActionableInsightResponse.model_validate(data).to_insight()
        except Exception as e:
            self.log(f"⚠️ Insight generation failed, using fallback: {e}")
            return fallback_insight()
