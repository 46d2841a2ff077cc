"""
Hotspot Explainer.

Turns an aligned hotspot into a fully populated Hotspot with two reasons and
one suggestion. Uses the text-generation service when one is injected and
falls back to type-keyed canned content when it is absent or fails. A failure
for one hotspot never affects the others.
"""

import asyncio
import uuid
from typing import Optional, Sequence

from pydantic import ValidationError

from ..exceptions import LLMProviderError
from ..models import DetectedHotspot, Hotspot, HotspotExplanationResponse
from ..understanding.llm_provider import LLMProvider
from .fallbacks import fallback_explanation
from .prompts import HOTSPOT_SYSTEM_PROMPT, build_hotspot_prompt

HOTSPOT_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "retention-insights/hotspot")
REASONS_PER_HOTSPOT = 2


def build_hotspot_id(video_id: str, hotspot: DetectedHotspot) -> str:
    """Derive a stable id from the hotspot's identity within a video."""
    key = f"{video_id}:{hotspot.timestamp!r}:{hotspot.type.value}:{hotspot.percentage_change}"
    return f"hotspot-{uuid.uuid5(HOTSPOT_ID_NAMESPACE, key).hex}"


class HotspotExplainer:
    """Generates reasons and a suggestion for each hotspot."""

    name = "HotspotExplainer"

    def __init__(self, llm_provider: Optional[LLMProvider] = None, verbose: bool = False):
        """Initialize the explainer.

        Args:
            llm_provider: Text-generation provider. None selects fallback content.
            verbose: Whether to print progress messages.
        """
        self.llm_provider = llm_provider
        self.verbose = verbose

    def log(self, message: str) -> None:
        if self.verbose:
            print(f"[{self.name}] {message}")

    async def explain(self, hotspot: DetectedHotspot, video_id: str) -> Hotspot:
        """Explain one hotspot.

        Never raises for text-generation failures; those fall back to the
        canned explanation for the hotspot's type.
        """
        if self.llm_provider is None:
            return self.fallback(hotspot, video_id)

        try:
            return await self._explain_with_llm(hotspot, video_id)
        except (LLMProviderError, ValidationError) as e:
            self.log(f"⚠️ Falling back at t={hotspot.timestamp:.1f}s: {e}")
        except Exception as e:
            # Provider implementations may raise anything (network, SDK, parsing)
            self.log(f"⚠️ Unexpected error at t={hotspot.timestamp:.1f}s, falling back: {e!r}")
        return self.fallback(hotspot, video_id)

    async def explain_all(
        self, hotspots: Sequence[DetectedHotspot], video_id: str
    ) -> list[Hotspot]:
        """Explain hotspots concurrently, preserving input order."""
        if not hotspots:
            return []
        self.log(f"Explaining {len(hotspots)} hotspot(s) for {video_id}")
        return list(await asyncio.gather(*(self.explain(h, video_id) for h in hotspots)))

    def fallback(self, hotspot: DetectedHotspot, video_id: str) -> Hotspot:
        """Build a hotspot from the canned explanation for its type."""
        canned = fallback_explanation(hotspot.type)
        return self._build(hotspot, video_id, list(canned.reasons), canned.suggestion)

    async def _explain_with_llm(self, hotspot: DetectedHotspot, video_id: str) -> Hotspot:
        data = await self.llm_provider.generate_json(
            build_hotspot_prompt(hotspot), system_prompt=HOTSPOT_SYSTEM_PROMPT
        )
        response = HotspotExplanationResponse.model_validate(data)

        reasons = [r.strip() for r in response.reasons if r.strip()][:REASONS_PER_HOTSPOT]
        suggestion = response.suggestion.strip()
        if len(reasons) < REASONS_PER_HOTSPOT or not suggestion:
            raise LLMProviderError(
                f"Incomplete explanation: {len(reasons)} reason(s), "
                f"suggestion {'present' if suggestion else 'missing'}"
            )

        return self._build(hotspot, video_id, reasons, suggestion)

    def _build(
        self,
        hotspot: DetectedHotspot,
        video_id: str,
        reasons: list[str],
        suggestion: str,
    ) -> Hotspot:
        return Hotspot(
            id=build_hotspot_id(video_id, hotspot),
            video_id=video_id,
            type=hotspot.type,
            timestamp=hotspot.timestamp,
            percentage_change=hotspot.percentage_change,
            transcript_text=hotspot.caption_text or "",
            reasons=reasons,
            suggestion=suggestion,
        )
