"""
Retention Hotspot Module.

This module finds the moments in a video where audience retention changes
sharply and explains them.

Main components:
- detect_hotspots: sliding-window scan of the retention curve
- select_hotspots: keeps the most significant hotspots (at most 5)
- align_hotspots: attaches the caption text spoken at each hotspot
- HotspotExplainer: reasons + suggestion per hotspot (LLM or fallback)
- InsightAggregator: one actionable summary across all hotspots
- HotspotPipeline: coordinates the full workflow

Usage:
    from retention_insights.hotspots import HotspotPipeline

    pipeline = HotspotPipeline.from_config(config)
    analysis = await pipeline.analyze(curve, transcript)
"""

import asyncio
from typing import Optional

from ..config import Config
from ..exceptions import InvalidInputError
from ..models import (
    ActionableInsight,
    DetectedHotspot,
    Hotspot,
    RetentionAnalysis,
    RetentionCurve,
    Transcript,
)
from ..transcript import format_time
from ..understanding.llm_provider import LLMProvider, get_llm_provider
from .alignment import align_hotspot, align_hotspots, find_segment
from .detector import (
    WINDOW_SIZE,
    classify_change,
    detect_hotspots,
    validate_curve,
)
from .explainer import HotspotExplainer, build_hotspot_id
from .fallbacks import fallback_explanation, fallback_insight
from .insights import InsightAggregator
from .ranker import MAX_HOTSPOTS, select_hotspots


__all__ = [
    # Stages
    "detect_hotspots",
    "classify_change",
    "validate_curve",
    "select_hotspots",
    "find_segment",
    "align_hotspot",
    "align_hotspots",
    "HotspotExplainer",
    "InsightAggregator",
    "HotspotPipeline",
    # Fallbacks
    "fallback_explanation",
    "fallback_insight",
    # Helpers
    "build_hotspot_id",
    # Constants
    "WINDOW_SIZE",
    "MAX_HOTSPOTS",
]


class HotspotPipeline:
    """Orchestrator for detection, explanation and insight aggregation.

    The text-generation provider is injected explicitly; None means every
    explanation and insight comes from deterministic fallback content.
    """

    name = "HotspotPipeline"

    def __init__(
        self,
        llm_provider: Optional[LLMProvider] = None,
        verbose: bool = False,
    ):
        """Initialize the pipeline.

        Args:
            llm_provider: Optional text-generation provider.
            verbose: Whether to print progress messages.
        """
        self.llm_provider = llm_provider
        self.verbose = verbose

        # Initialize components
        self.explainer = HotspotExplainer(llm_provider=llm_provider, verbose=verbose)
        self.aggregator = InsightAggregator(llm_provider=llm_provider, verbose=verbose)

    @classmethod
    def from_config(cls, config: Optional[Config] = None, verbose: bool = False) -> "HotspotPipeline":
        """Build a pipeline with the provider selected by configuration."""
        return cls(llm_provider=get_llm_provider(config), verbose=verbose)

    @property
    def uses_llm(self) -> bool:
        return self.llm_provider is not None

    def log(self, message: str) -> None:
        if self.verbose:
            print(f"[{self.name}] {message}")

    def find_hotspots(
        self, curve: RetentionCurve, transcript: Transcript
    ) -> list[DetectedHotspot]:
        """Detect, rank and align hotspots without explaining them.

        Raises:
            InvalidInputError: If the inputs are invalid or belong to different videos.
        """
        if transcript.video_id != curve.video_id:
            raise InvalidInputError(
                f"Transcript is for {transcript.video_id}, curve is for {curve.video_id}"
            )

        detected = detect_hotspots(curve)
        selected = select_hotspots(detected)
        self.log(
            f"🔍 {len(detected)} hotspot(s) detected in {len(curve.points)} points, "
            f"{len(selected)} selected"
        )
        return align_hotspots(selected, transcript)

    async def generate_hotspots(
        self, curve: RetentionCurve, transcript: Transcript
    ) -> list[Hotspot]:
        """Return up to MAX_HOTSPOTS explained hotspots for a video."""
        aligned = self.find_hotspots(curve, transcript)
        return await self.explainer.explain_all(aligned, curve.video_id)

    async def generate_insights(self, hotspots: list[Hotspot]) -> ActionableInsight:
        return await self.aggregator.aggregate(hotspots)

    async def analyze(
        self, curve: RetentionCurve, transcript: Transcript
    ) -> RetentionAnalysis:
        """Run the complete workflow for one video.

        Explanations are awaited in full before aggregation starts.
        """
        self.log(
            f"Analyzing {curve.video_id} "
            f"({'LLM' if self.uses_llm else 'fallback content'})"
        )
        hotspots = await self.generate_hotspots(curve, transcript)
        insight = await self.generate_insights(hotspots)
        analysis = RetentionAnalysis(
            video_id=curve.video_id,
            hotspots=hotspots,
            actionable_insight=insight,
        )
        if self.verbose:
            self._print_summary(analysis)
        return analysis

    async def explain_moment(
        self,
        video_id: str,
        timestamp: float,
        percentage_change: int,
        transcript_text: str = "",
    ) -> Hotspot:
        """Explain a single moment supplied by the caller.

        Raises:
            InvalidInputError: If the change does not qualify as a hotspot.
        """
        hotspot_type = classify_change(percentage_change)
        if hotspot_type is None:
            raise InvalidInputError(
                f"A change of {percentage_change}% at {format_time(timestamp)} is not a hotspot"
            )
        hotspot = DetectedHotspot(
            timestamp=timestamp,
            percentage_change=percentage_change,
            type=hotspot_type,
            caption_text=transcript_text or None,
        )
        return await self.explainer.explain(hotspot, video_id)

    def run_analysis(self, curve: RetentionCurve, transcript: Transcript) -> RetentionAnalysis:
        """Synchronous wrapper around analyze()."""
        return asyncio.run(self.analyze(curve, transcript))

    def _print_summary(self, analysis: RetentionAnalysis) -> None:
        print("\n" + "=" * 60)
        print(f"📋 RETENTION HOTSPOTS: {analysis.video_id}")
        print("=" * 60)

        if not analysis.hotspots:
            print("\n   No significant retention changes found.")

        for hotspot in analysis.hotspots:
            print(
                f"\n   {format_time(hotspot.timestamp)}  {hotspot.type.label:<16} "
                f"{hotspot.percentage_change:+d}%"
            )
            if hotspot.transcript_text:
                print(f"      \"{hotspot.transcript_text[:70]}\"")

        print("\n" + "=" * 60)
