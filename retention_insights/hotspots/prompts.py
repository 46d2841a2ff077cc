"""
LLM prompt templates for hotspot explanation and insight aggregation.

This module contains prompts for:
1. Hotspot Explanation: why viewers behaved as they did at one hotspot
2. Actionable Insights: cross-cutting recommendations from all hotspots
"""

from typing import Sequence

from ..models import DetectedHotspot, Hotspot
from ..transcript import format_time

NO_CAPTION_PLACEHOLDER = "No caption available"

HOTSPOT_SYSTEM_PROMPT = """You are a YouTube retention analyst.

You explain why viewers left, rewatched or stayed at a specific moment of a video,
using only the retention change and the words spoken at that moment.

Be specific to the caption text. Avoid generic advice such as "make better content".
Respond with a single JSON object."""

HOTSPOT_USER_PROMPT = """You are analyzing a YouTube video retention data. At timestamp {time},
there is a {label} with a {change}% change in viewer retention.
The caption text at this point is: "{caption}"

Based on this information, provide:
1. Two likely reasons for this viewer behavior
2. One specific, actionable suggestion to improve or leverage this in future videos

Output your answer in JSON format with these fields:
- "reasons": array of two strings explaining possible reasons
- "suggestion": string with one specific actionable suggestion"""

INSIGHT_SYSTEM_PROMPT = """You are a YouTube retention strategist.

You turn a list of retention hotspots into concrete guidance for the creator's next video.
Ground every point in the hotspots you are given; do not invent moments that are not listed.
Respond with a single JSON object."""

INSIGHT_USER_PROMPT = """Based on the following retention hotspots from a YouTube video:

{digest}

Generate actionable insights for the creator's future videos in the following format:
1. A JSON object with these fields:
- "toAvoid": an array of 3 specific things to avoid (based on negative retention points)
- "toInclude": an array of 3 specific things to include (based on positive retention points)
- "aiRecommendation": a 2-3 sentence specific recommendation for structuring future videos
- "estimatedImprovement": a realistic estimate of potential retention improvement as a single sentence

IMPORTANT: Be specific and actionable. Don't use generic advice. Base recommendations directly on the hotspots provided.
Output in JSON format only."""


def build_hotspot_prompt(hotspot: DetectedHotspot) -> str:
    """Render the explanation prompt for one aligned hotspot."""
    return HOTSPOT_USER_PROMPT.format(
        time=format_time(hotspot.timestamp),
        label=hotspot.type.label,
        change=hotspot.percentage_change,
        caption=hotspot.caption_text or NO_CAPTION_PLACEHOLDER,
    )


def format_hotspot_digest(hotspots: Sequence[Hotspot]) -> str:
    """Render hotspots as one line each for the insight prompt."""
    lines = []
    for h in hotspots:
        lines.append(
            f'Hotspot: {h.type.value}. Change: {h.percentage_change}%. '
            f'Context: "{h.transcript_text}". Reason: {", ".join(h.reasons)}'
        )
    return "\n".join(lines)


def build_insight_prompt(hotspots: Sequence[Hotspot]) -> str:
    return INSIGHT_USER_PROMPT.format(digest=format_hotspot_digest(hotspots))
