"""
Deterministic content used when the text-generation service is unavailable.

Explanations are keyed purely by hotspot type; the insight summary is fixed.
"""

from dataclasses import dataclass

from ..models import ActionableInsight, HotspotType


@dataclass(frozen=True)
class FallbackExplanation:
    """Canned reasons and suggestion for one hotspot type."""

    reasons: tuple[str, str]
    suggestion: str


FALLBACK_EXPLANATIONS: dict[HotspotType, FallbackExplanation] = {
    HotspotType.SIGNIFICANT_DROP: FallbackExplanation(
        reasons=(
            "Content may be too technical or complex without proper visualization",
            "Possible lack of engagement or pacing issues at this segment",
        ),
        suggestion="Consider adding more visual examples or simplifying the explanation in this section",
    ),
    HotspotType.INTEREST_POINT: FallbackExplanation(
        reasons=(
            "Visual demonstration likely captured viewer attention",
            "Content may be addressing a specific pain point viewers are seeking",
        ),
        suggestion="Include more similar demonstrations throughout your content",
    ),
    HotspotType.ENGAGEMENT_PEAK: FallbackExplanation(
        reasons=(
            "Offering additional value beyond the basic video content",
            "Audience likely found this information particularly useful or novel",
        ),
        suggestion="Create more downloadable resources and mention them earlier in videos",
    ),
}

FALLBACK_INSIGHT = ActionableInsight(
    to_avoid=[
        "Long price comparison segments without visual variety",
        "Technical explanations without demonstrations",
        "Mentioning downloadable resources only at the end",
    ],
    to_include=[
        "More before/after visual comparisons",
        "Mention downloadable resources within first 3 minutes",
        "Include budget options alongside premium recommendations",
    ],
    ai_recommendation=(
        "Based on your retention data, we recommend structuring your next video with a "
        '"sandwich" approach: start with a strong value proposition and mention downloadable '
        "resources, follow with before/after demonstrations of each accessory, include budget "
        "alternatives for each item, and end with a quick summary and call-to-action."
    ),
    estimated_improvement=(
        "This approach could improve your average view duration by an estimated 18-24%."
    ),
)


def fallback_explanation(hotspot_type: HotspotType) -> FallbackExplanation:
    """Return the canned explanation for a hotspot type.

    Raises:
        ValueError: If the type has no fallback entry.
    """
    try:
        return FALLBACK_EXPLANATIONS[hotspot_type]
    except KeyError:
        raise ValueError(f"No fallback explanation for hotspot type: {hotspot_type!r}") from None


def fallback_insight() -> ActionableInsight:
    return FALLBACK_INSIGHT.model_copy(deep=True)
