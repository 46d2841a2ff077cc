"""
Core data models used across the application.

Includes models for:
- Retention curves and transcripts (pipeline inputs)
- Detected and explained hotspots
- Actionable insight summaries
- Response schemas for the text-generation service

Attributes are snake_case in Python. JSON crossing the boundary to callers
uses the camelCase field names (videoId, percentageChange, toAvoid, ...),
produced by ``to_dict()`` and accepted by ``from_dict()``.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls.model_validate(data)


# ============================================================================
# INPUT MODELS
# ============================================================================


class RetentionPoint(CamelModel):
    """Fraction of viewers still watching at a point in the video."""

    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(ge=0, description="Seconds from the start of the video")
    percentage: float = Field(
        ge=0, le=1, allow_inf_nan=False, description="Retention as a fraction, 0..1"
    )


class RetentionCurve(CamelModel):
    """Ordered retention points for one video."""

    video_id: str
    points: list[RetentionPoint] = Field(default_factory=list)

    @property
    def duration(self) -> float:
        """Timestamp of the last point, or 0 for an empty curve."""
        return self.points[-1].timestamp if self.points else 0.0


class TranscriptSegment(CamelModel):
    """A caption entry covering [start_time, end_time]."""

    model_config = ConfigDict(frozen=True)

    start_time: float
    end_time: float
    text: str

    @model_validator(mode="after")
    def _check_range(self) -> "TranscriptSegment":
        if self.start_time >= self.end_time:
            raise ValueError(
                f"start_time ({self.start_time}) must be before end_time ({self.end_time})"
            )
        return self


class Transcript(CamelModel):
    """Ordered caption entries for one video. Gaps between entries are allowed."""

    video_id: str
    entries: list[TranscriptSegment] = Field(default_factory=list)


# ============================================================================
# HOTSPOT MODELS
# ============================================================================


class HotspotType(str, Enum):
    """Classification of a significant retention change."""

    SIGNIFICANT_DROP = "SIGNIFICANT_DROP"  # Viewers leaving
    INTEREST_POINT = "INTEREST_POINT"  # Moderate rise, rewatches
    ENGAGEMENT_PEAK = "ENGAGEMENT_PEAK"  # Strong rise

    @property
    def label(self) -> str:
        """Human-readable label used in prompts."""
        return _HOTSPOT_LABELS[self]


_HOTSPOT_LABELS = {
    HotspotType.SIGNIFICANT_DROP: "drop",
    HotspotType.INTEREST_POINT: "interest point",
    HotspotType.ENGAGEMENT_PEAK: "engagement peak",
}


class DetectedHotspot(CamelModel):
    """
    Hotspot skeleton produced by the detector.

    Carries only what the retention curve tells us. Caption text is attached
    later by the aligner; reasons and suggestion by the explainer.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: float
    percentage_change: int = Field(description="Signed change in percentage points")
    type: HotspotType
    caption_text: Optional[str] = None

    def with_caption(self, caption_text: Optional[str]) -> "DetectedHotspot":
        """Return a copy carrying the given caption text."""
        return self.model_copy(update={"caption_text": caption_text})


class Hotspot(CamelModel):
    """A fully explained hotspot."""

    model_config = ConfigDict(frozen=True)

    id: str
    video_id: str
    type: HotspotType
    timestamp: float
    percentage_change: int
    transcript_text: str = ""
    reasons: list[str] = Field(default_factory=list)
    suggestion: str = ""


class ActionableInsight(CamelModel):
    """Cross-cutting recommendation derived from a video's hotspots."""

    model_config = ConfigDict(frozen=True)

    to_avoid: list[str] = Field(default_factory=list)
    to_include: list[str] = Field(default_factory=list)
    ai_recommendation: str = ""
    estimated_improvement: str = ""


class RetentionAnalysis(CamelModel):
    """Result of a full pipeline run for one video."""

    video_id: str
    hotspots: list[Hotspot] = Field(default_factory=list)
    actionable_insight: ActionableInsight


# ============================================================================
# TEXT-GENERATION RESPONSE SCHEMAS
# ============================================================================


class HotspotExplanationResponse(BaseModel):
    """Expected JSON shape of a per-hotspot explanation."""

    reasons: list[str] = Field(default_factory=list)
    suggestion: str = ""


class ActionableInsightResponse(BaseModel):
    """Expected JSON shape of an actionable insight summary."""

    toAvoid: list[str] = Field(default_factory=list)
    toInclude: list[str] = Field(default_factory=list)
    aiRecommendation: str = ""
    estimatedImprovement: str = ""

    @field_validator("toAvoid", "toInclude", "aiRecommendation", "estimatedImprovement", mode="before")
    @classmethod
    def _null_as_empty(cls, value, info):
        # An explicit null empties that field only
        if value is None:
            return [] if info.field_name in ("toAvoid", "toInclude") else ""
        return value

    def to_insight(self) -> ActionableInsight:
        return ActionableInsight(
            to_avoid=self.toAvoid,
            to_include=self.toInclude,
            ai_recommendation=self.aiRecommendation,
            estimated_improvement=self.estimatedImprovement,
        )
