"""Tests for data models and their camelCase JSON form."""

import pytest
from pydantic import ValidationError

from retention_insights.models import (
    ActionableInsightResponse,
    DetectedHotspot,
    Hotspot,
    HotspotExplanationResponse,
    HotspotType,
    RetentionCurve,
    RetentionPoint,
    Transcript,
    TranscriptSegment,
)


class TestRetentionCurve:
    """Tests for RetentionPoint and RetentionCurve."""

    def test_from_camel_case_json(self):
        curve = RetentionCurve.from_dict(
            {
                "videoId": "abc",
                "points": [
                    {"timestamp": 0, "percentage": 1.0},
                    {"timestamp": 10.7, "percentage": 0.92},
                ],
            }
        )
        assert curve.video_id == "abc"
        assert curve.points[1].percentage == 0.92
        assert curve.duration == 10.7

    def test_snake_case_accepted(self):
        assert RetentionCurve(video_id="abc").video_id == "abc"

    def test_empty_duration(self):
        assert RetentionCurve(video_id="abc").duration == 0.0

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            RetentionPoint(timestamp=-1, percentage=0.5)

    @pytest.mark.parametrize("percentage", [70.0, -0.01, 1.01, float("nan"), float("inf")])
    def test_percentage_must_be_finite_fraction(self, percentage):
        with pytest.raises(ValidationError):
            RetentionPoint(timestamp=0, percentage=percentage)

    @pytest.mark.parametrize("percentage", [0.0, 1.0])
    def test_percentage_bounds_inclusive(self, percentage):
        assert RetentionPoint(timestamp=0, percentage=percentage).percentage == percentage

    def test_points_are_immutable(self):
        point = RetentionPoint(timestamp=1, percentage=0.5)
        with pytest.raises(ValidationError):
            point.percentage = 0.6


class TestTranscriptModels:
    """Tests for TranscriptSegment and Transcript."""

    def test_camel_case_round_trip(self):
        transcript = Transcript(
            video_id="abc",
            entries=[TranscriptSegment(start_time=0, end_time=2.5, text="Hi")],
        )
        data = transcript.to_dict()

        assert data == {
            "videoId": "abc",
            "entries": [{"startTime": 0.0, "endTime": 2.5, "text": "Hi"}],
        }
        assert Transcript.from_dict(data) == transcript

    @pytest.mark.parametrize("start,end", [(5, 5), (6, 5)])
    def test_start_must_precede_end(self, start, end):
        with pytest.raises(ValidationError, match="must be before"):
            TranscriptSegment(start_time=start, end_time=end, text="x")


class TestHotspotModels:
    """Tests for hotspot models."""

    def test_type_labels(self):
        assert HotspotType.SIGNIFICANT_DROP.label == "drop"
        assert HotspotType.INTEREST_POINT.label == "interest point"
        assert HotspotType.ENGAGEMENT_PEAK.label == "engagement peak"

    def test_with_caption_returns_copy(self):
        detected = DetectedHotspot(
            timestamp=3.0, percentage_change=-12, type=HotspotType.SIGNIFICANT_DROP
        )
        captioned = detected.with_caption("words")

        assert captioned.caption_text == "words"
        assert detected.caption_text is None

    def test_hotspot_type_serializes_as_name(self):
        hotspot = Hotspot(
            id="hotspot-1",
            video_id="abc",
            type=HotspotType.INTEREST_POINT,
            timestamp=1.0,
            percentage_change=7,
        )
        data = hotspot.to_dict()
        assert data["type"] == "INTEREST_POINT"
        assert data["percentageChange"] == 7
        assert data["transcriptText"] == ""

    def test_percentage_change_must_be_integral(self):
        with pytest.raises(ValidationError):
            DetectedHotspot(timestamp=1.0, percentage_change=7.5, type=HotspotType.INTEREST_POINT)


class TestResponseSchemas:
    """Tests for text-generation response schemas."""

    def test_explanation_defaults(self):
        response = HotspotExplanationResponse.model_validate({})
        assert response.reasons == []
        assert response.suggestion == ""

    def test_explanation_ignores_extra_fields(self):
        response = HotspotExplanationResponse.model_validate(
            {"reasons": ["a", "b"], "suggestion": "s", "confidence": 0.9}
        )
        assert response.reasons == ["a", "b"]

    def test_insight_null_fields_become_empty(self):
        insight = ActionableInsightResponse.model_validate(
            {
                "toAvoid": None,
                "toInclude": ["y"],
                "aiRecommendation": None,
                "estimatedImprovement": None,
            }
        ).to_insight()

        assert insight.to_avoid == []
        assert insight.to_include == ["y"]
        assert insight.ai_recommendation == ""
        assert insight.estimated_improvement == ""

    def test_insight_to_model(self):
        insight = ActionableInsightResponse.model_validate(
            {"toAvoid": ["x"], "aiRecommendation": "Do y."}
        ).to_insight()

        assert insight.to_avoid == ["x"]
        assert insight.to_include == []
        assert insight.ai_recommendation == "Do y."
        assert insight.to_dict()["aiRecommendation"] == "Do y."
