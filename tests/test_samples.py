"""Tests for synthetic demo data."""

import pytest

from retention_insights.hotspots import detect_hotspots
from retention_insights.models import HotspotType
from retention_insights.samples import sample_retention_curve, sample_transcript


class TestSampleRetentionCurve:
    """Tests for sample_retention_curve."""

    def test_shape(self):
        curve = sample_retention_curve("demo")

        assert curve.video_id == "demo"
        assert len(curve.points) == 100
        assert curve.points[1].timestamp == pytest.approx(10.7)
        assert all(0.0 <= p.percentage <= 1.0 for p in curve.points)

    def test_timestamps_strictly_increasing(self):
        points = sample_retention_curve("demo", duration_seconds=300).points
        assert all(a.timestamp < b.timestamp for a, b in zip(points, points[1:]))

    def test_seed_is_repeatable(self):
        assert sample_retention_curve("demo", seed=7) == sample_retention_curve("demo", seed=7)

    def test_seeds_differ(self):
        assert sample_retention_curve("demo", seed=1) != sample_retention_curve("demo", seed=2)

    def test_contains_expected_events(self):
        curve = sample_retention_curve("demo")
        hotspots = detect_hotspots(curve)
        step = curve.points[1].timestamp

        drops = [h for h in hotspots if h.type == HotspotType.SIGNIFICANT_DROP]
        assert any(h.timestamp == pytest.approx(32 * step) for h in drops)

        rises = [h for h in hotspots if h.percentage_change > 0]
        assert any(h.timestamp == pytest.approx(20 * step) for h in rises)
        assert any(h.timestamp == pytest.approx(80 * step) for h in rises)


class TestSampleTranscript:
    """Tests for sample_transcript."""

    def test_covers_duration(self):
        transcript = sample_transcript("demo")

        assert transcript.video_id == "demo"
        assert len(transcript.entries) == 36
        assert transcript.entries[0].start_time == 0
        assert transcript.entries[-1].end_time == 1070

    def test_thirty_second_segments(self):
        entries = sample_transcript("demo", duration_seconds=90).entries
        assert [(e.start_time, e.end_time) for e in entries] == [(0, 30), (30, 60), (60, 90)]
