"""
Hotspot detection over a retention curve.

Compares each retention point with the point WINDOW_SIZE positions earlier
and classifies the change in percentage points. Every qualifying position
yields its own hotspot; adjacent windows around one retention event are not
merged.
"""

import math
from typing import Optional

from ..exceptions import InvalidInputError
from ..models import DetectedHotspot, HotspotType, RetentionCurve

WINDOW_SIZE = 5  # Lookback in point positions, not seconds
DROP_THRESHOLD = -10  # Percentage points, inclusive
INTEREST_THRESHOLD = 5  # Percentage points, inclusive
PEAK_THRESHOLD = 20  # Percentage points, inclusive


def to_percentage_points(change: float) -> int:
    """Convert a fractional change to whole percentage points, rounding half up."""
    return math.floor(change * 100 + 0.5)


def classify_change(percentage_change: int) -> Optional[HotspotType]:
    """Classify a change in percentage points.

    Returns:
        The hotspot type, or None if the change is not significant.
    """
    if percentage_change <= DROP_THRESHOLD:
        return HotspotType.SIGNIFICANT_DROP
    if percentage_change >= PEAK_THRESHOLD:
        return HotspotType.ENGAGEMENT_PEAK
    if percentage_change >= INTEREST_THRESHOLD:
        return HotspotType.INTEREST_POINT
    return None


def validate_curve(curve: RetentionCurve) -> None:
    """Check that a curve has points in strictly increasing time order.

    Also rejects percentages that are not finite or outside 0..1, which can
    only get here on points built without validation.

    Raises:
        InvalidInputError: If the curve is empty, out of order or out of range.
    """
    if not curve.points:
        raise InvalidInputError(f"Retention curve for {curve.video_id} has no points")

    for point in curve.points:
        if not (math.isfinite(point.percentage) and 0.0 <= point.percentage <= 1.0):
            raise InvalidInputError(
                f"Retention curve for {curve.video_id} has an invalid percentage "
                f"{point.percentage!r} at t={point.timestamp}"
            )

    for previous, current in zip(curve.points, curve.points[1:]):
        if current.timestamp <= previous.timestamp:
            raise InvalidInputError(
                f"Retention curve for {curve.video_id} is not strictly increasing "
                f"at t={current.timestamp} (previous t={previous.timestamp})"
            )


def detect_hotspots(curve: RetentionCurve) -> list[DetectedHotspot]:
    """Scan a retention curve and return every significant change in scan order.

    Args:
        curve: The retention curve to scan.

    Returns:
        Detected hotspots, ordered by position in the curve. Empty when the
        curve has WINDOW_SIZE points or fewer.

    Raises:
        InvalidInputError: If the curve is empty or out of order.
    """
    validate_curve(curve)

    points = curve.points
    hotspots = []
    for i in range(WINDOW_SIZE, len(points)):
        change = points[i].percentage - points[i - WINDOW_SIZE].percentage
        percentage_change = to_percentage_points(change)
        hotspot_type = classify_change(percentage_change)
        if hotspot_type is None:
            continue
        hotspots.append(
            DetectedHotspot(
                timestamp=points[i].timestamp,
                percentage_change=percentage_change,
                type=hotspot_type,
            )
        )
    return hotspots
