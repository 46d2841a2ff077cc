"""Selection of the most significant hotspots."""

from typing import Sequence, TypeVar

from ..models import DetectedHotspot, Hotspot

MAX_HOTSPOTS = 5  # Upper bound on hotspots sent to the explainer per video

H = TypeVar("H", DetectedHotspot, Hotspot)


def select_hotspots(hotspots: Sequence[H], limit: int = MAX_HOTSPOTS) -> list[H]:
    """Return the hotspots with the largest absolute change, at most `limit`.

    The sort is stable, so hotspots with equal magnitude keep detection order.
    """
    ranked = sorted(hotspots, key=lambda h: abs(h.percentage_change), reverse=True)
    return ranked[:limit]
