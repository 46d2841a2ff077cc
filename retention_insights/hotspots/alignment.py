"""Alignment of hotspot timestamps with transcript segments."""

from typing import Optional

from ..models import DetectedHotspot, Transcript, TranscriptSegment


def find_segment(timestamp: float, transcript: Transcript) -> Optional[TranscriptSegment]:
    """Return the first segment whose [start_time, end_time] contains timestamp."""
    for entry in transcript.entries:
        if entry.start_time <= timestamp <= entry.end_time:
            return entry
    return None


def align_hotspot(hotspot: DetectedHotspot, transcript: Transcript) -> DetectedHotspot:
    """Attach the caption text covering the hotspot, if any.

    A timestamp that falls in a gap between segments leaves caption_text
    as None.
    """
    segment = find_segment(hotspot.timestamp, transcript)
    return hotspot.with_caption(segment.text if segment else None)


def align_hotspots(
    hotspots: list[DetectedHotspot], transcript: Transcript
) -> list[DetectedHotspot]:
    return [align_hotspot(hotspot, transcript) for hotspot in hotspots]
