"""
Synthetic demo data.

Produces a realistic retention curve and transcript for a video so the
pipeline can be tried without real analytics. The curve has an early
drop-off, an interest point at 20%, a sharp drop at 32%, an engagement peak
at 80% and an end-of-video decline. A seed makes the output repeatable.
"""

import math
import random
from typing import Optional

from .models import RetentionCurve, RetentionPoint, Transcript, TranscriptSegment

SAMPLE_POINT_COUNT = 100
SAMPLE_DURATION_SECONDS = 1070
CAPTION_SEGMENT_SECONDS = 30


def sample_retention_curve(
    video_id: str,
    duration_seconds: float = SAMPLE_DURATION_SECONDS,
    seed: Optional[int] = 0,
) -> RetentionCurve:
    """Generate a 100-point retention curve spanning the video."""
    rng = random.Random(seed)
    time_step = duration_seconds / SAMPLE_POINT_COUNT
    current = 1.0
    points = []

    for i in range(SAMPLE_POINT_COUNT):
        if i < 5:
            current -= 0.03 + rng.random() * 0.02  # Initial drop-off
        elif i == 20:
            current += 0.15
        elif i == 32:
            current -= 0.32
        elif i == 80:
            current += 0.22
        elif i > 90:
            current -= 0.05 + rng.random() * 0.03  # End-of-video drop
        else:
            current -= 0.003 + rng.random() * 0.006

        current = max(0.0, min(1.0, current))
        points.append(RetentionPoint(timestamp=i * time_step, percentage=current))

    return RetentionCurve(video_id=video_id, points=points)


def sample_transcript(
    video_id: str,
    duration_seconds: float = SAMPLE_DURATION_SECONDS,
) -> Transcript:
    """Generate placeholder captions in 30-second segments."""
    entries = []
    segment_count = math.ceil(duration_seconds / CAPTION_SEGMENT_SECONDS)
    for i in range(segment_count):
        start = i * CAPTION_SEGMENT_SECONDS
        end = min((i + 1) * CAPTION_SEGMENT_SECONDS, duration_seconds)
        if end <= start:
            break
        entries.append(
            TranscriptSegment(
                start_time=start,
                end_time=end,
                text=(
                    f"Caption text for segment {i + 1}. This would contain the actual "
                    "transcription of the video audio."
                ),
            )
        )
    return Transcript(video_id=video_id, entries=entries)
