"""
Transcript helpers.

Parsing SRT caption files into transcript segments, loading transcripts from
disk, plain-text export and search.
"""

import json
import math
import re
from pathlib import Path

from .exceptions import InvalidInputError
from .models import Transcript, TranscriptSegment

SRT_TIMESTAMP_LINE = re.compile(
    r"^(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})$"
)


def format_time(seconds: float) -> str:
    """Format seconds as M:SS (minutes unpadded, both parts floored)."""
    minutes = math.floor(seconds / 60)
    remaining_seconds = math.floor(seconds % 60)
    return f"{minutes}:{remaining_seconds:02d}"


def srt_time_to_seconds(srt_time: str) -> float:
    """Convert an SRT timestamp (HH:MM:SS,mmm) to seconds."""
    clock, milliseconds = srt_time.strip().split(",")
    hours, minutes, seconds = (int(part) for part in clock.split(":"))
    return hours * 3600 + minutes * 60 + seconds + int(milliseconds) / 1000


def parse_srt(srt_content: str) -> list[TranscriptSegment]:
    """Parse SRT caption content into transcript segments.

    Multi-line caption text is joined with spaces. Cues with an empty or
    inverted time range are skipped.

    Args:
        srt_content: Raw SRT file content.

    Returns:
        Segments in file order.
    """
    segments: list[TranscriptSegment] = []
    start_time: float | None = None
    end_time: float | None = None
    text_lines: list[str] = []
    parsing_text = False

    def flush() -> None:
        if start_time is not None and end_time is not None and text_lines:
            if start_time < end_time:
                segments.append(
                    TranscriptSegment(
                        start_time=start_time,
                        end_time=end_time,
                        text=" ".join(text_lines),
                    )
                )

    for raw_line in srt_content.splitlines():
        line = raw_line.strip().lstrip("\ufeff")

        if line.isdigit() and not parsing_text:
            # Cue number starts a new entry
            flush()
            start_time, end_time, text_lines = None, None, []
            continue

        match = SRT_TIMESTAMP_LINE.match(line)
        if match:
            start_time = srt_time_to_seconds(match.group(1))
            end_time = srt_time_to_seconds(match.group(2))
            parsing_text = True
        elif parsing_text:
            if line:
                text_lines.append(line)
            else:
                # Blank line ends the cue text
                parsing_text = False

    flush()
    return segments


def load_transcript(path: Path | str, video_id: str) -> Transcript:
    """Load a transcript from a .srt file or a JSON file.

    JSON may be either a Transcript object ({"videoId", "entries"}) or a
    bare list of segments.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If a JSON file cannot be parsed.
        InvalidInputError: If the JSON is neither an object nor a list.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript not found: {path}")

    content = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".srt":
        return Transcript(video_id=video_id, entries=parse_srt(content))

    data = json.loads(content)
    if isinstance(data, list):
        data = {"videoId": video_id, "entries": data}
    elif not isinstance(data, dict):
        raise InvalidInputError(
            f"Transcript {path} must be a JSON object or list, got {type(data).__name__}"
        )
    data.setdefault("videoId", video_id)
    return Transcript.from_dict(data)


def export_transcript(transcript: Transcript) -> str:
    """Render a transcript as plain text, one "[M:SS] text" block per entry."""
    return "\n\n".join(
        f"[{format_time(entry.start_time)}] {entry.text}" for entry in transcript.entries
    )


def search_transcript(transcript: Transcript, term: str) -> list[TranscriptSegment]:
    """Return entries whose text contains the term, case-insensitively."""
    needle = term.lower()
    return [entry for entry in transcript.entries if needle in entry.text.lower()]
