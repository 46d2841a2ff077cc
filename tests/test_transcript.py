"""Tests for transcript parsing, loading, export and search."""

import json

import pytest
from pydantic import ValidationError

from retention_insights.exceptions import InvalidInputError
from retention_insights.models import Transcript, TranscriptSegment
from retention_insights.transcript import (
    export_transcript,
    format_time,
    load_transcript,
    parse_srt,
    search_transcript,
    srt_time_to_seconds,
)

SAMPLE_SRT = """1
00:00:00,000 --> 00:00:04,500
Welcome back to the channel.

2
00:00:04,500 --> 00:00:09,000
Today we compare
three budget microphones.

3
00:01:35,250 --> 00:01:40,000
2024 was a big year for audio.
"""


class TestFormatTime:
    """Tests for M:SS formatting."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0:00"),
            (5, "0:05"),
            (59.9, "0:59"),
            (60, "1:00"),
            (95.5, "1:35"),
            (1070, "17:50"),
            (3725, "62:05"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected


class TestParseSrt:
    """Tests for SRT parsing."""

    def test_srt_time_to_seconds(self):
        assert srt_time_to_seconds("01:02:03,450") == pytest.approx(3723.45)

    def test_parse(self):
        segments = parse_srt(SAMPLE_SRT)

        assert len(segments) == 3
        assert segments[0] == TranscriptSegment(
            start_time=0.0, end_time=4.5, text="Welcome back to the channel."
        )
        assert segments[1].text == "Today we compare three budget microphones."
        assert segments[2].start_time == pytest.approx(95.25)

    def test_numeric_caption_line_is_text(self):
        srt = "1\n00:00:01,000 --> 00:00:02,000\n2024\n\n"
        assert [s.text for s in parse_srt(srt)] == ["2024"]

    def test_crlf_and_bom(self):
        srt = "\ufeff1\r\n00:00:01,000 --> 00:00:02,000\r\nHello\r\n"
        assert [s.text for s in parse_srt(srt)] == ["Hello"]

    def test_inverted_cue_skipped(self):
        srt = (
            "1\n00:00:05,000 --> 00:00:02,000\nBackwards\n\n"
            "2\n00:00:05,000 --> 00:00:06,000\nForwards\n"
        )
        assert [s.text for s in parse_srt(srt)] == ["Forwards"]

    def test_cue_without_text_skipped(self):
        srt = "1\n00:00:01,000 --> 00:00:02,000\n\n2\n00:00:02,000 --> 00:00:03,000\nHi\n"
        assert [s.text for s in parse_srt(srt)] == ["Hi"]

    def test_empty(self):
        assert parse_srt("") == []


class TestLoadTranscript:
    """Tests for loading transcripts from disk."""

    def test_srt(self, tmp_path):
        path = tmp_path / "captions.srt"
        path.write_text(SAMPLE_SRT, encoding="utf-8")

        transcript = load_transcript(path, video_id="abc")
        assert transcript.video_id == "abc"
        assert len(transcript.entries) == 3

    def test_json_object(self, tmp_path):
        path = tmp_path / "captions.json"
        path.write_text(
            json.dumps(
                {
                    "videoId": "from-file",
                    "entries": [{"startTime": 0, "endTime": 3, "text": "Hi"}],
                }
            )
        )
        transcript = load_transcript(path, video_id="abc")
        assert transcript.video_id == "from-file"
        assert transcript.entries[0].text == "Hi"

    def test_json_list(self, tmp_path):
        path = tmp_path / "captions.json"
        path.write_text(json.dumps([{"startTime": 0, "endTime": 3, "text": "Hi"}]))

        transcript = load_transcript(path, video_id="abc")
        assert transcript.video_id == "abc"
        assert len(transcript.entries) == 1

    def test_invalid_segment(self, tmp_path):
        path = tmp_path / "captions.json"
        path.write_text(json.dumps([{"startTime": 3, "endTime": 1, "text": "Hi"}]))
        with pytest.raises(ValidationError):
            load_transcript(path, video_id="abc")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_transcript(tmp_path / "missing.srt", video_id="abc")

    @pytest.mark.parametrize("content", ['"x"', "42", "null"])
    def test_json_scalar_rejected(self, tmp_path, content):
        path = tmp_path / "captions.json"
        path.write_text(content)
        with pytest.raises(InvalidInputError, match="JSON object or list"):
            load_transcript(path, video_id="abc")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "captions.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            load_transcript(path, video_id="abc")


class TestExportAndSearch:
    """Tests for plain-text export and search."""

    def test_export(self, transcript):
        assert export_transcript(transcript) == (
            "[0:00] Welcome back to the channel.\n\n"
            "[0:20] Here is the price comparison.\n\n"
            "[0:50] Grab the free cheatsheet below."
        )

    def test_export_empty(self):
        assert export_transcript(Transcript(video_id="abc")) == ""

    def test_search_case_insensitive(self, transcript):
        matches = search_transcript(transcript, "PRICE")
        assert [m.text for m in matches] == ["Here is the price comparison."]

    def test_search_no_match(self, transcript):
        assert search_transcript(transcript, "giveaway") == []
