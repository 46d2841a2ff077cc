"""Main CLI entry point for retention hotspot analysis.

Usage:
    python -m retention_insights.cli analyze curve.json transcript.srt      # Full analysis
    python -m retention_insights.cli analyze curve.json captions.json -o out.json
    python -m retention_insights.cli explain <video_id> 95.5 -32 --text "..."
    python -m retention_insights.cli insights hotspots.json                 # Summary only
    python -m retention_insights.cli transcript captions.srt                # Export text
    python -m retention_insights.cli transcript captions.srt --search price
    python -m retention_insights.cli sample demo -o samples/                # Demo inputs

Text generation:
    By default the OpenAI provider is used when OPENAI_API_KEY is set;
    otherwise fixed fallback explanations are returned. --mock uses canned
    LLM responses, --no-ai forces fallback content.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..config import Config, load_config
from ..exceptions import InvalidInputError

console = Console()


def _resolve_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config)
    if args.mock:
        config.llm.provider = "mock"
    elif args.no_ai:
        config.llm.provider = "none"
    return config


def _build_pipeline(args: argparse.Namespace):
    from ..hotspots import HotspotPipeline

    return HotspotPipeline.from_config(_resolve_config(args), verbose=args.verbose)


def _load_curve(path: Path | str):
    from ..models import RetentionCurve

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Retention curve not found: {path}")
    with open(path) as f:
        return RetentionCurve.from_dict(json.load(f))


def _write_json(data, output: str | None) -> None:
    text = json.dumps(data, indent=2)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n")
        console.print(f"[green]Saved:[/green] {output_path}")
    else:
        print(text)


def _print_hotspot_table(hotspots) -> None:
    from ..transcript import format_time

    table = Table(title="Retention Hotspots")
    table.add_column("Time", style="cyan")
    table.add_column("Type")
    table.add_column("Change", justify="right")
    table.add_column("Caption", max_width=40)
    table.add_column("Suggestion", max_width=50)

    for hotspot in hotspots:
        change_style = "red" if hotspot.percentage_change < 0 else "green"
        table.add_row(
            format_time(hotspot.timestamp),
            hotspot.type.label,
            f"[{change_style}]{hotspot.percentage_change:+d}%[/{change_style}]",
            hotspot.transcript_text or "-",
            hotspot.suggestion,
        )
    console.print(table)


def _print_insight(insight) -> None:
    console.print("\n[bold]To avoid[/bold]")
    for item in insight.to_avoid:
        console.print(f"  - {item}")
    console.print("[bold]To include[/bold]")
    for item in insight.to_include:
        console.print(f"  - {item}")
    console.print(f"\n[bold]Recommendation:[/bold] {insight.ai_recommendation}")
    console.print(f"[bold]Estimated improvement:[/bold] {insight.estimated_improvement}")


def cmd_analyze(args: argparse.Namespace) -> int:
    """Detect, explain and summarize hotspots for one video."""
    from ..transcript import load_transcript

    try:
        curve = _load_curve(args.curve)
        transcript = load_transcript(args.transcript, video_id=curve.video_id)
        pipeline = _build_pipeline(args)
        analysis = asyncio.run(pipeline.analyze(curve, transcript))
    except (FileNotFoundError, json.JSONDecodeError, InvalidInputError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json or args.output:
        _write_json(analysis.to_dict(), args.output)
        return 0

    if not analysis.hotspots:
        console.print(f"No significant retention changes found for {analysis.video_id}.")
    else:
        _print_hotspot_table(analysis.hotspots)
    _print_insight(analysis.actionable_insight)
    return 0


def cmd_explain(args: argparse.Namespace) -> int:
    """Explain a single retention change."""
    try:
        pipeline = _build_pipeline(args)
        hotspot = asyncio.run(
            pipeline.explain_moment(
                video_id=args.video_id,
                timestamp=args.timestamp,
                percentage_change=args.percentage_change,
                transcript_text=args.text or "",
            )
        )
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write_json(hotspot.to_dict(), args.output)
    return 0


def cmd_insights(args: argparse.Namespace) -> int:
    """Summarize a list of already explained hotspots."""
    from ..models import Hotspot

    path = Path(args.hotspots)
    if not path.exists():
        print(f"Error: Hotspots file not found: {path}", file=sys.stderr)
        return 1

    try:
        with open(path) as f:
            data = json.load(f)
        # Accept either a bare list or a full analysis result
        if isinstance(data, dict):
            data = data.get("hotspots", [])
        if not isinstance(data, list):
            raise InvalidInputError(
                f"{path} must contain a list of hotspots or an analysis result"
            )
        hotspots = [Hotspot.from_dict(item) for item in data]
    except (json.JSONDecodeError, InvalidInputError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    pipeline = _build_pipeline(args)
    insight = asyncio.run(pipeline.generate_insights(hotspots))
    _write_json(insight.to_dict(), args.output)
    return 0


def cmd_transcript(args: argparse.Namespace) -> int:
    """Export a transcript as plain text, optionally filtered by a search term."""
    from ..models import Transcript
    from ..transcript import export_transcript, load_transcript, search_transcript

    try:
        transcript = load_transcript(args.transcript, video_id=args.video_id)
    except (FileNotFoundError, json.JSONDecodeError, InvalidInputError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.search:
        transcript = Transcript(
            video_id=transcript.video_id,
            entries=search_transcript(transcript, args.search),
        )
        if not transcript.entries:
            print(f"No captions match '{args.search}'")
            return 0

    text = export_transcript(transcript)
    if args.output:
        Path(args.output).write_text(text + "\n")
        console.print(f"[green]Saved:[/green] {args.output}")
    else:
        print(text)
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    """Write a synthetic retention curve and transcript for trying the pipeline."""
    from ..samples import sample_retention_curve, sample_transcript

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    curve = sample_retention_curve(args.video_id, duration_seconds=args.duration, seed=args.seed)
    transcript = sample_transcript(args.video_id, duration_seconds=args.duration)

    curve_path = output_dir / f"{args.video_id}_retention.json"
    transcript_path = output_dir / f"{args.video_id}_transcript.json"
    curve_path.write_text(json.dumps(curve.to_dict(), indent=2) + "\n")
    transcript_path.write_text(json.dumps(transcript.to_dict(), indent=2) + "\n")

    print(f"Retention curve: {curve_path} ({len(curve.points)} points)")
    print(f"Transcript: {transcript_path} ({len(transcript.entries)} entries)")
    return 0


def _add_llm_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--mock",
        action="store_true",
        help="Use canned LLM responses (no API calls)",
    )
    group.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip text generation and use fallback content",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress messages",
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Retention hotspot analysis CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: ./config.yaml if present)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a retention curve")
    analyze_parser.add_argument("curve", help="Retention curve JSON file")
    analyze_parser.add_argument("transcript", help="Transcript file (.srt or .json)")
    analyze_parser.add_argument("-o", "--output", help="Write the analysis JSON to this file")
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis as JSON instead of a table",
    )
    _add_llm_options(analyze_parser)
    analyze_parser.set_defaults(func=cmd_analyze)

    # explain command
    explain_parser = subparsers.add_parser("explain", help="Explain a single retention change")
    explain_parser.add_argument("video_id", help="Video ID")
    explain_parser.add_argument("timestamp", type=float, help="Seconds from the start")
    explain_parser.add_argument(
        "percentage_change",
        type=int,
        help="Signed change in percentage points (e.g. -32)",
    )
    explain_parser.add_argument("--text", help="Caption text spoken at this moment")
    explain_parser.add_argument("-o", "--output", help="Write the hotspot JSON to this file")
    _add_llm_options(explain_parser)
    explain_parser.set_defaults(func=cmd_explain)

    # insights command
    insights_parser = subparsers.add_parser(
        "insights", help="Summarize explained hotspots into actionable insights"
    )
    insights_parser.add_argument("hotspots", help="JSON file with hotspots or an analysis result")
    insights_parser.add_argument("-o", "--output", help="Write the insight JSON to this file")
    _add_llm_options(insights_parser)
    insights_parser.set_defaults(func=cmd_insights)

    # transcript command
    transcript_parser = subparsers.add_parser("transcript", help="Export a transcript as text")
    transcript_parser.add_argument("transcript", help="Transcript file (.srt or .json)")
    transcript_parser.add_argument("--video-id", default="video", help="Video ID for .srt input")
    transcript_parser.add_argument("--search", help="Only include captions containing this text")
    transcript_parser.add_argument("-o", "--output", help="Write the text to this file")
    transcript_parser.set_defaults(func=cmd_transcript)

    # sample command
    sample_parser = subparsers.add_parser("sample", help="Write synthetic demo inputs")
    sample_parser.add_argument("video_id", help="Video ID for the generated data")
    sample_parser.add_argument(
        "--duration",
        type=float,
        default=1070,
        help="Video duration in seconds (default: 1070)",
    )
    sample_parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    sample_parser.add_argument(
        "-o", "--output-dir",
        default=".",
        help="Directory for the generated files (default: current directory)",
    )
    sample_parser.set_defaults(func=cmd_sample)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
