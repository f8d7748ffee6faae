"""
Command-line front-end for the Employee Feedback Analyzer.

Examples::

    feedback-analyzer analyze "The new policy is confusing and stressful"
    feedback-analyzer analyze --file feedback.txt --json
    feedback-analyzer transcribe meeting.wav
    feedback-analyzer record
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from src.core.config import get_settings
from src.core.models import AnalysisResult
from src.core.utils import configure_logging
from src.services.audio.microphone import MicrophoneSource
from src.services.session import FeedbackSession


def format_result(result: AnalysisResult) -> str:
    """Render an analysis result as plain text for the terminal."""
    percent = max(0, min(100, round(result.intensity * 100)))
    lines = [
        f"Sentiment:          {result.sentiment}",
        f"Intensity:          {percent}% [{'#' * (percent // 5):<20}]",
        f"Summary:            {result.summary}",
        f"Moderation:         {result.moderation.action}",
        f"  Reason:           {result.moderation.reason}",
        f"Actionable insight: {result.actionable_insight}",
    ]
    return "\n".join(lines)


def _print_outcome(session: FeedbackSession, as_json: bool) -> int:
    state = session.state
    if state.error:
        print(state.error, file=sys.stderr)
        return 1
    if state.result is None:
        return 0
    if as_json:
        print(state.result.model_dump_json(indent=2))
    else:
        print(format_result(state.result))
    return 0


def _read_feedback(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text:
        return args.text
    return sys.stdin.read()


# mimetypes reports .webm as video and .wav as audio/x-wav.
_AUDIO_MIME_TYPES = {
    ".wav": "audio/wav",
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".mp3": "audio/mp3",
    ".flac": "audio/flac",
}


def _guess_mime_type(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in _AUDIO_MIME_TYPES:
        return _AUDIO_MIME_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "audio/wav"


async def _analyze(session: FeedbackSession, text: str) -> None:
    session.edit_text(text)
    await session.analyze()


async def _record(session: FeedbackSession, as_json: bool) -> int:
    """Record from the microphone until Enter, then ask before analyzing."""
    state = session.state
    try:
        if not await session.start_recording():
            print(state.error or "Recording could not be started.", file=sys.stderr)
            return 1

        print("Recording... press Enter to stop.", file=sys.stderr)
        await asyncio.to_thread(sys.stdin.readline)
        print("Transcribing audio... Please wait.", file=sys.stderr)
        await session.stop_recording()
    finally:
        await session.close()

    if state.error:
        print(state.error, file=sys.stderr)
        return 1
    if not state.feedback_text:
        print("No speech was recognised.", file=sys.stderr)
        return 1

    print(f"Transcribed Audio:\n{state.feedback_text}\n")
    print("Analyze this feedback? [y/N] ", end="", flush=True, file=sys.stderr)
    answer = await asyncio.to_thread(sys.stdin.readline)
    if answer.strip().lower() not in ("y", "yes"):
        return 0

    await session.analyze()
    return _print_outcome(session, as_json)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedback-analyzer",
        description="Transcribe and analyze employee feedback with an LLM",
    )
    output = argparse.ArgumentParser(add_help=False)
    output.add_argument(
        "--json",
        action="store_true",
        help="Print the analysis result as JSON",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser(
        "analyze", parents=[output], help="Analyze typed feedback"
    )
    analyze.add_argument("text", nargs="?", help="Feedback text (stdin when omitted)")
    analyze.add_argument("--file", help="Read feedback text from a file")

    transcribe = subparsers.add_parser("transcribe", help="Transcribe an audio file")
    transcribe.add_argument("audio_file", help="Path to the recording (wav, webm, ogg, ...)")

    subparsers.add_parser(
        "record", parents=[output], help="Record from the microphone, then analyze"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point with CLI argument parsing."""
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    if args.command == "analyze":
        session = FeedbackSession.from_settings()
        asyncio.run(_analyze(session, _read_feedback(args)))
        return _print_outcome(session, args.json)

    if args.command == "transcribe":
        path = Path(args.audio_file)
        session = FeedbackSession.from_settings()
        asyncio.run(session.transcribe_clip(path.read_bytes(), _guess_mime_type(path)))
        if session.state.error:
            print(session.state.error, file=sys.stderr)
            return 1
        print(session.state.feedback_text)
        return 0

    session = FeedbackSession.from_settings(source=MicrophoneSource())
    return asyncio.run(_record(session, args.json))


if __name__ == "__main__":
    sys.exit(main())
