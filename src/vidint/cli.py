"""vidint command-line interface.

Usage:
    vidint-cli analyze_labels <gcs_path> [--timeout SECONDS] [-v]
    vidint-cli analyze_labels_local <local_path>
    vidint-cli analyze_faces <gcs_path>
    vidint-cli analyze_safe_search <gcs_path>
    vidint-cli analyze_shots <gcs_path>
"""

import argparse
import asyncio
import logging
import sys

from vidint.config import settings
from vidint.errors import VidIntError
from vidint.models.annotation import VideoAnnotationResults
from vidint.services.analysis import VideoAnalysisService
from vidint.services.video_intelligence import VideoIntelligenceClient

USAGE = """\
Usage: vidint-cli [command] [arguments]

Commands:
  analyze_labels       <gcs_path>   Detects labels given a remote storage path.
  analyze_labels_local <local_path> Detects labels given a local file path.
  analyze_faces        <gcs_path>   Detects faces given a remote storage path.
  analyze_safe_search  <gcs_path>   Detects safe-search features for the path.
  analyze_shots        <gcs_path>   Detects camera shot changes.
"""

# Command names double as VideoAnalysisService method names
COMMANDS: dict[str, tuple[str, str]] = {
    # name: (argument name, help)
    "analyze_labels": ("gcs_path", "Detects labels given a remote storage path."),
    "analyze_labels_local": ("local_path", "Detects labels given a local file path."),
    "analyze_faces": ("gcs_path", "Detects faces given a remote storage path."),
    "analyze_safe_search": ("gcs_path", "Detects safe-search features for the path."),
    "analyze_shots": ("gcs_path", "Detects camera shot changes."),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vidint-cli")
    subparsers = parser.add_subparsers(dest="command")

    for name, (arg_name, help_text) in COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("path", metavar=arg_name, help=help_text)
        sub.add_argument(
            "--timeout",
            type=float,
            default=None,
            help="Stop waiting after this many seconds (default: wait until done)",
        )
        sub.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser


async def run_command(args: argparse.Namespace) -> VideoAnnotationResults:
    """Run one analysis command on a fresh client."""
    async with VideoIntelligenceClient(max_poll_time=args.timeout) as client:
        service = VideoAnalysisService(client)
        handler = getattr(service, args.command)
        return await handler(args.path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)

    # Unknown or missing command, or a command without its path: usage only,
    # nothing is sent
    if not argv or argv[0] not in COMMANDS or len(argv) < 2 or argv[1].startswith("-"):
        print(USAGE, end="")
        return 0

    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        asyncio.run(run_command(args))
    except VidIntError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
