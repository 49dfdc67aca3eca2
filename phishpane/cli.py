"""Command-line host for the analysis pipeline.

Plays the mail client: the open message is a saved .eml file and the task
pane is the terminal.
"""

import argparse
import asyncio
import sys
from html import unescape
from pathlib import Path
from typing import TextIO

from phishpane.config import get_settings
from phishpane.host import EmlMessageHandle, html_to_text
from phishpane.schemas.presentation import RiskPresentation
from phishpane.services.analysis_client import AnalysisClient
from phishpane.services.orchestrator import AnalysisOrchestrator
from phishpane.services.renderer import render_results_html
from phishpane.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

OUTPUT_FORMATS = ("text", "html", "json")


def format_text(presentation: RiskPresentation) -> str:
    """Plain-text report. Terminal output is not an HTML sink, so entities are decoded."""
    lines = [
        f"Risk score: {presentation.score_percent}%",
        unescape(presentation.band_label),
        "",
        "Analysis:",
    ]
    lines.extend(unescape(p) for p in presentation.narrative_paragraphs)
    lines.append("")
    lines.append("Red flags:")
    lines.extend(f"  - {unescape(flag)}" for flag in presentation.flags)
    lines.append("")
    lines.append("Email details:")
    lines.append(html_to_text(presentation.detail_summary))
    return "\n".join(lines)


class ConsoleSurface:
    """Presentation surface that writes the outcome to the terminal."""

    def __init__(
        self,
        output_format: str = "text",
        out: TextIO = sys.stdout,
        err: TextIO = sys.stderr,
    ) -> None:
        self.output_format = output_format
        self.out = out
        self.err = err
        self.trigger_enabled = True
        self.busy = False

    def clear(self) -> None:
        pass

    def set_trigger_enabled(self, enabled: bool) -> None:
        self.trigger_enabled = enabled

    def set_busy(self, busy: bool) -> None:
        self.busy = busy
        if busy:
            logger.info("Analyzing email...")

    def render(self, presentation: RiskPresentation) -> None:
        if self.output_format == "json":
            text = presentation.model_dump_json(indent=2)
        elif self.output_format == "html":
            text = render_results_html(presentation)
        else:
            text = format_text(presentation)
        print(text, file=self.out)

    def show_error(self, message: str) -> None:
        print(f"Error: {message}", file=self.err)


async def run_analysis(
    path: Path,
    use_claude: bool,
    client: AnalysisClient,
    surface: ConsoleSurface,
) -> int:
    """Analyze one .eml file. Returns the process exit status."""
    message = EmlMessageHandle.from_path(path)
    orchestrator = AnalysisOrchestrator(surface, client=client)
    result = await orchestrator.analyze(message, use_claude=use_claude)
    return 0 if result.is_ok() else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phishpane",
        description="Submit an email for phishing analysis and show the risk summary.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a saved .eml message.")
    analyze.add_argument("path", type=Path, help="Path to the .eml file.")
    analyze.add_argument(
        "--claude",
        action="store_true",
        default=None,
        help="Use the alternate (Claude) analysis backend.",
    )
    analyze.add_argument("--base-url", help="Override the analysis server base URL.")
    analyze.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format for the result.",
    )
    analyze.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(debug=args.debug or settings.debug, stream=sys.stderr)

    endpoint = settings.analysis_endpoint()
    if args.base_url:
        endpoint = endpoint.model_copy(update={"base_url": args.base_url.rstrip("/")})
    use_claude = settings.use_claude if args.claude is None else args.claude

    if not args.path.is_file():
        print(f"Error: no such file: {args.path}", file=sys.stderr)
        return 2

    surface = ConsoleSurface(output_format=args.format)
    return asyncio.run(
        run_analysis(args.path, use_claude, AnalysisClient(endpoint), surface)
    )


if __name__ == "__main__":
    sys.exit(main())
