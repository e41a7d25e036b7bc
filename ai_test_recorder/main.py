"""Command-line entry point for the AI test recorder."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from .ai import AiClient, SelectorContext
from .candidates import normalize_selector_response, parse_json_from_text
from .config import get_settings
from .export import ExportEngine, SupportedFramework, SupportedLanguage
from .utils.logging import configure_logging

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _read_text(parser: argparse.ArgumentParser, path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        parser.error(f"cannot read {path}: {e.strerror or e}")


def _read_json(parser: argparse.ArgumentParser, path: str) -> Any:
    try:
        return json.loads(_read_text(parser, path))
    except ValueError as e:
        parser.error(f"{path} is not valid JSON: {e}")


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_codegen(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print a generated script for the recorded events."""
    data = _read_json(parser, args.events)
    events = data.get("events") if isinstance(data, dict) else data
    if not isinstance(events, list):
        parser.error("events file must contain a list or an object with an 'events' list")

    result = ExportEngine().export(events, framework=args.framework, language=args.language)
    if not result.success:
        logger.error("Export failed", error=result.error)
        return EXIT_FAILED
    print(result.code)
    return EXIT_OK


def run_normalize(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the normalized candidates for a saved AI response."""
    text = _read_text(parser, args.response)
    parsed = parse_json_from_text(text)
    response = normalize_selector_response(parsed if parsed is not None else text, args.max_candidates)
    _print_json(response.to_dict())
    return EXIT_OK if response.candidates else EXIT_FAILED


async def _suggest(event: Any, context: SelectorContext) -> dict:
    client = AiClient.from_settings(get_settings())
    result = await client.suggest_selectors(event, context)
    return result.to_dict()


def run_suggest(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Request selector suggestions for one recorded event."""
    event = _read_json(parser, args.event)
    if not isinstance(event, dict):
        parser.error("event file must contain a JSON object")

    context = SelectorContext(
        tab_id=args.tab_id,
        ai_model=args.model,
        test_case=args.test_case or "",
        test_url=args.test_url or "",
    )
    result = asyncio.run(_suggest(event, context))
    _print_json(result)
    return EXIT_OK if result.get("ok") else EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ai-test-recorder",
        description="AI-assisted selector resolution and test script export",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    codegen = subparsers.add_parser("codegen", help="Generate a test script from recorded events")
    codegen.add_argument("events", help="JSON file with a list of events or {\"events\": [...]}")
    codegen.add_argument(
        "--framework", "-f",
        default=SupportedFramework.PLAYWRIGHT.value,
        choices=[fw.value for fw in SupportedFramework],
        help="Target framework (default: playwright)",
    )
    codegen.add_argument(
        "--language", "-l",
        default=SupportedLanguage.PYTHON.value,
        choices=[lang.value for lang in SupportedLanguage],
        help="Target language (default: python)",
    )
    codegen.set_defaults(handler=run_codegen)

    normalize = subparsers.add_parser("normalize", help="Normalize a saved AI selector response")
    normalize.add_argument("response", help="File holding the raw AI response body")
    normalize.add_argument(
        "--max-candidates",
        type=int,
        default=None,
        help="Upper bound on returned candidates (default: from settings)",
    )
    normalize.set_defaults(handler=run_normalize)

    suggest = subparsers.add_parser("suggest", help="Ask the AI endpoint for selector candidates")
    suggest.add_argument("event", help="JSON file holding one recorded event")
    suggest.add_argument("--tab-id", type=int, help="Tab used for live match counting")
    suggest.add_argument("--model", help="Model override for this request")
    suggest.add_argument("--test-case", help="Test case description sent as context")
    suggest.add_argument("--test-url", help="URL under test sent as context")
    suggest.set_defaults(handler=run_suggest)

    return parser


def cli(argv: Optional[list[str]] = None) -> int:
    """Command-line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    if getattr(args, "max_candidates", "unset") is None:
        args.max_candidates = settings.max_candidates

    return args.handler(parser, args)


def main() -> None:
    """Console script entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
