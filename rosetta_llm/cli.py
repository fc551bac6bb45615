"""Rosetta command line: prose <-> AISP notation with optional LLM fallback."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

from rosetta_llm.config.constants import DEFAULT_ROUND_TRIP_RUNS, ConversionTier, LlmModel
from rosetta_llm.config.settings import get_settings
from rosetta_llm.errors import RosettaError
from rosetta_llm.infrastructure.logging.logger import setup_logging
from rosetta_llm.orchestrator.fallback import convert_with_fallback
from rosetta_llm.services.conversion.models import ConversionOptions, ConversionResult
from rosetta_llm.services.rosetta.converter import RosettaConverter
from rosetta_llm.services.rosetta.symbols import (
    get_all_categories,
    prose_to_symbol,
    symbol_to_prose,
    symbols_by_category,
)
from rosetta_llm.services.tier.selector import TierPolicy
from rosetta_llm.services.verification.verifier import verify_round_trip

logger = logging.getLogger(__name__)


def read_input(value: str | None) -> str:
    """Argument value, or all of stdin when omitted."""
    if value is not None:
        return value
    return sys.stdin.read().strip()


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="rosetta",
        description="Convert natural language prose to AISP symbolic notation",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.app_version}")
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr output")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert prose to AISP notation")
    convert.add_argument("-i", "--input", help="Prose to convert (stdin if omitted)")
    convert.add_argument(
        "-t", "--tier", choices=[t.value for t in ConversionTier], help="Force a conversion tier"
    )
    convert.add_argument("-f", "--format", choices=["text", "json"], default="text")
    convert.add_argument(
        "--llm-fallback", action="store_true", help="Enable LLM fallback for low confidence"
    )
    convert.add_argument(
        "--threshold",
        type=float,
        default=settings.confidence_threshold,
        help="Confidence threshold for the fallback",
    )
    convert.add_argument(
        "--model",
        choices=[m.value for m in LlmModel],
        default=settings.default_llm_model,
        help="Fallback model tier",
    )
    convert.add_argument(
        "--aisp-prompt", action="store_true", help="Use the AISP-register system prompt"
    )

    to_prose = sub.add_parser("to-prose", help="Convert AISP notation back to prose")
    to_prose.add_argument("-i", "--input", help="Notation to convert (stdin if omitted)")

    detect = sub.add_parser("detect-tier", help="Detect the conversion tier for prose")
    detect.add_argument("-i", "--input", help="Prose to analyze (stdin if omitted)")

    lookup = sub.add_parser("lookup", help="Look up the symbol for a prose pattern")
    lookup.add_argument("pattern")

    reverse = sub.add_parser("reverse", help="Look up the prose for a symbol")
    reverse.add_argument("symbol")

    symbols = sub.add_parser("symbols", help="List available symbols")
    symbols.add_argument("-c", "--category", help="Only this category")

    sub.add_parser("categories", help="List symbol categories")

    round_trip = sub.add_parser("round-trip", help="Test semantic preservation over rounds")
    round_trip.add_argument("-i", "--input", help="Prose to test (stdin if omitted)")
    round_trip.add_argument("-r", "--rounds", type=int, default=DEFAULT_ROUND_TRIP_RUNS)

    return parser


# ==========================================
#  COMMANDS
# ==========================================


def cmd_convert(args: argparse.Namespace) -> int:
    prose = read_input(args.input)
    options = ConversionOptions(
        enable_llm_fallback=args.llm_fallback,
        confidence_threshold=args.threshold,
        llm_model=args.model,
        tier_override=args.tier,
        use_aisp_prompt=args.aisp_prompt,
    )
    result = asyncio.run(convert_with_fallback(prose, options))

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(result.output)
        _print_summary(result)
    return 0


def _print_summary(result: ConversionResult) -> None:
    err = sys.stderr
    print("\n---", file=err)
    print(f"Tier: {result.tier.value if result.tier else '-'}", file=err)
    print(f"Confidence: {result.confidence * 100:.1f}%", file=err)
    if result.tokens:
        print(
            f"Tokens: {result.tokens.input} → {result.tokens.output} ({result.tokens.ratio:.2f}x)",
            file=err,
        )
    if result.used_fallback:
        print("LLM fallback: used", file=err)
    if result.unmapped:
        print(f"Unmapped: {', '.join(result.unmapped)}", file=err)


def cmd_to_prose(args: argparse.Namespace) -> int:
    print(_converter().to_prose(read_input(args.input)))
    return 0


def cmd_detect_tier(args: argparse.Namespace) -> int:
    print(_converter().detect_tier(read_input(args.input)).value)
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    symbol = prose_to_symbol(args.pattern)
    if symbol is None:
        print(f"No symbol found for pattern: {args.pattern}", file=sys.stderr)
        return 1
    print(symbol)
    return 0


def cmd_reverse(args: argparse.Namespace) -> int:
    prose = symbol_to_prose(args.symbol)
    if prose is None:
        print(f"No prose found for symbol: {args.symbol}", file=sys.stderr)
        return 1
    print(prose)
    return 0


def cmd_symbols(args: argparse.Namespace) -> int:
    if args.category:
        found = symbols_by_category(args.category)
        if not found:
            print(f"No symbols found for category: {args.category}", file=sys.stderr)
            print(f"Available categories: {', '.join(get_all_categories())}", file=sys.stderr)
            return 1
        for symbol in found:
            print(f"{symbol} → {symbol_to_prose(symbol)}")
        return 0

    for category in get_all_categories():
        print(f"\n=== {category} ===")
        for symbol in symbols_by_category(category):
            print(f"  {symbol} → {symbol_to_prose(symbol)}")
    return 0


def cmd_categories(args: argparse.Namespace) -> int:
    for category in get_all_categories():
        print(category)
    return 0


def cmd_round_trip(args: argparse.Namespace) -> int:
    original = read_input(args.input)
    report = verify_round_trip(original, args.rounds, converter=_converter())

    print(f"Original: {original}\n")
    for entry in report.rounds:
        print(f"Round {entry.round} (similarity: {entry.similarity * 100:.1f}%):")
        print(f"  AISP: {entry.notation}")
        print(f"  Prose: {entry.prose}\n")
    print(f"Final semantic similarity: {report.final_similarity * 100:.1f}%")

    if report.drifted:
        print("Warning: Semantic drift exceeded acceptable threshold", file=sys.stderr)
        return 1
    return 0


def _converter() -> RosettaConverter:
    return RosettaConverter(TierPolicy.from_settings(get_settings()))


COMMANDS = {
    "convert": cmd_convert,
    "to-prose": cmd_to_prose,
    "detect-tier": cmd_detect_tier,
    "lookup": cmd_lookup,
    "reverse": cmd_reverse,
    "symbols": cmd_symbols,
    "categories": cmd_categories,
    "round-trip": cmd_round_trip,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, json_output=False, silence_noisy_loggers=True)

    try:
        return COMMANDS[args.command](args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except RosettaError as e:
        logger.error("Command %s failed: %s", args.command, e, exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
