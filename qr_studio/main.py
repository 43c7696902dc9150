"""
QR Studio - Command Line Application

Generate and decode QR codes, and explain what a QR payload contains.

Commands:
- generate: encode text into a PNG (light or dark theme)
- decode:   read a QR code from an image file
- analyze:  classify a payload without touching any image

Recognised payloads: URL, WiFi, vCard contact, mailto, tel, SMS, geo,
iCalendar event, WhatsApp link and plain text.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from qr_studio.core.config import settings
from qr_studio.core.exceptions import InvalidConfigError, QrStudioError
from qr_studio.logging_utils import configure_logging, log_error
from qr_studio.presentation import render_analysis
from qr_studio.schemas.analysis import AnalysisResult, EncodeConfig
from qr_studio.services.qr_analyzer import analyze_payload
from qr_studio.services.qr_decoder import QrDecoderService
from qr_studio.services.qr_encoder import QrEncoderService
from qr_studio.services.qr_workflow import QrWorkflowService


def positive_int(value: str) -> int:
    """argparse type for image dimensions."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="qr-studio",
        description="Generate & decode QR codes and analyse their content."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.APP_VERSION}")
    parser.add_argument("--log-level", default=None, help=f"Logging level (default: {settings.LOG_LEVEL})")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_output_flags(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--json", action="store_true", help="Print the analysis as JSON")
        sub.add_argument("--dark", action="store_true", help="Use the dark theme")
        sub.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    generate = subparsers.add_parser("generate", help="Encode text into a QR code PNG")
    generate.add_argument("text", help="Text to encode")
    generate.add_argument("-o", "--output", default="qrcode.png", help="Output PNG path (default: qrcode.png)")
    generate.add_argument("--width", type=positive_int, default=None, help=f"Image width (default: {settings.QR_WIDTH})")
    generate.add_argument("--height", type=positive_int, default=None, help=f"Image height (default: {settings.QR_HEIGHT})")
    generate.add_argument("--foreground", default=None, help="Module color, e.g. #000000")
    generate.add_argument("--background", default=None, help="Background color, e.g. #ffffff")
    generate.add_argument(
        "--error-correction",
        choices=["L", "M", "Q", "H"],
        default=None,
        help=f"Error correction level (default: {settings.QR_ERROR_CORRECTION})"
    )
    add_output_flags(generate)

    decode = subparsers.add_parser("decode", help="Decode a QR code image")
    decode.add_argument("image", help="Path to image file containing a QR code")
    add_output_flags(decode)

    analyze = subparsers.add_parser("analyze", help="Analyse QR payload text")
    analyze.add_argument("text", help="Payload text")
    add_output_flags(analyze)

    return parser


def print_analysis(result: AnalysisResult, args: argparse.Namespace) -> None:
    if args.json:
        print(result.model_dump_json(by_alias=True, indent=2))
    else:
        print(render_analysis(result, dark_mode=args.dark, color=not args.no_color))


def run(args: argparse.Namespace, workflow: QrWorkflowService) -> int:
    """Execute one parsed command; returns the exit status."""
    if args.command == "analyze":
        print_analysis(analyze_payload(args.text), args)
        return 0

    if args.command == "generate":
        try:
            config = EncodeConfig.for_theme(
                args.dark,
                width=args.width,
                height=args.height,
                foreground_color=args.foreground,
                background_color=args.background,
                error_correction_level=args.error_correction
            )
        except ValidationError as e:
            raise InvalidConfigError(
                "Invalid QR code options",
                {"errors": e.errors(include_url=False)}
            ) from e
        result = workflow.generate(args.text, config)
        path = workflow.save_png(result.symbol, args.output)
        print_analysis(result.analysis, args)
        if not args.json:
            print(f"Saved to {path}")
        return 0

    if args.command == "decode":
        outcome = workflow.decode_file(args.image)
        print_analysis(outcome.analysis, args)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, workflow: Optional[QrWorkflowService] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    workflow = workflow or QrWorkflowService(QrEncoderService(), QrDecoderService())

    try:
        return run(args, workflow)
    except QrStudioError as e:
        log_error(f"{args.command} failed", e, context={"details": e.details})
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
