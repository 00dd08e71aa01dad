"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from dotenv import find_dotenv, load_dotenv

from .analyzer.mock import mock_analyze
from .barcode import lookup_product
from .config import BiteCureConfig, load_config
from .models import ScanResult
from .pipeline import AnalysisPipeline


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="bitecure",
        description="AI grocery scanner: analyze receipt and label text",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="path to a TOML config file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # analyze
    analyze_parser = sub.add_parser("analyze", help="analyze grocery text")
    source = analyze_parser.add_mutually_exclusive_group()
    source.add_argument("--text", type=str, help="text to analyze")
    source.add_argument("--file", type=str, help="read text from a file")
    analyze_parser.add_argument("--json", action="store_true", help="print JSON")
    analyze_parser.add_argument(
        "--offline", action="store_true", help="skip the remote analyzer"
    )

    # scan
    scan_parser = sub.add_parser("scan", help="OCR images (or the camera) and analyze")
    scan_parser.add_argument(
        "--image", type=str, nargs="+", help="use existing image files"
    )
    scan_parser.add_argument("--json", action="store_true", help="print JSON")
    scan_parser.add_argument(
        "--offline", action="store_true", help="skip the remote analyzer"
    )

    # barcode
    barcode_parser = sub.add_parser("barcode", help="look up a product barcode")
    barcode_parser.add_argument("code", type=str)
    barcode_parser.add_argument("--json", action="store_true", help="print JSON")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv(find_dotenv(usecwd=True))

    config = load_config(args.config)

    match args.command:
        case "analyze":
            asyncio.run(_cmd_analyze(config, args))
        case "scan":
            asyncio.run(_cmd_scan(config, args))
        case "barcode":
            _cmd_barcode(args)


async def _cmd_analyze(config: BiteCureConfig, args) -> None:
    if args.text is not None:
        text = args.text
    elif args.file is not None:
        try:
            with open(args.file, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            print(f"Could not read {args.file}: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    if not text.strip():
        print("No text to analyze.", file=sys.stderr)
        sys.exit(1)

    await _analyze_and_print(config, text, args)


async def _cmd_scan(config: BiteCureConfig, args) -> None:
    from .ocr import TextRecognizer

    recognizer = TextRecognizer(
        tesseract_config=config.ocr.tesseract_config, lang=config.ocr.lang
    )
    texts: list[str] = []
    try:
        if args.image:
            print("🔍 Recognizing text...", file=sys.stderr)
            for path in args.image:
                texts.append(recognizer.recognize(path))
        else:
            from .camera import ReceiptCamera

            camera = ReceiptCamera(
                camera_index=config.camera.index,
                warmup_frames=config.camera.warmup_frames,
            )
            print("📷 Capturing...", file=sys.stderr)
            frame = camera.capture()
            print("🔍 Recognizing text...", file=sys.stderr)
            texts.append(recognizer.recognize_frame(frame))
    except RuntimeError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    text = "\n".join(t for t in texts if t)
    if not text:
        print("No text was recognized.", file=sys.stderr)
        sys.exit(1)

    await _analyze_and_print(config, text, args)


def _cmd_barcode(args) -> None:
    product = lookup_product(args.code)
    if product is None:
        print(f"No product found for barcode {args.code}.", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(asdict(product), ensure_ascii=False, indent=2))
        return

    n = product.nutrition
    print(f"{product.name} ({product.brand})  ${product.price:.2f}")
    print(
        f"  {n.calories} kcal  protein {n.protein}g  carbs {n.carbs}g  "
        f"fat {n.fat}g  fiber {n.fiber}g  sugar {n.sugar}g"
    )


async def _analyze_and_print(config: BiteCureConfig, text: str, args) -> None:
    if args.offline:
        result = mock_analyze(text)
    else:
        pipeline = AnalysisPipeline(config.analyzer)
        if pipeline.has_credential:
            print("🤖 Analyzing...", file=sys.stderr)
        outcome = await pipeline.run(text)
        if outcome.fell_back:
            print(
                f"Remote analysis unavailable ({outcome.error.kind}); "
                f"showing offline estimate.",
                file=sys.stderr,
            )
        result = outcome.result

    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        print(format_result(result))


def format_result(result: ScanResult) -> str:
    """Render the items, nutrition and recipes views as plain text."""
    lines = [f"🛒 Detected items ({len(result.detected_items)}):"]
    for item in result.detected_items:
        bar = "█" * int(item.confidence * 10)
        lines.append(
            f"  {item.name:<18} {item.confidence:>4.0%} {bar:<10} "
            f"${item.estimated_cost:.2f}  [{_confidence_level(item.confidence)}]"
        )

    lines.append("")
    lines.append("🥗 Nutrition:")
    lines.append(f"  {result.nutritional_analysis}")
    for insight in result.health_insights:
        lines.append(f"  • {insight}")

    lines.append("")
    lines.append("🍳 Recipe ideas:")
    for i, recipe in enumerate(result.recipe_suggestions, 1):
        lines.append(f"  {i}. {recipe}")

    lines.append("")
    lines.append(f"Total estimated cost: ${result.total_estimated_cost:.2f}")
    return "\n".join(lines)


def _confidence_level(confidence: float) -> str:
    if confidence > 0.8:
        return "high"
    if confidence > 0.6:
        return "medium"
    return "low"
