from __future__ import annotations

import argparse
import base64
import json
import os
from pathlib import Path

from tyre_twin.analysis.overrides import overrides_from_analysis
from tyre_twin.constants import GEMINI_MODEL_VISION
from tyre_twin.providers.base import AnalysisError, VisionAnalyzer
from tyre_twin.providers.gemini_provider import GeminiVisionAnalyzer
from tyre_twin.providers.mock_provider import MockVisionAnalyzer


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze a tyre photo and print the state overrides it would inject."
    )
    parser.add_argument("image", help="Path to a JPG/PNG tyre photo.")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the canned mock analyzer even if an API key is set.",
    )
    parser.add_argument(
        "--model",
        default=GEMINI_MODEL_VISION,
        help="Gemini model used for the remote analysis.",
    )
    parser.add_argument(
        "--delay-s",
        type=float,
        default=0.0,
        help="Simulated latency for the mock analyzer.",
    )
    return parser.parse_args(argv)


def build_analyzer(args: argparse.Namespace) -> VisionAnalyzer:
    api_key = (os.getenv("TYRE_GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()
    if args.mock or not api_key:
        return MockVisionAnalyzer(delay_s=args.delay_s)
    return GeminiVisionAnalyzer(api_key=api_key, model=args.model)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    image_path = Path(args.image)
    if not image_path.is_file():
        print(f"[VISION] image not found: {image_path}")
        return 2

    analyzer = build_analyzer(args)
    encoded = base64.b64encode(image_path.read_bytes()).decode("ascii")
    print(f"[VISION] analyzing {image_path} with {analyzer.name}")
    try:
        result = analyzer.analyze(encoded)
    except AnalysisError as exc:
        print(f"[VISION] analysis failed: {exc}")
        return 1

    overrides = overrides_from_analysis(result)
    print(json.dumps({"result": result.to_dict(), "overrides": {k: getattr(v, "value", v) for k, v in overrides.items()}}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
