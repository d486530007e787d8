"""
Command line entry point.

    python -m prompt_quality "create image of cat" --media-type image
    python -m prompt_quality "create image of cat" "Create an image of a cat" \
        --media-type image --answers '{"style": {"type": "option", "value": "photorealistic"}}'

With one prompt, prints its analysis. With two, prints the full quality
report for the optimized prompt.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from prompt_quality.config import LOG_FORMAT, LOG_LEVEL
from prompt_quality.errors import InvalidArgumentError
from prompt_quality.models import MediaType, ScoreRequest
from prompt_quality.scoring import QualityScorer

logger = logging.getLogger("prompt_quality")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt_quality",
        description="Score a prompt, or an optimized prompt against its original.",
    )
    parser.add_argument("original", help="The prompt as the user wrote it")
    parser.add_argument("optimized", nargs="?", help="The rewritten prompt")
    parser.add_argument(
        "--media-type",
        required=True,
        choices=[m.value for m in MediaType],
        help="Kind of content the prompt is for",
    )
    parser.add_argument("--target-model", default=None, help="Model the prompt targets")
    parser.add_argument("--details", default=None, help="Additional details the user supplied")
    parser.add_argument(
        "--answers",
        default=None,
        help="JSON object of question id -> {type, value, customText}",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    args = build_parser().parse_args(argv)

    payload = {
        "originalPrompt": args.original,
        "optimizedPrompt": args.optimized,
        "mediaType": args.media_type,
        "targetModel": args.target_model,
        "additionalDetails": args.details,
    }
    try:
        if args.answers:
            try:
                payload["userAnswers"] = json.loads(args.answers)
            except json.JSONDecodeError as e:
                raise InvalidArgumentError("answers", f"not valid JSON ({e})") from e
        request = ScoreRequest.parse_payload(payload)
        report = QualityScorer().evaluate(request)
    except InvalidArgumentError as e:
        logger.error("Invalid input: %s", e)
        return 2

    print(json.dumps(report.model_dump(mode="json", exclude_none=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
