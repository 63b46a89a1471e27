"""Command-line runner.

    python -m restaurant_qa "Which dishes contain tomato?" --format json
    python -m restaurant_qa --serve
"""

import argparse
import asyncio
import json
import sys

import uvicorn

from restaurant_qa.api.router import build_chat_payload
from restaurant_qa.config.settings import get_settings
from restaurant_qa.infrastructure.logging.logger import setup_logging
from restaurant_qa.orchestrator.pipeline import PipelineOrchestrator


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="restaurant_qa",
        description="Answer a question about the restaurant graph, or serve the HTTP API.",
    )
    parser.add_argument("question", nargs="?", help="natural language question")
    parser.add_argument("--format", choices=("text", "json"), default="text")
    parser.add_argument("--serve", action="store_true", help="run the HTTP API with uvicorn")
    args = parser.parse_args(argv)
    if not args.serve and not args.question:
        parser.error("a question is required unless --serve is given")
    return args


async def _answer(question: str, response_format: str) -> dict:
    orchestrator = await PipelineOrchestrator.from_settings(get_settings())
    try:
        result = await orchestrator.answer_question(question)
    finally:
        await orchestrator.close()
    return build_chat_payload(result, response_format)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()

    if args.serve:
        uvicorn.run("restaurant_qa.app:create_app", factory=True, host="0.0.0.0", port=settings.port)
        return 0

    setup_logging(level=settings.log_level, json_output=False)
    payload = asyncio.run(_answer(args.question, args.format))
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
