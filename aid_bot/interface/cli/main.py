"""Command line entry point for the aid bot.

    aid-bot serve --port 3000
    aid-bot ask --content "My roof collapsed and I have no food" --language es
    aid-bot index --corpus ./support
    aid-bot languages
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from dotenv import load_dotenv

from aid_bot.config.composition import (
    build_catalog,
    build_container,
    build_index_request,
    build_index_use_case,
)
from aid_bot.config.log_config import configure_logging
from aid_bot.config.settings import AppSettings
from aid_bot.domain.errors import DomainError
from aid_bot.domain.models import AidRequest


def cmd_serve(args: argparse.Namespace, settings: AppSettings) -> int:
    import uvicorn

    from aid_bot.interface.http.api import create_app

    uvicorn.run(
        create_app(settings),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_ask(args: argparse.Namespace, settings: AppSettings) -> int:
    try:
        container = build_container(settings)
    except DomainError as ex:
        print(f"[ERROR] {type(ex).__name__}: {ex}")
        return 1

    req = AidRequest(content=args.content, language=args.language)
    result = asyncio.run(container.pipeline.execute(req))

    if result.ok and result.value is not None:
        print(result.value.response)
        return 0
    err = result.error
    print(f"[ERROR] {type(err).__name__}: {err}")
    return 1


def cmd_index(args: argparse.Namespace, settings: AppSettings) -> int:
    try:
        index = build_index_use_case(settings).execute(
            build_index_request(settings, corpus_dir=args.corpus)
        )
    except DomainError as ex:
        print(f"✗ {type(ex).__name__}: {ex}")
        return 1
    report = index.report
    print(
        f"✓ Indexed {report.documents} documents into {report.chunks} chunks "
        f"(dim={report.dim}) from {report.corpus_dir}"
    )
    for source_id in report.skipped:
        print(f"  skipped empty document: {source_id}")
    return 0


def cmd_languages(args: argparse.Namespace, settings: AppSettings) -> int:
    for entry in build_catalog().entries():
        print(f"{entry.code}\t{entry.display_name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aid-bot", description="Aid request bot")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(func=cmd_serve)

    ask = sub.add_parser("ask", help="Run one request through the pipeline")
    ask.add_argument("--content", required=True)
    ask.add_argument("--language", help="Catalog code, e.g. 'es'")
    ask.set_defaults(func=cmd_ask)

    index = sub.add_parser("index", help="Build the corpus index and report counts")
    index.add_argument("--corpus", help="Corpus directory (default: CORPUS_DIR)")
    index.set_defaults(func=cmd_index)

    languages = sub.add_parser("languages", help="List supported translation languages")
    languages.set_defaults(func=cmd_languages)
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = AppSettings()
    configure_logging(settings.log_level)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
