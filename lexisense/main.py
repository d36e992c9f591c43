import argparse
import asyncio
import sys

from lexisense.config.settings import Settings
from lexisense.database.connection import close_pool, init_pool
from lexisense.logging.logger import Log
from lexisense.service import build_service


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lexisense", description="Contract analysis worker")
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze a stored contract and wait for it")
    analyze.add_argument("document_id")

    reextract = commands.add_parser(
        "reextract", help="Re-read the stored upload, then analyze it and wait"
    )
    reextract.add_argument("document_id")
    reextract.add_argument("--mime-type", default=None)

    chat = commands.add_parser("chat", help="Ask a question about a stored contract")
    chat.add_argument("document_id")
    chat.add_argument("question")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Entry point: initialize pool -> build dependencies -> run one command."""
    await init_pool(settings)
    try:
        service = build_service(settings)
        if args.command == "chat":
            response = await service.chat(args.question, document_id=args.document_id)
            print(response["answer"])
            return 0
        if args.command == "reextract":
            task = await service.reextract_document(args.document_id, args.mime_type)
        else:
            task = await service.analyze_document(args.document_id)
        result = await task
        return 0 if result is not None else 1
    finally:
        await close_pool()


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
