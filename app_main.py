"""Application entry point for the Quizline service."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

from quizline.config import Settings, load_settings
from quizline.core.bulk_operations import BulkSummary, bulk_add_questions
from quizline.core.models import Category
from quizline.core.quiz_exporter import save_questions_to_file
from quizline.core.quiz_importer import QuizImportError, load_questions_from_file
from quizline.core.services.document_store import DocumentStore
from quizline.gateway import DirectStoreGateway, create_gateway, create_store
from quizline.server.api_server import create_api_app, run_api_server
from quizline.utils.logging_config import configure_logging

SAMPLE_QUESTIONS_PATH = Path(__file__).resolve().parent / "quizline" / "data" / "sample_questions.txt"


async def _seed_sample_questions(store: DocumentStore) -> None:
    """Fill every category of a fresh in-memory store with the bundled questions."""
    imported = load_questions_from_file(SAMPLE_QUESTIONS_PATH)
    gateway = DirectStoreGateway(store)
    await bulk_add_questions(gateway, None, imported.questions)
    for category in Category:
        await bulk_add_questions(gateway, category, imported.questions)


def serve(settings: Settings) -> None:
    logger = configure_logging(settings.log_level)
    logger.info("Starting Quizline API with the %s store", settings.store_backend)

    store = create_store(settings)
    if settings.store_backend == "memory" and SAMPLE_QUESTIONS_PATH.exists():
        asyncio.run(_seed_sample_questions(store))
        logger.info("Seeded in-memory store from %s", SAMPLE_QUESTIONS_PATH.name)

    app = create_api_app(store, cors_origins=settings.cors_origins)
    logger.info("API available at http://%s:%s/api", settings.host, settings.port)
    run_api_server(app, host=settings.host, port=settings.port)


async def _import_file(settings: Settings, file_path: Path, category: Category) -> BulkSummary:
    imported = load_questions_from_file(file_path)
    gateway = create_gateway(settings)
    try:
        return await bulk_add_questions(gateway, category, imported.questions)
    finally:
        await gateway.aclose()


async def _export_file(settings: Settings, file_path: Path, category: Category) -> int:
    gateway = create_gateway(settings)
    try:
        questions = await gateway.get_questions(category)
    finally:
        await gateway.aclose()
    save_questions_to_file(file_path, questions)
    return len(questions)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quizline", description="Quizline quiz service.")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("serve", help="Run the HTTP API (default).")

    for name, help_text in (
        ("import", "Add the questions of a quiz text file to a category."),
        ("export", "Write a category's questions to a quiz text file."),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("file", type=Path)
        command.add_argument(
            "--category",
            required=True,
            choices=[category.value for category in Category],
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the command line and run the requested command."""
    args = _build_parser().parse_args(argv)
    settings = load_settings()

    if args.command in (None, "serve"):
        serve(settings)
        return 0

    logger = configure_logging(settings.log_level)
    category = Category.parse(args.category)
    if args.command == "import":
        try:
            summary = asyncio.run(_import_file(settings, args.file, category))
        except (OSError, QuizImportError) as exc:
            logger.error("Import failed: %s", exc)
            return 1
        print(f"Imported into {category.value}: {summary.describe()}")
        for error in summary.errors:
            print(f"  #{error.position} {error.label}: {error.message}")
        return 0 if not summary.errors else 1

    count = asyncio.run(_export_file(settings, args.file, category))
    print(f"Exported {count} questions from {category.value} to {args.file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
