"""CLI entrypoint that generates gloss pages for the works in a book manifest."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from glossgen.annotation.config import AnnotationSettings
from glossgen.annotation.provider import AnnotationRequestError, ChatAnnotator
from glossgen.content.manifest import MANIFEST_NAME, ManifestError, SelectionError, load_manifest, parse_selection, select_items
from glossgen.pipeline import DEFAULT_INDEX_NAME, run_generation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate per-character gloss pages for classical texts")
    parser.add_argument("--book-dir", default="book", help="Directory holding manifest.json and source files")
    parser.add_argument("--out-dir", "--out", dest="out_dir", default="dist", help="Output directory for pages")
    parser.add_argument("--files", default=None, help="Comma-separated file names or titles to process")
    parser.add_argument("--api-url", default=None, help="Provider base URL (overrides DEEPSEEK_API_URL)")
    parser.add_argument("--api-key", default=None, help="Provider API key (overrides DEEPSEEK_API_KEY)")
    parser.add_argument("--api-model", default=None, help="Provider model (overrides DEEPSEEK_MODEL)")
    parser.add_argument("--skip-api", action="store_true", help="Write pages with blank glosses, no provider calls")
    parser.add_argument("--index-name", default=DEFAULT_INDEX_NAME, help="File name of the navigation page")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    args = build_parser().parse_args(argv)

    book_dir = Path(args.book_dir)
    out_dir = Path(args.out_dir)

    try:
        items = select_items(load_manifest(book_dir / MANIFEST_NAME), parse_selection(args.files))
    except (ManifestError, SelectionError) as exc:
        logger.error("%s", exc)
        return 1

    annotator: ChatAnnotator | None = None
    if not args.skip_api:
        try:
            settings = AnnotationSettings.from_env(api_url=args.api_url, api_key=args.api_key, model=args.api_model)
            annotator = ChatAnnotator(settings)
        except (ValueError, AnnotationRequestError) as exc:
            logger.error("Configuration error: %s", exc)
            return 1
        logger.info("Annotating with model=%s via %s", settings.model, settings.base_url)

    try:
        report = run_generation(
            items,
            book_dir=book_dir,
            out_dir=out_dir,
            annotator=annotator,
            index_name=args.index_name,
        )
    except (ManifestError, AnnotationRequestError) as exc:
        logger.error("%s", exc)
        return 1

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
