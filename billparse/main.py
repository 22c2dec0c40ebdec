import argparse
import json
import sys
from pathlib import Path

from billparse.config.settings import Settings
from billparse.database.connection import close_pool, init_pool
from billparse.logging.logger import Log
from billparse.mapping.provider import FieldDefinitionCache, FieldDefinitionProvider
from billparse.mapping.repository import FieldDefinitionsRepository
from billparse.processor.processor import build_processor


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="billparse",
        description="Extract structured bill fields from a PDF or an email body.",
    )
    parser.add_argument("path", type=Path, help="PDF file, or a text file with --email")
    parser.add_argument("--language", choices=["en", "hu"], default=None)
    parser.add_argument("--user-id", default=None, help="load field definitions for this user")
    parser.add_argument("--email", action="store_true", help="treat the input as email text")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> optional pool -> extract -> print JSON."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    provider: FieldDefinitionProvider | None = None
    if args.user_id:
        init_pool(settings)
        provider = FieldDefinitionProvider(
            FieldDefinitionsRepository(),
            FieldDefinitionCache(ttl_seconds=settings.field_mapping_cache_ttl_seconds),
        )

    try:
        processor = build_processor(settings, definition_provider=provider)
        if args.email:
            result = processor.extract_email(
                args.path.read_text(encoding="utf-8"), args.language, user_id=args.user_id
            )
        else:
            result = processor.extract_pdf(
                args.path.read_bytes(), args.language, user_id=args.user_id
            )
    finally:
        if provider is not None:
            close_pool()

    json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
