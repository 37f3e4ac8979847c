"""
Slidesmith CLI

Usage:
    slidesmith validate deck.json                 # Check a JSON or PPTX file
    slidesmith convert deck.pptx deck.json        # PowerPoint -> JSON
    slidesmith convert deck.json deck.pptx        # JSON -> PowerPoint
    slidesmith serve --port 7010                  # Run the HTTP API
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from slidesmith.core import get_settings, setup_logging
from slidesmith.core.errors import DocumentImportError
from slidesmith.services.exporter import export_json, export_pptx
from slidesmith.services.importer import ImportFile, ImportPipeline, ImportType, detect_import_type

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _read_upload(path: Path) -> ImportFile:
    return ImportFile(filename=path.name, content=path.read_bytes())


def _pipeline() -> ImportPipeline:
    settings = get_settings()
    return ImportPipeline(
        max_bytes=settings.max_import_bytes,
        require_unique_ids=settings.require_unique_ids,
    )


def cmd_validate(path: Path, import_type: Optional[str] = None) -> int:
    """Validate a presentation file and report the first problem found."""
    if not path.exists():
        print(f"❌ File not found: {path}", file=sys.stderr)
        return EXIT_USAGE

    try:
        document = asyncio.run(_pipeline().load(_read_upload(path), import_type))
    except DocumentImportError as e:
        print(f"❌ {path}: {e.user_message}", file=sys.stderr)
        return EXIT_INVALID

    element_count = sum(len(slide.elements) for slide in document.slides)
    print(f"✅ {path}: '{document.title}' ({len(document.slides)} slides, {element_count} elements)")
    return EXIT_OK


def cmd_convert(source: Path, target: Path, import_type: Optional[str] = None) -> int:
    """Convert between JSON and PPTX; the target format follows its extension."""
    if not source.exists():
        print(f"❌ File not found: {source}", file=sys.stderr)
        return EXIT_USAGE

    target_type = detect_import_type(target.name)
    if target_type is None:
        print(f"❌ Unsupported output format: {target.suffix or target.name}", file=sys.stderr)
        return EXIT_USAGE

    try:
        document = asyncio.run(_pipeline().load(_read_upload(source), import_type))
    except DocumentImportError as e:
        print(f"❌ {source}: {e.user_message}", file=sys.stderr)
        return EXIT_INVALID

    target.parent.mkdir(parents=True, exist_ok=True)
    if target_type == ImportType.JSON:
        target.write_text(export_json(document), encoding="utf-8")
    else:
        target.write_bytes(export_pptx(document))

    print(f"✅ Wrote {target} ({len(document.slides)} slides)")
    return EXIT_OK


def cmd_serve(host: Optional[str], port: Optional[int], reload: bool) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "slidesmith.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload or settings.debug,
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slidesmith",
        description="Slidesmith - validate, convert and serve slide presentations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slidesmith validate deck.json
  slidesmith validate export.dat --type pptx
  slidesmith convert deck.pptx deck.json
  slidesmith serve --port 8080
        """
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON or PPTX presentation")
    validate_parser.add_argument("file", type=Path, help="File to validate")
    validate_parser.add_argument(
        "--type", "-t",
        dest="import_type",
        choices=[t.value for t in ImportType],
        help="Treat the file as this type instead of guessing from its extension"
    )

    convert_parser = subparsers.add_parser("convert", help="Convert between JSON and PPTX")
    convert_parser.add_argument("source", type=Path, help="Input file")
    convert_parser.add_argument("target", type=Path, help="Output file (.json or .pptx)")
    convert_parser.add_argument(
        "--type", "-t",
        dest="import_type",
        choices=[t.value for t in ImportType],
        help="Input type override"
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help="Bind address (default from settings)")
    serve_parser.add_argument("--port", "-p", type=int, help="Port (default from settings)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "validate":
        return cmd_validate(args.file, args.import_type)
    if args.command == "convert":
        return cmd_convert(args.source, args.target, args.import_type)
    return cmd_serve(args.host, args.port, args.reload)


if __name__ == "__main__":
    sys.exit(main())
