from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from mdpdf.domain.errors import ExportError
from mdpdf.domain.interfaces import IAppConfig
from mdpdf.domain.models import ExportRequest
from mdpdf.services.config import build_app_config
from mdpdf.services.export_service import build_export_service
from mdpdf.services.exporters.pdf_exporter import PdfExporter
from mdpdf.services.file_service import FileService
from mdpdf.services.pdf.page_setup import MARGIN_PRESETS, PAGE_SIZES
from mdpdf.utils.constants import APP_NAME
from mdpdf.utils.log import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdpdf",
        description=f"{APP_NAME} - convert Markdown files to PDF",
        epilog="""
Examples:
  mdpdf convert notes.md
  mdpdf convert notes.md -o out/notes.pdf --page-size letter --margin wide
  cat notes.md | mdpdf convert - -o notes.pdf
  mdpdf sizes
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--config", type=Path, help="Path to a config.ini to use")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert a Markdown file to PDF")
    convert.add_argument("input", help="Markdown file, or - to read standard input")
    convert.add_argument("--output", "-o", type=Path, help="Output PDF path")
    convert.add_argument("--page-size", help="Page size key (see `mdpdf sizes`)")
    convert.add_argument("--margin", help="Margin preset key (see `mdpdf sizes`)")
    convert.add_argument(
        "--uncompressed", action="store_true", help="Write uncompressed page streams"
    )

    sub.add_parser("sizes", help="List page sizes and margin presets")
    return parser


def _default_output(input_arg: str, fallback_name: str) -> Path:
    if input_arg == "-":
        return Path.cwd() / fallback_name
    return Path(input_arg).with_suffix(".pdf")


def _cmd_sizes() -> int:
    print("Page sizes:")
    for spec in PAGE_SIZES.values():
        print(
            f"  {spec.key:<10} {spec.width_mm:g} x {spec.height_mm:g} mm"
            f"  ({spec.width_pt:g} x {spec.height_pt:g} pt)"
        )
    print("Margins:")
    for m in MARGIN_PRESETS.values():
        print(f"  {m.key:<10} {m.mm:g} mm  ({m.points:g} pt)")
    return 0


def _cmd_convert(args: argparse.Namespace, config: IAppConfig) -> int:
    files = FileService()

    try:
        if args.input == "-":
            text = sys.stdin.read()
        else:
            text = files.read_text(Path(args.input))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1

    out = args.output or _default_output(args.input, config.export_filename())
    request = ExportRequest(
        text=text,
        page_size=args.page_size or config.export_page_size(),
        margin=args.margin or config.export_margin(),
    )
    service = build_export_service(
        filename=config.export_filename(), compress=not args.uncompressed
    )
    exporter = PdfExporter(service, files)

    try:
        exporter.export(request, out)
    except ExportError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Cannot write %s: %s", out, e)
        return 1

    print(f"Wrote {out}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = build_app_config(explicit_ini=args.config)
    configure_logging(config.log_level(), debug=args.debug)
    logger.debug("Arguments: %s", args)

    if args.command == "sizes":
        return _cmd_sizes()
    return _cmd_convert(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
