from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_DATE_REPORT,
    DEFAULT_MD_FOLDER,
    DEFAULT_ORGANIZE_DESTINATION,
    DEFAULT_OUTPUT,
    DEFAULT_TEMPLATE,
    Config,
    load_config,
)
from .errors import ArticleGenError, WalkError
from .organize import organize_files
from .render import HEADLINE_PLACEHOLDER, TEXT_PLACEHOLDER, TITLE_PLACEHOLDER, convert_file, printable, read_template
from .utils import parse_bool, report_file_date


@dataclass
class ConversionReport:
    converted: list[Path] = field(default_factory=list)
    failed: dict[Path, ArticleGenError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def find_markdown_files(md_folder: Path) -> list[Path]:
    if not md_folder.is_dir():
        raise WalkError(md_folder, "directory not found")
    return sorted((path for path in md_folder.rglob("*.md") if path.is_file()), key=lambda p: p.as_posix())


def convert_folder(config: Config) -> ConversionReport:
    """Convert every markdown file in the configured folder.

    A failing file is reported and skipped; the remaining files are still
    converted.
    """
    report = ConversionReport()
    md_files = find_markdown_files(config.md_folder)
    try:
        template = read_template(config.template_path)
    except ArticleGenError as exc:
        for md_file in md_files:
            print(f"Error processing {md_file}: {exc}", file=sys.stderr)
            report.failed[md_file] = exc
        return report
    if config.verbose:
        print(f"HTML template content: {printable(template)}")
    for md_file in md_files:
        try:
            output_path = convert_file(
                md_file,
                template,
                config.output_folder,
                config.placeholders,
                verbose=config.verbose,
            )
        except ArticleGenError as exc:
            print(f"Error processing {md_file}: {exc}", file=sys.stderr)
            report.failed[md_file] = exc
            continue
        report.converted.append(output_path)
    return report


def run(config: Config) -> bool:
    ok = True

    try:
        report = convert_folder(config)
    except ArticleGenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        ok = False
    else:
        ok = ok and report.ok
        print(f"Converted {len(report.converted)} file(s), {len(report.failed)} failed.")

    if config.date_report_file is not None:
        try:
            report_file_date(config.date_report_file)
        except ArticleGenError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            ok = False

    if config.organize:
        try:
            copied = organize_files(config.organizer_source, config.organizer_destination)
        except ArticleGenError as exc:
            print(f"Error organizing files: {exc}", file=sys.stderr)
            ok = False
        else:
            print(f"Organized {len(copied)} file(s) into: {config.organizer_destination}")

    return ok


def build_parser(argv: Optional[list[str]] = None) -> argparse.ArgumentParser:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    parser = argparse.ArgumentParser(description="Render markdown articles into an HTML template.")
    parser.add_argument("--config", default=pre_args.config, help="Path to config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--md-folder",
        default=cfg_str("md_folder", DEFAULT_MD_FOLDER),
        help="Directory containing Markdown articles.",
    )
    parser.add_argument(
        "--template",
        default=cfg_str("template", DEFAULT_TEMPLATE),
        help="HTML template used for every article.",
    )
    parser.add_argument(
        "--output",
        default=cfg_str("output", DEFAULT_OUTPUT),
        help="Output directory for rendered articles.",
    )
    parser.add_argument(
        "--organize-source",
        default=cfg_str("organize_source", ""),
        help="Directory to organize by date (default: the output directory).",
    )
    parser.add_argument(
        "--organize-destination",
        default=cfg_str("organize_destination", DEFAULT_ORGANIZE_DESTINATION),
        help="Root of the year/month folder tree.",
    )
    parser.add_argument(
        "--date-report",
        default=cfg_str("date_report", DEFAULT_DATE_REPORT),
        help="File whose modification date is printed (empty to skip).",
    )
    parser.add_argument(
        "--headline-placeholder",
        default=cfg_str("headline_placeholder", HEADLINE_PLACEHOLDER),
        help="Template marker replaced by each headline, then by the file name.",
    )
    parser.add_argument(
        "--text-placeholder",
        default=cfg_str("text_placeholder", TEXT_PLACEHOLDER),
        help="Template marker replaced by the article text.",
    )
    parser.add_argument(
        "--image-placeholder",
        default=cfg_str("image_placeholder", TEXT_PLACEHOLDER),
        help="Template marker replaced by the article image.",
    )
    parser.add_argument(
        "--title-placeholder",
        default=cfg_str("title_placeholder", TITLE_PLACEHOLDER),
        help="Template marker replaced by the file name.",
    )
    parser.add_argument(
        "--organize",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("organize", True),
        help="Copy files into year/month folders after rendering.",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("verbose", False),
        help="Print extracted content and rendered pages.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser(argv).parse_args(argv)
    config = Config.from_args(args)
    start = time.perf_counter()
    ok = run(config)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    if not ok:
        print("Some steps reported errors; see messages above.", file=sys.stderr)
