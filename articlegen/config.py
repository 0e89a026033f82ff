from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .render import Placeholders

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

DEFAULT_CONFIG_PATH = "articlegen.toml"
DEFAULT_MD_FOLDER = "contents/mdfiles"
DEFAULT_TEMPLATE = "contents/layout/article_layout.html"
DEFAULT_OUTPUT = "contents/articles"
DEFAULT_ORGANIZE_DESTINATION = "contents/organized"
DEFAULT_DATE_REPORT = "contents/articles/blog1.html"


@dataclass
class Config:
    md_folder: Path = Path(DEFAULT_MD_FOLDER)
    template_path: Path = Path(DEFAULT_TEMPLATE)
    output_folder: Path = Path(DEFAULT_OUTPUT)
    organizer_source: Path = Path(DEFAULT_OUTPUT)
    organizer_destination: Path = Path(DEFAULT_ORGANIZE_DESTINATION)
    date_report_file: Optional[Path] = Path(DEFAULT_DATE_REPORT)
    placeholders: Placeholders = field(default_factory=Placeholders)
    organize: bool = True
    verbose: bool = False

    @classmethod
    def from_args(cls, args: object) -> "Config":
        output = Path(args.output)
        source = (getattr(args, "organize_source", "") or "").strip()
        report = (getattr(args, "date_report", "") or "").strip()
        return cls(
            md_folder=Path(args.md_folder),
            template_path=Path(args.template),
            output_folder=output,
            organizer_source=Path(source) if source else output,
            organizer_destination=Path(args.organize_destination),
            date_report_file=Path(report) if report else None,
            placeholders=Placeholders(
                headline=args.headline_placeholder,
                text=args.text_placeholder,
                image=args.image_placeholder,
                title=args.title_placeholder,
            ),
            organize=bool(args.organize),
            verbose=bool(args.verbose),
        )


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Unable to read config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(data, dict):
            print(f"TOML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data
