from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import OpenError, ReadError

HEADLINE_MARK = "#"
IMAGE_MARK = "!["
IMAGE_LABEL = "![Picture]"


@dataclass(frozen=True)
class HeadlineRecord:
    level: int
    content: str


@dataclass
class ExtractedDocument:
    headlines: list[HeadlineRecord] = field(default_factory=list)
    text: str = ""
    image: str = ""


def parse_headline(line: str) -> HeadlineRecord:
    # Every "#" in the line counts towards the level, not only the leading run.
    level = line.count(HEADLINE_MARK)
    content = line.lstrip("# ").strip()
    return HeadlineRecord(level=level, content=content)


def parse_image_path(line: str) -> str:
    if line.startswith(IMAGE_LABEL):
        line = line[len(IMAGE_LABEL) :]
    return line.strip().strip("()")


def iter_lines(path: Path):
    try:
        handle = path.open("r", encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as exc:
        raise OpenError(path, exc) from exc
    with handle:
        try:
            for line in handle:
                line = line[:-1] if line.endswith("\n") else line
                yield line[:-1] if line.endswith("\r") else line
        except OSError as exc:
            raise ReadError(path, exc) from exc


def extract_document(path: Path) -> ExtractedDocument:
    """Split a markdown file into headlines, running text and an image path.

    Lines starting with ``#`` become headlines, lines starting with ``![`` set
    the image (the last one wins) and every other line, blank ones included,
    is joined into the text with single spaces.
    """
    path = Path(path)
    headlines: list[HeadlineRecord] = []
    parts: list[str] = []
    image = ""
    for line in iter_lines(path):
        if line.startswith(HEADLINE_MARK):
            headlines.append(parse_headline(line))
        elif line.startswith(IMAGE_MARK):
            image = parse_image_path(line)
        else:
            parts.append(line)
    return ExtractedDocument(headlines=headlines, text=" ".join(parts).strip(), image=image)
