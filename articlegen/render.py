from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .content import ExtractedDocument, extract_document
from .errors import FolderCreateError, TemplateReadError, WriteError

HEADLINE_PLACEHOLDER = "Placeholder Headline"
TEXT_PLACEHOLDER = "Test text"
TITLE_PLACEHOLDER = "Placeholder Title"


@dataclass(frozen=True)
class Placeholders:
    headline: str = HEADLINE_PLACEHOLDER
    text: str = TEXT_PLACEHOLDER
    # Shares the text marker unless configured otherwise, so the image is
    # dropped once the text has taken the only occurrence.
    image: str = TEXT_PLACEHOLDER
    title: str = TITLE_PLACEHOLDER


def replace_first(text: str, placeholder: str, replacement: str) -> str:
    if not placeholder:
        return text
    start = text.find(placeholder)
    if start < 0:
        return text
    end = start + len(placeholder)
    return f"{text[:start]}{replacement}{text[end:]}"


def printable(text: str) -> str:
    # Undecodable source bytes are shown as U+FFFD on the console only.
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def headline_html(level: int, content: str) -> str:
    return f"<h{level}>{content}</h{level}>"


def render_document(
    document: ExtractedDocument,
    template: str,
    base_name: str,
    placeholders: Optional[Placeholders] = None,
) -> str:
    placeholders = placeholders or Placeholders()
    output = template
    for headline in document.headlines:
        output = replace_first(output, placeholders.headline, headline_html(headline.level, headline.content))
    output = replace_first(output, placeholders.text, f"<p>{document.text}</p>")
    output = replace_first(output, placeholders.image, f'<img src="{document.image}" alt="Picture">')
    output = replace_first(output, placeholders.headline, base_name)
    output = replace_first(output, placeholders.title, base_name)
    return output


def read_template(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise TemplateReadError(path, exc) from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FolderCreateError(path.parent, exc) from exc
    try:
        path.write_text(text, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise WriteError(path, exc) from exc


def output_path_for(md_file: Path, output_dir: Path) -> Path:
    return Path(output_dir) / f"{Path(md_file).stem}.html"


def convert_file(
    md_file: Path,
    template: str,
    output_dir: Path,
    placeholders: Optional[Placeholders] = None,
    verbose: bool = False,
) -> Path:
    """Render one markdown file into the template and write it out.

    Returns the path of the written HTML file. Errors from extraction or
    writing propagate so the caller can decide whether to carry on.
    """
    md_file = Path(md_file)
    document = extract_document(md_file)
    if verbose:
        print(f"Extracted headlines: {[(h.level, printable(h.content)) for h in document.headlines]}")
        print(f"Extracted text: {printable(document.text)}")
        print(f"Extracted image: {printable(document.image)}")
    html_doc = render_document(document, template, md_file.stem, placeholders)
    if verbose:
        print(f"Content after replacing: {printable(html_doc)}")
    output_path = output_path_for(md_file, output_dir)
    write_text(output_path, html_doc)
    print(f"HTML file with updated content created at: {output_path}")
    return output_path
