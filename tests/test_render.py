from pathlib import Path

import pytest

from articlegen.content import ExtractedDocument, HeadlineRecord
from articlegen.errors import FolderCreateError, OpenError, TemplateReadError, WriteError
from articlegen.render import (
    Placeholders,
    convert_file,
    output_path_for,
    read_template,
    render_document,
    replace_first,
    write_text,
)

TEMPLATE = (
    "<title>Placeholder Title</title>"
    "<header>Placeholder Headline</header>"
    "<main>Placeholder Headline|Placeholder Headline|Test text</main>"
)


def test_replace_first_only_touches_first_occurrence() -> None:
    assert replace_first("a X b X", "X", "Y") == "a Y b X"
    assert replace_first("nothing here", "X", "Y") == "nothing here"
    assert replace_first("abc", "", "Y") == "abc"


def test_headlines_consume_placeholders_left_to_right() -> None:
    doc = ExtractedDocument(headlines=[HeadlineRecord(1, "One"), HeadlineRecord(2, "Two")], text="body")
    html_doc = render_document(doc, TEMPLATE, "post")
    assert html_doc == (
        "<title>post</title>"
        "<header><h1>One</h1></header>"
        "<main><h2>Two</h2>|post|<p>body</p></main>"
    )


def test_extra_headlines_are_dropped() -> None:
    template = "Placeholder Headline Test text Placeholder Title"
    doc = ExtractedDocument(headlines=[HeadlineRecord(1, "A"), HeadlineRecord(1, "B"), HeadlineRecord(3, "C")])
    html_doc = render_document(doc, template, "post")
    assert html_doc == "<h1>A</h1> <p></p> post"
    assert "B" not in html_doc


def test_unused_headline_placeholders_get_base_name_then_stay() -> None:
    template = "Placeholder Headline Placeholder Headline Placeholder Headline"
    html_doc = render_document(ExtractedDocument(), template, "post")
    assert html_doc == "post Placeholder Headline Placeholder Headline"


def test_shared_placeholder_drops_image_once_text_is_placed() -> None:
    template = "<div>Test text</div>"
    doc = ExtractedDocument(text="words", image="img.png")
    html_doc = render_document(doc, template, "post")
    assert html_doc == "<div><p>words</p></div>"
    assert "<img" not in html_doc


def test_shared_placeholder_with_two_occurrences_places_both() -> None:
    doc = ExtractedDocument(text="words", image="img.png")
    html_doc = render_document(doc, "Test text Test text", "post")
    assert html_doc == '<p>words</p> <img src="img.png" alt="Picture">'


def test_distinct_image_placeholder_places_image() -> None:
    placeholders = Placeholders(image="Image here")
    doc = ExtractedDocument(text="words", image="img.png")
    html_doc = render_document(doc, "Test text Image here", "post", placeholders)
    assert html_doc == '<p>words</p> <img src="img.png" alt="Picture">'


def test_content_is_inserted_verbatim() -> None:
    doc = ExtractedDocument(headlines=[HeadlineRecord(1, "<em>raw</em>")], text="a & b")
    html_doc = render_document(doc, "Placeholder Headline Test text", "post")
    assert html_doc == "<h1><em>raw</em></h1> <p>a & b</p>"


def test_output_path_uses_base_name(tmp_path: Path) -> None:
    assert output_path_for(Path("in/notes.v2.md"), tmp_path) == tmp_path / "notes.v2.html"


def test_read_template_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateReadError):
        read_template(tmp_path / "missing.html")


def test_template_bytes_pass_through_unchanged(tmp_path: Path) -> None:
    template_path = tmp_path / "layout.html"
    template_path.write_bytes(b"<p>\xa9 2024</p>Test text")
    out_dir = tmp_path / "out"
    md = tmp_path / "post.md"
    md.write_text("body\n", encoding="utf-8")

    written = convert_file(md, read_template(template_path), out_dir)

    assert written.read_bytes() == b"<p>\xa9 2024</p><p>body</p>"


def test_write_text_creates_folders_and_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "nested" / "out.html"
    write_text(target, "first")
    write_text(target, "second")
    assert target.read_text(encoding="utf-8") == "second"


def test_write_text_folder_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(FolderCreateError):
        write_text(blocker / "out.html", "x")


def test_write_text_write_error(tmp_path: Path) -> None:
    target = tmp_path / "out.html"
    target.mkdir()
    with pytest.raises(WriteError):
        write_text(target, "x")


def test_convert_file_is_idempotent(tmp_path: Path) -> None:
    md = tmp_path / "blog1.md"
    md.write_text("# Hello\nsome text\nmore text\n![Picture](img.png)\n", encoding="utf-8")
    out_dir = tmp_path / "articles"
    first = convert_file(md, TEMPLATE, out_dir)
    first_bytes = first.read_bytes()
    second = convert_file(md, TEMPLATE, out_dir)
    assert first == second == out_dir / "blog1.html"
    assert second.read_bytes() == first_bytes
    assert first_bytes.decode("utf-8") == (
        "<title>blog1</title>"
        "<header><h1>Hello</h1></header>"
        "<main>blog1|Placeholder Headline|<p>some text more text</p></main>"
    )


def test_convert_file_verbose_prints_extraction(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    md = tmp_path / "post.md"
    md.write_text("## Sub\nbody\n", encoding="utf-8")
    convert_file(md, TEMPLATE, tmp_path / "out", verbose=True)
    out = capsys.readouterr().out
    assert "Extracted headlines: [(2, 'Sub')]" in out
    assert "Extracted text: body" in out
    assert "HTML file with updated content created at:" in out


def test_convert_file_missing_source(tmp_path: Path) -> None:
    with pytest.raises(OpenError):
        convert_file(tmp_path / "gone.md", TEMPLATE, tmp_path / "out")
    assert not (tmp_path / "out").exists()
