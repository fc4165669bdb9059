import logging
from pathlib import Path

import pytest

from statue.content import ContentScanner, FileContentLoader, derive_url
from statue.extractors import (
    ContentError,
    FrontmatterError,
    build_metadata,
    extract_frontmatter,
)


def create_content(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    (content / "blog" / "news").mkdir(parents=True)
    (content / "blog2").mkdir()
    (content / "empty").mkdir()

    (content / "index.md").write_text(
        "---\ntitle: Welcome\n---\n# Welcome\n\nHello from {{site.name}}.\n",
        encoding="utf-8",
    )
    (content / "about.md").write_text("# About\n\nNo front matter.\n", encoding="utf-8")
    (content / "blog" / "my-first-post.md").write_text(
        "---\ndate: 2024-01-15\nauthor: Ada\ntags: [a, b]\norder: 2\n---\n"
        "# Heading\n\n[Next](./second-post.md) and [docs](../docs/setup.md)\n",
        encoding="utf-8",
    )
    (content / "blog" / "second-post.md").write_text(
        "---\ntitle: Second\norder: 1\ndescription: By {{site.author}}\n---\nBody\n",
        encoding="utf-8",
    )
    (content / "blog" / "news" / "update.md").write_text("Update\n", encoding="utf-8")
    (content / "blog2" / "other.md").write_text("Other\n", encoding="utf-8")
    (content / "notes.txt").write_text("ignore", encoding="utf-8")
    (content / "LOUD.MD").write_text("ignore", encoding="utf-8")
    return content


def test_scan_builds_entries_in_walk_order(tmp_path, variables):
    content = create_content(tmp_path)
    entries = ContentScanner.from_path(content, variables).scan()
    assert [e.url for e in entries] == [
        "/about",
        "/blog/my-first-post",
        "/blog/news/update",
        "/blog/second-post",
        "/blog2/other",
        "/index",
    ]
    assert len({e.url for e in entries}) == len(entries)


def test_scan_entry_fields(tmp_path, variables):
    content = create_content(tmp_path)
    entries = {e.url: e for e in ContentScanner.from_path(content, variables).scan()}

    about = entries["/about"]
    assert about.slug == "about"
    assert about.directory == ""
    assert about.is_root
    assert about.main_directory == "root"
    assert about.depth == 0
    assert about.metadata == {
        "title": "About",
        "description": "",
        "date": None,
        "author": None,
    }
    assert "<h1>" not in about.content
    assert "<p>No front matter.</p>" in about.content

    post = entries["/blog/my-first-post"]
    assert post.path == "blog/my-first-post.md"
    assert post.directory == "blog"
    assert post.main_directory == "blog"
    assert post.depth == 1
    assert post.metadata["title"] == "My First Post"
    assert post.metadata["date"] == "2024-01-15"
    assert post.metadata["author"] == "Ada"
    assert post.metadata["tags"] == ["a", "b"]
    assert post.metadata["order"] == 2
    assert '<a href="/blog/second-post">Next</a>' in post.content
    assert '<a href="/docs/setup">docs</a>' in post.content
    assert "Heading" not in post.content

    update = entries["/blog/news/update"]
    assert update.directory == "blog/news"
    assert update.main_directory == "blog"
    assert update.depth == 2
    assert update.metadata["title"] == "Update"

    assert entries["/index"].metadata["title"] == "Welcome"
    assert "Hello from Acme." in entries["/index"].content
    assert entries["/blog/second-post"].metadata["description"] == "By Ada"


def test_scan_missing_root_warns(tmp_path, variables, caplog):
    scanner = ContentScanner.from_path(tmp_path / "nope", variables)
    with caplog.at_level(logging.WARNING, logger="statue.content"):
        assert scanner.scan() == []
        assert scanner.scan_directories() == []
    assert "Content folder not found" in caplog.text


def test_scan_directories(tmp_path, variables):
    content = create_content(tmp_path)
    directories = ContentScanner.from_path(content, variables).scan_directories()
    assert [d.name for d in directories] == ["blog", "blog2", "empty"]
    blog = directories[0]
    assert (blog.path, blog.title, blog.url) == ("blog", "Blog", "/blog")


def test_malformed_front_matter_aborts_scan(make_source, variables):
    source = make_source(
        {
            "good.md": "# Good\n",
            "bad.md": "---\ntitle: [unclosed\n---\nBody\n",
            "later.md": "# Later\n",
        }
    )
    with pytest.raises(FrontmatterError) as excinfo:
        ContentScanner(source, variables).scan()
    assert str(excinfo.value.source_path) == "bad.md"
    assert source.reads == 2


def test_unreadable_file_aborts_scan(make_source, variables):
    source = make_source({"locked.md": PermissionError("denied")})
    with pytest.raises(ContentError, match="Unable to read file"):
        ContentScanner(source, variables).scan()


def test_undecodable_file_aborts_scan(tmp_path, variables):
    content = tmp_path / "content"
    content.mkdir()
    (content / "binary.md").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(ContentError):
        ContentScanner.from_path(content, variables).scan()


def test_scanner_accepts_custom_renderer(make_source, variables):
    class UpperRenderer:
        def render(self, content, directory):
            return f"{directory}:{content.upper()}"

    source = make_source({"docs/intro.md": "hello {{site.name}}"})
    (entry,) = ContentScanner(source, variables, renderer=UpperRenderer()).scan()
    assert entry.content == "docs:HELLO ACME"


def test_extract_frontmatter_variants():
    assert extract_frontmatter("No block") == ({}, "No block")
    assert extract_frontmatter("---\n---\nBody") == ({}, "Body")
    data, body = extract_frontmatter("---\ntitle: Hi\ncount: 2\n---\n# Body\n")
    assert data == {"title": "Hi", "count": 2}
    assert body == "# Body\n"
    data, body = extract_frontmatter("---\r\ntitle: Hi\r\n---\r\nBody")
    assert data == {"title": "Hi"}
    assert body == "Body"
    # A horizontal rule later in the file is not front matter.
    assert extract_frontmatter("Intro\n---\nMore")[0] == {}


def test_extract_frontmatter_rejects_non_mapping():
    with pytest.raises(FrontmatterError, match="mapping"):
        extract_frontmatter("---\n- a\n- b\n---\nBody", "list.md")


def test_build_metadata_defaults(variables):
    metadata = build_metadata({"title": "", "description": None, "extra": 1}, "my-page", variables)
    assert metadata["title"] == "My Page"
    assert metadata["description"] == ""
    assert metadata["date"] is None
    assert metadata["author"] is None
    assert metadata["extra"] == 1


def test_build_metadata_coerces_description(variables):
    metadata = build_metadata({"description": 42}, "page", variables)
    assert metadata["description"] == "42"


def test_scan_reads_front_matter_after_byte_order_mark(tmp_path, variables):
    content = tmp_path / "content"
    content.mkdir()
    (content / "post.md").write_text("\ufeff---\ntitle: Hello\n---\nBody\n", encoding="utf-8")
    (entry,) = ContentScanner.from_path(content, variables).scan()
    assert entry.title == "Hello"
    assert entry.content == "<p>Body</p>\n"


def test_derive_url():
    assert derive_url("", "about") == "/about"
    assert derive_url("blog/news", "update") == "/blog/news/update"


def test_file_loader_walk_is_depth_first(tmp_path):
    content = create_content(tmp_path)
    loader = FileContentLoader(content)
    assert [p.as_posix() for p in loader.iter_markdown()] == [
        "about.md",
        "blog/my-first-post.md",
        "blog/news/update.md",
        "blog/second-post.md",
        "blog2/other.md",
        "index.md",
    ]
