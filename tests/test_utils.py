"""Tests for footmark.utils module."""

from footmark.utils import parse_frontmatter, slugify, source_to_slug


class TestSlugify:
    def test_basic(self):
        assert slugify("Hello World") == "hello-world"

    def test_ampersand(self):
        assert slugify("Rock & Roll") == "rock-and-roll"

    def test_strips_punctuation(self):
        assert slugify("What's new?") == "whats-new"

    def test_collapses_hyphens(self):
        assert slugify("a  -  b") == "a-b"

    def test_empty(self):
        assert slugify("") == ""


class TestSourceToSlug:
    def test_file_path(self):
        assert source_to_slug("posts/my-article.md") == "my_article"

    def test_url(self):
        assert source_to_slug("https://example.com/raw/post.md") == "example_com_raw_post_md"

    def test_fallback(self):
        assert source_to_slug("...") == "document"


class TestParseFrontmatter:
    def test_metadata_and_body(self):
        text = "---\ntitle: 'Quoted'\npublishedAt: 2024-01-02\n---\n# Body"
        metadata, body = parse_frontmatter(text)
        assert metadata == {"title": "Quoted", "publishedAt": "2024-01-02"}
        assert body == "# Body"

    def test_no_frontmatter(self):
        assert parse_frontmatter("# Just body") == ({}, "# Just body")

    def test_rule_later_in_document_ignored(self):
        text = "Intro\n\n---\ntitle: x\n---\n"
        assert parse_frontmatter(text) == ({}, text)

    def test_value_with_colon(self):
        metadata, _ = parse_frontmatter("---\nsummary: a: b\n---\n")
        assert metadata["summary"] == "a: b"
