"""Tests for footmark.convert module."""

import pytest
from bs4 import BeautifulSoup
from PIL import Image

from footmark.annotate import FootnoteAnnotator
from footmark.config import RenderOptions
from footmark.convert import (
    ANNOTATOR_ENV_KEY,
    REGISTRY_ENV_KEY,
    build_markdown,
    fence_language,
    is_external_href,
)
from footmark.errors import RegistryScopeError
from footmark.extract import Definition
from footmark.registry import FootnoteRegistry


def _render(markdown, options=None, env=None):
    md = build_markdown(options)
    env = env if env is not None else {}
    with FootnoteRegistry() as registry:
        env[REGISTRY_ENV_KEY] = registry
        html = md.render(markdown, env)
    return BeautifulSoup(html, "lxml")


class TestHeadings:
    def test_slug_id_and_anchor(self):
        soup = _render("## Getting Started & More")
        h2 = soup.find("h2")
        assert h2["id"] == "getting-started-and-more"
        assert h2.find("a", class_="anchor")["href"] == "#getting-started-and-more"

    def test_duplicate_slugs_numbered(self):
        soup = _render("# Intro\n\n# Intro\n\n# Intro")
        assert [h["id"] for h in soup.find_all("h1")] == ["intro", "intro-1", "intro-2"]

    def test_inline_code_in_heading(self):
        soup = _render("### The `render` step")
        assert soup.find("h3")["id"] == "the-render-step"


class TestLinks:
    def test_external_link_opens_new_tab(self):
        link = _render("[site](https://example.com)").find("a")
        assert link["target"] == "_blank"
        assert link["rel"] == ["noopener", "noreferrer"]

    def test_internal_link_plain(self):
        link = _render("[posts](/blog)").find("a")
        assert not link.has_attr("target")

    def test_hash_link_plain(self):
        link = _render("[jump](#section)").find("a")
        assert not link.has_attr("target")

    def test_is_external_href(self):
        assert is_external_href("https://x.com")
        assert is_external_href("//cdn.example.com/x")
        assert not is_external_href("/about")
        assert not is_external_href("#top")


class TestImages:
    def test_caption_from_alt(self):
        soup = _render("![A diagram](https://example.com/d.png)")
        figure = soup.find("figure")
        assert figure.find("img")["alt"] == "A diagram"
        assert figure.find("figcaption").get_text() == "A diagram"

    def test_no_caption_without_alt(self):
        soup = _render("![](https://example.com/d.png)")
        assert soup.find("figcaption") is None

    def test_local_image_dimensions(self, tmp_path):
        Image.new("RGB", (40, 20)).save(tmp_path / "pic.png")
        soup = _render("![pic](pic.png)", RenderOptions(base_dir=tmp_path))
        img = soup.find("img")
        assert img["width"] == "40"
        assert img["height"] == "20"

    def test_embed_local_image(self, tmp_path):
        Image.new("RGB", (40, 20)).save(tmp_path / "pic.png")
        options = RenderOptions(base_dir=tmp_path, embed_images=True)
        img = _render("![pic](pic.png)", options).find("img")
        assert img["src"].startswith("data:image/jpeg;base64,")


class TestBlocks:
    @pytest.mark.parametrize("text,kind", [
        ("> Note: read this", "note"),
        ("> WARNING careful", "warning"),
        ("> tip: try it", "tip"),
        ("> Just a quote", "default"),
    ])
    def test_blockquote_kinds(self, text, kind):
        quote = _render(text).find("blockquote")
        assert quote["class"] == ["custom-blockquote", kind]

    def test_inline_code(self):
        code = _render("Use `x < y` here").find("code")
        assert code["class"] == ["inline-code"]
        assert code.get_text() == "x < y"

    def test_fenced_code_highlighted(self):
        soup = _render("```python\nprint('hi')\n```")
        assert soup.find("div", class_="code-block") is not None
        assert soup.find(class_="code-language").get_text() == "python"

    def test_fenced_code_plain_when_disabled(self):
        soup = _render("```python\nprint('hi')\n```", RenderOptions(highlight=False))
        assert soup.find("div", class_="code-block") is None
        assert soup.find("code")["class"] == ["language-python"]

    def test_table(self):
        soup = _render("| a | b |\n|---|---|\n| 1 | 2 |")
        assert [td.get_text() for td in soup.find_all("td")] == ["1", "2"]

    def test_fence_language(self):
        assert fence_language("python") == "python"
        assert fence_language("language-js extra") == "js"
        assert fence_language("lang-rust") == "rust"
        assert fence_language("") == ""


class TestFootnoteTokens:
    def _env(self, *defs):
        return {ANNOTATOR_ENV_KEY: FootnoteAnnotator([Definition(i, c) for i, c in defs])}

    def test_markers_become_references(self):
        soup = _render("A^[1] b^[1]", env=self._env(("1", "one")))
        assert [s.get_text() for s in soup.find_all("sup")] == ["[1]", "[1]"]

    def test_first_occurrence_across_paragraphs(self):
        md = "# Title^[2]\n\nPara^[1] and^[2]"
        soup = _render(md, env=self._env(("1", "one"), ("2", "two")))
        sups = soup.find_all("sup")
        assert [s.get_text() for s in sups] == ["[1]", "[2]", "[1]"]
        assert sups[0]["id"] == "fn-ref-2"
        assert not sups[2].has_attr("id")

    def test_markers_in_code_untouched(self):
        md = "`code^[1]`\n\n```\nblock^[1]\n```"
        soup = _render(md, env=self._env(("1", "one")))
        assert soup.find("sup") is None
        assert "code^[1]" in soup.get_text()

    def test_escaped_marker_untouched(self):
        soup = _render("A^[1] and \\^[1]", env=self._env(("1", "one")))
        assert [s.get_text() for s in soup.find_all("sup")] == ["[1]"]
        assert "and ^[1]" in soup.get_text()

    def test_rule_runs_before_text_join(self):
        names = build_markdown().core.ruler.get_active_rules()
        assert names.index("footnote_refs") < names.index("text_join")

    def test_no_annotator_leaves_markers(self):
        soup = _render("A^[1]")
        assert soup.find("sup") is None
        assert "A^[1]" in soup.get_text()

    def test_missing_registry_is_a_wiring_error(self):
        md = build_markdown()
        with pytest.raises(RegistryScopeError):
            md.render("A^[1]", self._env(("1", "one")))
