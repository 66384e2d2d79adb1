"""Tests for footmark.highlight module."""

from bs4 import BeautifulSoup

from footmark.highlight import (
    highlight_lines,
    is_comment_line,
    render_code_block,
    stylesheet,
)


class TestIsCommentLine:
    def test_comment_styles(self):
        assert is_comment_line("# python")
        assert is_comment_line("   // js")
        assert is_comment_line("<!-- html -->")
        assert is_comment_line("/* block")
        assert is_comment_line(" * continued")

    def test_not_comments(self):
        assert not is_comment_line("x = 1  # trailing")
        assert not is_comment_line(" */")
        assert not is_comment_line("")


class TestHighlightLines:
    def test_one_fragment_per_line(self):
        code = 'def f():\n    s = """multi\nline"""\n    return s\n'
        assert len(highlight_lines(code, "python")) == 4

    def test_trailing_blank_lines_dropped(self):
        assert len(highlight_lines("a\nb\n\n\n", "text")) == 2

    def test_unknown_language_falls_back(self):
        lines = highlight_lines("<b>", "no-such-language")
        assert lines == ["&lt;b&gt;"]

    def test_empty_code(self):
        assert highlight_lines("", "python") == []


class TestRenderCodeBlock:
    def test_structure(self):
        html = render_code_block("# setup\nx = 1\n", "python")
        soup = BeautifulSoup(html, "lxml")
        assert soup.find(class_="code-language").get_text() == "python"
        assert soup.find("button", class_="copy-button") is not None
        lines = soup.find_all("span", class_="line")
        assert len(lines) == 2
        assert [l.find(class_="line-number").get_text() for l in lines] == ["1", "2"]
        assert "comment" in lines[0].find(class_="line-content")["class"]
        assert "comment" not in lines[1].find(class_="line-content")["class"]

    def test_copy_source_kept(self):
        html = render_code_block("a < b\n", "")
        code = BeautifulSoup(html, "lxml").find("code")
        assert code["data-code"] == "a < b"

    def test_no_language_label_without_language(self):
        html = render_code_block("x", "")
        assert "code-language" not in html


class TestStylesheet:
    def test_scoped_to_highlight(self):
        assert ".highlight" in stylesheet("default")
