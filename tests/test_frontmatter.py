"""Tests for the frontmatter codec."""

import pytest

pytestmark = pytest.mark.unit

from docsync.storage import frontmatter


class TestParse:
    """Tests for splitting raw text into metadata and body."""

    def test_parse_header_and_body(self):
        raw = '---\ntitle: "Weekly Report"\nemoji: "📊"\n---\n# Weekly Report\n'
        meta, body = frontmatter.parse(raw)
        assert meta == {"title": "Weekly Report", "emoji": "📊"}
        assert body == "# Weekly Report\n"

    def test_parse_without_header(self):
        """Text that does not open with a fence is all body."""
        raw = "# Plain\n\nNo header here.\n"
        assert frontmatter.parse(raw) == ({}, raw)

    def test_parse_unterminated_header(self):
        """A missing closing fence means there is no header."""
        raw = "---\ntitle: Broken\n# Body\n"
        assert frontmatter.parse(raw) == ({}, raw)

    def test_parse_empty_header(self):
        meta, body = frontmatter.parse("---\n---\nbody")
        assert meta == {}
        assert body == "body"

    def test_parse_unquoted_and_single_quoted_values(self):
        meta, _ = frontmatter.parse("---\ntitle: Plain Title\ncategory: 'Guide'\n---\n")
        assert meta == {"title": "Plain Title", "category": "Guide"}

    def test_parse_value_containing_colon(self):
        meta, _ = frontmatter.parse('---\ntitle: "Time: 10:30"\n---\n')
        assert meta["title"] == "Time: 10:30"

    def test_parse_ignores_lines_without_colon(self):
        meta, _ = frontmatter.parse("---\njust text\ntitle: Kept\n---\n")
        assert meta == {"title": "Kept"}

    def test_parse_crlf_line_endings(self):
        meta, body = frontmatter.parse('---\r\ntitle: "Win"\r\n---\r\nbody\r\n')
        assert meta == {"title": "Win"}
        assert body == "body\r\n"

    def test_strip_returns_body_only(self):
        assert frontmatter.strip('---\ntitle: "X"\n---\nHello') == "Hello"

    def test_body_with_later_horizontal_rule_is_untouched(self):
        raw = '---\ntitle: "X"\n---\nIntro\n\n---\n\nMore\n'
        assert frontmatter.strip(raw) == "Intro\n\n---\n\nMore\n"


class TestBuild:
    """Tests for rendering metadata as a header."""

    def test_build_known_keys_first(self):
        header = frontmatter.build(
            {"custom": "kept", "category": "Guide", "title": "T", "last_edited_by": "Agent"}
        )
        assert header == (
            '---\ntitle: "T"\ncategory: "Guide"\nlast_edited_by: "Agent"\ncustom: "kept"\n---\n'
        )

    def test_build_skips_empty_values(self):
        header = frontmatter.build({"title": "T", "emoji": "", "category": None})
        assert header == '---\ntitle: "T"\n---\n'

    def test_build_empty_meta(self):
        assert frontmatter.build({}) == "---\n---\n"

    def test_build_folds_multiline_values(self):
        header = frontmatter.build({"title": "line one\nline two"})
        assert 'title: "line one line two"' in header

    def test_compose_round_trip(self):
        meta = {"title": "Plan", "emoji": "📁", "category": "Project", "owner": "ops"}
        body = "# Plan\n\n- step one\n"
        assert frontmatter.parse(frontmatter.compose(meta, body)) == (meta, body)

    @pytest.mark.parametrize("meta", [{}, {"title": ""}, {"title": "", "emoji": None}])
    @pytest.mark.parametrize(
        "body",
        ["Intro\n---\nmore\n", "Intro\n\n---\n\nmore\n", "a\n---\nb\n---\nc", ""],
    )
    def test_empty_header_keeps_horizontal_rules(self, meta, body):
        """A header with nothing in it closes at its own fence, not a later rule."""
        assert frontmatter.strip(frontmatter.build(meta) + body) == body

    def test_header_keeps_horizontal_rules(self):
        body = "Intro\n\n---\n\nmore\n---\n"
        assert frontmatter.strip(frontmatter.compose({"title": "T"}, body)) == body
