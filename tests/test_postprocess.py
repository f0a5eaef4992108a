"""Tests for Markdown post-processing: link stripping, whitespace, truncation."""

from __future__ import annotations

import re

import pytest

from better_fetch.scraper.postprocess import (
    TRUNCATION_SUFFIX,
    normalize_whitespace,
    postprocess,
    strip_links,
    truncate,
)

_LINK_SYNTAX = re.compile(r"\[[^\]]*\]\([^)]*\)")


class TestStripLinks:
    def test_rewrites_link_to_label(self) -> None:
        assert strip_links("Hello [link](https://x.com)") == "Hello link"

    def test_multiple_links_on_one_line(self) -> None:
        text = "[a](https://a.com) and [b](https://b.com/path?q=1)"
        assert strip_links(text) == "a and b"

    def test_link_with_title(self) -> None:
        assert strip_links('[docs](https://x.com "The docs")') == "docs"

    def test_escaped_paren_inside_target(self) -> None:
        text = r"[Foo](https://en.wikipedia.org/wiki/Foo_\(bar\)) rest"
        assert strip_links(text) == "Foo rest"

    def test_unescaped_paren_ends_target(self) -> None:
        # Best effort: the target stops at the first unescaped ")".
        text = "[Foo](https://en.wikipedia.org/wiki/Foo_(bar)) rest"
        assert strip_links(text) == "Foo) rest"

    def test_empty_label(self) -> None:
        assert strip_links("x [](https://x.com) y") == "x  y"

    def test_plain_brackets_untouched(self) -> None:
        text = "an array [1, 2] and (a parenthetical)"
        assert strip_links(text) == text

    def test_no_link_syntax_survives(self) -> None:
        markdown = (
            "# Title\n\nSee [one](https://1.example) or [two](/relative).\n\n"
            "- [item](https://item.example)\n"
        )
        assert _LINK_SYNTAX.search(strip_links(markdown)) is None


class TestNormalizeWhitespace:
    def test_caps_blank_line_runs(self) -> None:
        assert normalize_whitespace("a\n\n\n\n\n\nb") == "a\n\n\nb"

    def test_keeps_three_newlines(self) -> None:
        assert normalize_whitespace("a\n\n\nb") == "a\n\n\nb"

    def test_trims_both_ends(self) -> None:
        assert normalize_whitespace("\n\n  \t text \n\n\n") == "text"

    def test_whitespace_only(self) -> None:
        assert normalize_whitespace(" \n\n\n\n ") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "a\n\n\n\n\nb\n\n\n\n\n\n\nc",
            "\n\n\n\n  lead and trail  \n\n\n\n",
            "already\n\nclean",
            "",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = normalize_whitespace(text)
        assert normalize_whitespace(once) == once
        assert "\n\n\n\n" not in once
        assert once == once.strip()


class TestTruncate:
    def test_no_limit(self) -> None:
        assert truncate("abcdef", None) == "abcdef"

    def test_under_limit_unchanged(self) -> None:
        assert truncate("abc", 3) == "abc"

    def test_over_limit_cut_and_marked(self) -> None:
        assert truncate('{"a":1}', 3) == '{"a' + TRUNCATION_SUFFIX

    def test_limit_smaller_than_suffix(self) -> None:
        result = truncate("abcdefghijklmnopqrstuvwxyz" * 3, 1)
        assert result == "a" + TRUNCATION_SUFFIX

    @pytest.mark.parametrize("max_length", [1, 5, 24, 100, 1000])
    def test_length_bound(self, max_length: int) -> None:
        text = "word " * 200
        result = truncate(text, max_length)
        assert len(result) <= max_length + len(TRUNCATION_SUFFIX)
        if len(text) > max_length:
            assert result.endswith(TRUNCATION_SUFFIX)
            assert result[:max_length] == text[:max_length]

    def test_cuts_mid_word(self) -> None:
        assert truncate("internationalization", 5) == "inter" + TRUNCATION_SUFFIX


class TestPostprocess:
    def test_order_strip_then_normalize_then_truncate(self) -> None:
        markdown = "\n\n[Hello](https://x.com)\n\n\n\n\nworld\n\n"
        assert postprocess(markdown, include_links=False) == "Hello\n\n\nworld"
        # Truncation counts characters after links are gone and whitespace is trimmed.
        assert postprocess(markdown, include_links=False, max_length=5) == (
            "Hello" + TRUNCATION_SUFFIX
        )

    def test_links_kept_by_default(self) -> None:
        assert postprocess("[a](https://a.com)") == "[a](https://a.com)"

    def test_truncation_suffix_not_normalized(self) -> None:
        result = postprocess("x" * 50, max_length=10)
        assert result.endswith(TRUNCATION_SUFFIX)
