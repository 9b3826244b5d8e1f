"""Tests sanitizers : couleurs, liens, échappement, variables CSS."""
import pytest

from theme_sections import build_css_variables, escape_html, sanitize_hex, sanitize_href
from theme_sections.sanitizers import build_padding_style, camel_to_kebab, clamp, is_number, to_px


# ── sanitize_hex ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw,expected", [
    ("#ABC", "#aabbcc"),
    ("#A1B2C3", "#a1b2c3"),
    ("  #fff  ", "#ffffff"),
    ("transparent", "transparent"),
    ("TRANSPARENT", "transparent"),
])
def test_hex_normalized(raw, expected):
    assert sanitize_hex(raw, "#000000") == expected


@pytest.mark.parametrize("raw", ["red", "#12", "#1234567", "fff", "", None, 12, "#ggg"])
def test_hex_invalid_falls_back(raw):
    assert sanitize_hex(raw, "#151515") == "#151515"


# ── sanitize_href ────────────────────────────────────────────────────────────

def test_href_javascript_neutralized():
    assert sanitize_href("javascript:alert(1)") == "#"
    assert sanitize_href("  JavaScript:void(0)") == "#"


def test_href_keeps_safe_links():
    assert sanitize_href("https://example.com") == "https://example.com"
    assert sanitize_href("mailto:a@b.fr") == "mailto:a@b.fr"
    assert sanitize_href("/about/") == "/about/"
    assert sanitize_href("#top") == "#top"


def test_href_prefixes_bare_domain():
    assert sanitize_href("example.com/page") == "https://example.com/page"


def test_href_empty_or_not_string():
    assert sanitize_href("") == "#"
    assert sanitize_href("   ") == "#"
    assert sanitize_href(None) == "#"


# ── escape_html ──────────────────────────────────────────────────────────────

def test_escape_all_specials():
    assert escape_html("<a href=\"x\">'&'</a>") == "&lt;a href=&quot;x&quot;&gt;&#39;&amp;&#39;&lt;/a&gt;"


def test_escape_non_string():
    assert escape_html(None) == ""
    assert escape_html(42) == ""


# ── Nombres / CSS ────────────────────────────────────────────────────────────

def test_is_number_excludes_bool_and_nan():
    assert is_number(3) and is_number(2.5)
    assert not is_number(True)
    assert not is_number(float("nan"))
    assert not is_number("3")


def test_clamp_and_px():
    assert clamp(250, 0, 200) == 200
    assert clamp(-5, 0, 200) == 0
    assert to_px(12.6) == 13
    assert to_px("x", 8) == 8
    assert to_px(300, maximum=96) == 96


def test_padding_style():
    assert build_padding_style({"top": 32, "bottom": 16, "left": "x"}) == "padding-top: 32px; padding-bottom: 16px"


def test_css_variables():
    css = build_css_variables({"backgroundColor": "#fff", "paddingTop": 32, "opacity": 0.5,
                               "visible": True, "nested": {"a": 1}, "empty": ""})
    assert css == "--gd-background-color: #fff; --gd-padding-top: 32px; --gd-opacity: 0.5"


def test_camel_to_kebab():
    assert camel_to_kebab("cardBorderRadius") == "card-border-radius"
