"""
Tests for HTML escaping.
"""

from stache.escaping import ENTITY_MAP, escape_html


def test_every_unsafe_character():
    """Each character of the table is replaced"""
    for char, entity in ENTITY_MAP.items():
        assert escape_html(f"a{char}b") == f"a{entity}b"


def test_full_table():
    assert escape_html("&<>\"'/`=") == "&amp;&lt;&gt;&quot;&#39;&#x2F;&#x60;&#x3D;"


def test_no_double_escaping_of_output():
    """Ampersands produced by the table are not escaped again"""
    assert escape_html("<") == "&lt;"
    assert escape_html("&lt;") == "&amp;lt;"


def test_safe_text_unchanged():
    text = "Plain text, with: punctuation! (and) [brackets] {braces} 100% ok?"
    assert escape_html(text) == text
