import pytest
from pandoc.types import (
    Code,
    DoubleQuote,
    Emph,
    Link,
    MetaInlines,
    MetaList,
    MetaString,
    Note,
    Para,
    Plain,
    Quoted,
    SingleQuote,
    SoftBreak,
    Space,
    Str,
    Strong,
)

from multicode.nodes import get_attribute, get_classes, stringify


def test_stringify_inlines():
    inlines = [Str("Hello"), Space(), Emph([Str("big")]), SoftBreak(), Str("world")]
    assert stringify(inlines) == "Hello big world"


def test_stringify_nested_formatting_is_not_spaced():
    assert stringify([Strong([Str("multi")]), Str("code")]) == "multicode"


def test_stringify_link_and_code():
    link = Link(("", [], []), [Str("docs")], ("https://example.org", ""))
    assert stringify([link, Space(), Code(("", [], []), "x = 1")]) == "docs x = 1"


def test_stringify_drops_notes():
    assert stringify([Str("Q"), Note([Para([Str("footnote")])])]) == "Q"


def test_stringify_blocks_are_space_joined():
    assert stringify([Para([Str("one")]), Plain([Str("two")])]) == "one two"


def test_stringify_meta_values():
    assert stringify(MetaInlines([Str("first")])) == "first"
    assert stringify(MetaString("a")) == "a"
    assert stringify(MetaList([MetaString("x"), MetaString("y")])) == "x y"
    assert stringify(True) == "true"
    assert stringify(None) == ""


def test_get_classes():
    assert get_classes(("id", ["multicode", "wide"], [])) == ["multicode", "wide"]
    assert get_classes(("id", [], [])) == []
    assert get_classes(None) == []


def test_get_attribute():
    attr = ("", [], [("target", "question"), ("width", "50%")])
    assert get_attribute(attr, "target") == "question"
    assert get_attribute(attr, "missing") is None
    assert get_attribute(("", [], []), "target") is None
    assert get_attribute(None, "target") is None


@pytest.mark.parametrize(
    "quote,expected",
    [(DoubleQuote(), "“hi there”"), (SingleQuote(), "‘hi there’")],
)
def test_stringify_keeps_quote_marks(quote, expected):
    quoted = Quoted(quote, [Str("hi"), Space(), Str("there")])
    assert stringify([Str("say"), Space(), quoted]) == f"say {expected}"
