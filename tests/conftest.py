import pytest
from pandoc.types import Div, Header, Para, Space, Str


def _inlines(text):
    words = text.split(" ")
    out = [Str(words[0])]
    for word in words[1:]:
        out.extend([Space(), Str(word)])
    return out


@pytest.fixture
def header():
    """Header(level, text, classes=())."""

    def make(level, text, classes=()):
        return Header(level, ("", list(classes), []), _inlines(text))

    return make


@pytest.fixture
def para():
    def make(text):
        return Para(_inlines(text))

    return make


@pytest.fixture
def div():
    """Div(blocks, classes=("multicode",), target=None, ident="")."""

    def make(blocks, classes=("multicode",), target=None, ident=""):
        keyvals = [("target", target)] if target is not None else []
        return Div((ident, list(classes), keyvals), list(blocks))

    return make


@pytest.fixture
def qa_blocks(header, para):
    # ## Q / p1 / ## A / p2
    return [header(2, "Q"), para("p1"), header(2, "A"), para("p2")]


@pytest.fixture
def native_host():
    """A Host whose native tabset builder returns the TabsetSpec itself."""
    from multicode.emit import Host

    return Host(output_format="html", tabset=lambda spec: spec)

