"""Small helpers over pandoc AST values (``pandoc.types``)."""

from typing import Any

from pandoc.types import (
    Block,
    Code,
    LineBreak,
    Math,
    MetaBool,
    MetaString,
    MetaValue,
    Note,
    Quoted,
    RawInline,
    SingleQuote,
    SoftBreak,
    Space,
    Str,
)

SINGLE_QUOTES = ("\u2018", "\u2019")
DOUBLE_QUOTES = ("\u201c", "\u201d")


def stringify(value: Any) -> str:
    """
    Plain text of an inline list, block list or MetaValue.

    Footnotes are dropped; breaks and spaces become single spaces.
    Python scalars are converted directly (booleans as ``true``/``false``).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Str):
        return value[0]
    if isinstance(value, (Space, SoftBreak, LineBreak)):
        return " "
    if isinstance(value, Note):
        return ""
    if isinstance(value, Quoted):
        # curly quotes, as pandoc's own stringify renders them
        quotes = SINGLE_QUOTES if isinstance(value[0], SingleQuote) else DOUBLE_QUOTES
        left, right = quotes
        return left + stringify(value[1]) + right
    if isinstance(value, (Code, Math, RawInline)):
        # text is the last field in all three
        return value[-1]
    if isinstance(value, MetaString):
        return value[0]
    if isinstance(value, MetaBool):
        return "true" if value[0] else "false"
    if isinstance(value, dict):
        return " ".join(stringify(v) for v in value.values())
    if isinstance(value, tuple):
        # bare Attr/Target tuples carry no text
        return ""
    if isinstance(value, list):
        return _join([stringify(v) for v in value], value)
    # Any other constructor: Emph, Link, Para, MetaInlines, MetaList, ...
    # Recurse into fields that hold content, skipping attributes/targets.
    try:
        fields = list(value)
    except TypeError:
        return ""
    nested = [f for f in fields if isinstance(f, (list, dict))]
    return _join([stringify(f) for f in nested], nested)


def _join(parts: list[str], values: list) -> str:
    # Inline lists carry their own Space elements; blocks and list items do not.
    if any(isinstance(v, (Block, MetaValue)) for v in values):
        return " ".join(p for p in parts if p)
    return "".join(parts)


def get_classes(attr: Any) -> list[str]:
    try:
        classes = attr[1]
    except (IndexError, TypeError):
        return []
    if isinstance(classes, (list, tuple)):
        return [str(c) for c in classes if c]
    return []


def get_attribute(attr: Any, key: str) -> str | None:
    """Value of ``key`` in an Attr's keyvals, or None."""
    try:
        keyvals = attr[2]
    except (IndexError, TypeError):
        return None
    for pair in keyvals or []:
        if len(pair) == 2 and pair[0] == key:
            return pair[1]
    return None
