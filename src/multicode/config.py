"""
Selection modes, output formats and the per-document target configuration.

Metadata (mirrors the ``qna`` filter)::

    multicode:
      html: both        # both | question | answer (aliases: all, first/q, second/a)
      pdf: question
      ipynb: answer

The legacy ``qna:`` block is read when ``multicode:`` is absent.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml
from pandoc.types import Meta, MetaMap

from multicode.nodes import stringify

# Metadata keys in lookup order; only the first one present is used.
META_KEYS = ("multicode", "qna")


class SelectionMode(str, Enum):
    """Which sections survive into the output."""

    BOTH = "both"
    FIRST = "question"
    SECOND = "answer"


_MODE_ALIASES = {
    "all": SelectionMode.BOTH,
    "both": SelectionMode.BOTH,
    "first": SelectionMode.FIRST,
    "q": SelectionMode.FIRST,
    "question": SelectionMode.FIRST,
    "second": SelectionMode.SECOND,
    "a": SelectionMode.SECOND,
    "answer": SelectionMode.SECOND,
}


def normalize_mode(value: Any) -> SelectionMode | None:
    """
    Map a raw target value onto a SelectionMode.

    ``None`` stays ``None`` (absent). Everything else maps to exactly one mode;
    unrecognized values fall back to BOTH and are reported as a warning.
    """
    if value is None:
        return None
    if isinstance(value, SelectionMode):
        return value
    text = stringify(value).strip().lower()
    mode = _MODE_ALIASES.get(text)
    if mode is None:
        if text:
            logging.warning(
                "Unrecognized multicode target %r; showing all sections", text
            )
        mode = SelectionMode.BOTH
    return mode


class OutputFormat(str, Enum):
    """Output formats that can carry their own default selection."""

    HTML = "html"
    PDF = "pdf"
    IPYNB = "ipynb"

    @classmethod
    def from_pandoc(cls, name: str | None) -> "OutputFormat | None":
        """
        Classify a pandoc writer name (``html5``, ``latex``, ``ipynb+raw_html``...).
        Returns None for formats without a configurable default.
        """
        if not name:
            return None
        base = name.split("+", 1)[0].split("-", 1)[0].strip().lower()
        if base.startswith("html") or base in _HTML_LIKE:
            return cls.HTML
        if base in _PDF_LIKE:
            return cls.PDF
        if base == "ipynb":
            return cls.IPYNB
        return None


_HTML_LIKE = {
    "revealjs",
    "slidy",
    "slideous",
    "s5",
    "dzslides",
    "epub",
    "epub2",
    "epub3",
}
_PDF_LIKE = {"latex", "pdf", "beamer", "context"}


class TargetConfig:
    """
    Default SelectionMode per output format for one document run.

    Each format is written at most once: the first non-absent value wins.
    Build a fresh instance per document; never share one between runs.
    A fallback mode, when set, answers for every format without a default,
    including formats that have no slot of their own.
    """

    def __init__(self):
        self._defaults: dict[OutputFormat, SelectionMode] = {}
        self._fallback: SelectionMode | None = None

    def __repr__(self) -> str:
        items = ", ".join(f"{k.value}={v.value}" for k, v in self._defaults.items())
        if self._fallback is not None:
            items = ", ".join(filter(None, [items, f"*={self._fallback.value}"]))
        return f"TargetConfig({items})"

    def set_default(self, fmt: OutputFormat, raw: Any) -> None:
        if fmt in self._defaults:
            return
        mode = normalize_mode(raw)
        if mode is not None:
            self._defaults[fmt] = mode

    def set_fallback(self, raw: Any) -> None:
        if self._fallback is None:
            self._fallback = normalize_mode(raw)

    def get_default(self, fmt: OutputFormat | None) -> SelectionMode:
        if fmt in self._defaults:
            return self._defaults[fmt]
        return self._fallback or SelectionMode.BOTH

    def is_set(self, fmt: OutputFormat) -> bool:
        return fmt in self._defaults

    def update_from_mapping(self, mapping: Any) -> None:
        """Apply an ``{html|pdf|ipynb: mode}`` block (``MetaMap`` or dict)."""
        entries = _as_dict(mapping)
        if entries is None:
            logging.warning(
                "Ignoring multicode metadata that is not a mapping: %r", mapping
            )
            return
        for fmt in OutputFormat:
            if entries.get(fmt.value) is not None:
                self.set_default(fmt, entries[fmt.value])

    @classmethod
    def from_meta(cls, meta: Any) -> "TargetConfig":
        """Build the configuration from document metadata (``Meta`` or dict)."""
        config = cls()
        entries = _as_dict(meta) or {}
        for key in META_KEYS:
            block = entries.get(key)
            if block is not None:
                logging.debug("Reading target defaults from '%s' metadata", key)
                config.update_from_mapping(block)
                break
        return config


def read_metadata_file(path: Path) -> Any:
    """
    Load a YAML metadata file and return its target block.

    The file may hold a ``multicode:``/``qna:`` block like document front
    matter, or just the ``{html|pdf|ipynb: mode}`` mapping itself.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Metadata file {path} must contain a YAML mapping")
    for key in META_KEYS:
        if key in data:
            return data[key]
    return data


def _as_dict(value: Any) -> Mapping[str, Any] | None:
    """Unwrap ``Meta``/``MetaMap`` to their dict; pass plain mappings through."""
    if isinstance(value, (Meta, MetaMap)):
        return value[0]
    if isinstance(value, Mapping):
        return value
    return None
