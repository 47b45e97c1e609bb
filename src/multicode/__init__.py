from multicode.config import OutputFormat, SelectionMode, TargetConfig, normalize_mode
from multicode.emit import (
    TAB_LEVEL,
    Host,
    TabsetSpec,
    emit,
    fallback_tabset,
    resolve_mode,
    select_sections,
)
from multicode.filter import MulticodeFilter, is_multicode, output_classes, transform_div
from multicode.splitter import Section, split_by_header

__all__ = [
    "Host",
    "MulticodeFilter",
    "OutputFormat",
    "Section",
    "SelectionMode",
    "TAB_LEVEL",
    "TabsetSpec",
    "TargetConfig",
    "apply",
    "emit",
    "fallback_tabset",
    "is_multicode",
    "normalize_mode",
    "output_classes",
    "resolve_mode",
    "select_sections",
    "split_by_header",
    "transform_div",
]


def apply(doc, output_format: str | None = None):
    """Transform a pandoc document in place for ``output_format``."""
    return MulticodeFilter(Host(output_format=output_format)).apply(doc)
