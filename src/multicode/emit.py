"""
Selection of sections and construction of the replacement blocks.

Three output shapes:

1. one section: a level-3 ``.qna-question`` header followed by its content;
2. several sections with a native tabset available: whatever the host's
   tabset builder returns for a ``TabsetSpec``;
3. several sections otherwise: a ``.panel-tabset`` Div holding a level-3
   header per section followed by that section's content. A downstream
   renderer (Quarto) turns this into tabs.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from pandoc.types import Div, Header

from multicode.config import (
    OutputFormat,
    SelectionMode,
    TargetConfig,
    normalize_mode,
)
from multicode.splitter import Section

# Header level used for tab titles, whatever the source level was.
TAB_LEVEL = 3
QUESTION_CLASS = "qna-question"
TABSET_CLASS = "panel-tabset"


@dataclass
class TabsetSpec:
    """Sections plus output classes; the input to both tabset builders."""

    level: int
    tabs: list[Section]
    classes: list[str] = field(default_factory=list)

    @property
    def attr(self) -> tuple[str, list[str], list]:
        return ("", list(self.classes), [])


@dataclass
class Host:
    """
    What the surrounding document pipeline provides.

    output_format: the pandoc writer name, e.g. ``html5`` or ``latex``.
    tabset: builder for a native tabbed-container node; None when the host
        has no such primitive and the fallback Div must be used.
    """

    output_format: str | None = None
    tabset: Callable[[TabsetSpec], Any] | None = None


def resolve_mode(
    override: Any, output_format: str | None, config: TargetConfig
) -> SelectionMode:
    """A container's own ``target`` wins over the per-format default."""
    mode = normalize_mode(override)
    if mode is not None:
        return mode
    return config.get_default(OutputFormat.from_pandoc(output_format))


def select_sections(sections: list[Section], mode: SelectionMode) -> list[Section]:
    if mode == SelectionMode.FIRST and len(sections) >= 1:
        return [sections[0]]
    if mode == SelectionMode.SECOND and len(sections) >= 2:
        return [sections[1]]
    return sections


def single_section_blocks(section: Section) -> list[Any]:
    header = Header(TAB_LEVEL, ("", [QUESTION_CLASS], []), section.title)
    return [header, *section.content]


def fallback_tabset(spec: TabsetSpec) -> Div:
    """Flat ``.panel-tabset`` Div with one header per tab."""
    blocks: list[Any] = []
    for tab in spec.tabs:
        blocks.append(Header(spec.level, ("", [], []), tab.title))
        blocks.extend(tab.content)
    return Div(spec.attr, blocks)


def emit(
    selected: list[Section],
    base_level: int,
    classes: list[str],
    host: Host | None = None,
) -> list[Any] | Any | None:
    """
    Build the replacement for a container.

    Returns None when there is nothing to emit (leave the container alone),
    a list of blocks for a single section, or a single tabset block.
    Titles are always emitted at TAB_LEVEL; base_level is the level they
    were split at in the source.
    """
    if not selected:
        return None
    if base_level != TAB_LEVEL:
        logging.debug("Re-leveling section titles from h%d to h%d", base_level, TAB_LEVEL)
    if len(selected) == 1:
        return single_section_blocks(selected[0])

    spec = TabsetSpec(level=TAB_LEVEL, tabs=list(selected), classes=list(classes))
    if host is not None and host.tabset is not None:
        logging.debug("Emitting native tabset with %d tabs", len(spec.tabs))
        return host.tabset(spec)
    logging.debug("Emitting fallback .%s Div with %d tabs", TABSET_CLASS, len(spec.tabs))
    return fallback_tabset(spec)
