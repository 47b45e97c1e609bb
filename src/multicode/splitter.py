import logging
from dataclasses import dataclass, field
from typing import Any

from pandoc.types import Header, Str

from multicode.nodes import stringify

# Header level assumed when the container holds no headers at all.
DEFAULT_BASE_LEVEL = 3
IMPLICIT_TITLE = "Section"


@dataclass
class Section:
    """One tab: a title (pandoc inlines) and the blocks that follow it."""

    title: list[Any]
    content: list[Any] = field(default_factory=list)

    @property
    def title_text(self) -> str:
        return stringify(self.title)


def implicit_title() -> list[Any]:
    return [Str(IMPLICIT_TITLE)]


def split_by_header(blocks: list[Any]) -> tuple[list[Section], int]:
    """
    Split a block list into sections at the level of the first header seen.

    Headers at that base level start a new section and become its title.
    Deeper headers stay in the content. Content before the first base-level
    header goes into a leading section titled "Section".
    Returns the sections and the base level (3 when no header was found).
    """
    sections: list[Section] = []
    current: Section | None = None
    base_level: int | None = None

    for blk in blocks:
        if isinstance(blk, Header):
            level = blk[0]
            if base_level is None:
                base_level = level
            if level == base_level:
                if current is not None:
                    sections.append(current)
                # the header becomes the title and is not kept as content
                current = Section(title=blk[2])
                continue
        if current is None:
            current = Section(title=implicit_title())
        current.content.append(blk)

    if current is not None:
        sections.append(current)

    logging.debug(
        "Split %d blocks into %d sections at header level %s",
        len(blocks),
        len(sections),
        base_level,
    )
    return sections, (base_level if base_level is not None else DEFAULT_BASE_LEVEL)
