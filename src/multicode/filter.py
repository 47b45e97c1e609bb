"""
Tabbed sections for ``.multicode`` (and legacy ``.qna``) Divs.

    ::: {.multicode target="question"}
    ## Python
    ...
    ## R
    ...
    :::

Each Div is split into sections at the level of its first header, narrowed to
one section when the selected target asks for it, and replaced by a tabset
(or by a header plus content when only one section remains).
"""

import copy
import logging
from typing import Any, Callable

import pandoc
from pandoc.types import Div, Pandoc

from multicode.config import TargetConfig
from multicode.emit import (
    QUESTION_CLASS,
    TABSET_CLASS,
    Host,
    emit,
    resolve_mode,
    select_sections,
)
from multicode.nodes import get_attribute, get_classes
from multicode.splitter import split_by_header

MULTICODE_CLASS = "multicode"
# Legacy trigger class of the qna filter; accepted as a drop-in replacement.
QNA_CLASS = "qna"
TRIGGER_CLASSES = (MULTICODE_CLASS, QNA_CLASS)


def is_multicode(div: Any) -> bool:
    if not isinstance(div, Div):
        return False
    return any(c in TRIGGER_CLASSES for c in get_classes(div[0]))


def output_classes(classes: list[str]) -> list[str]:
    """
    Classes for the emitted tabset: always ``panel-tabset`` and
    ``qna-question``; ``multicode`` too unless the Div was a legacy ``.qna``.
    """
    out = [TABSET_CLASS, QUESTION_CLASS]
    if QNA_CLASS not in classes:
        out.append(MULTICODE_CLASS)
    return out


def transform_div(div: Any, config: TargetConfig, host: Host | None = None):
    """Replacement for ``div``, or None to leave it untouched."""
    if not is_multicode(div):
        return None
    host = host or Host()
    attr, blocks = div[0], div[1]

    sections, base_level = split_by_header(blocks)
    if not sections:
        return None

    mode = resolve_mode(get_attribute(attr, "target"), host.output_format, config)
    selected = select_sections(sections, mode)
    logging.debug(
        "Div #%s: %d sections, target=%s, keeping %s",
        attr[0] or "-",
        len(sections),
        mode.value,
        [s.title_text for s in selected],
    )
    return emit(selected, base_level, output_classes(get_classes(attr)), host)


def describe_div(div: Any, config: TargetConfig, host: Host | None = None) -> dict:
    """Summary of what ``transform_div`` would do with ``div``, for inspection."""
    host = host or Host()
    attr = div[0]
    sections, base_level = split_by_header(div[1])
    mode = resolve_mode(get_attribute(attr, "target"), host.output_format, config)
    selected = select_sections(sections, mode)
    if not selected:
        shape = "unchanged"
    elif len(selected) == 1:
        shape = "single"
    elif host.tabset is not None:
        shape = "native"
    else:
        shape = "fallback"
    return {
        "id": attr[0],
        "classes": get_classes(attr),
        "base_level": base_level,
        "target": mode.value,
        "sections": [
            {"title": s.title_text, "blocks": len(s.content)} for s in sections
        ],
        "selected": [s.title_text for s in selected],
        "output": shape,
        "output_classes": (
            output_classes(get_classes(attr)) if len(selected) > 1 else []
        ),
    }


class MulticodeFilter:
    """
    Applies the transform to whole documents.

    The target configuration is rebuilt from each document's metadata, so one
    filter instance can serve many documents.
    """

    def __init__(
        self,
        host: Host | None = None,
        extra_meta: list[Any] | None = None,
        default_target: str | None = None,
    ):
        self.host = host or Host()
        # Supplementary metadata blocks, applied after the document's own.
        self.extra_meta = extra_meta or []
        self.default_target = default_target

    def build_config(self, meta: Any) -> TargetConfig:
        config = TargetConfig.from_meta(meta)
        for block in self.extra_meta:
            config.update_from_mapping(block)
        if self.default_target is not None:
            config.set_fallback(self.default_target)
        logging.debug("Target defaults: %r", config)
        return config

    def find_containers(self, doc: Pandoc) -> list[tuple[Any, list, int]]:
        """Matching Divs with their holder list and index, in document order."""
        found = []
        for elt, path in pandoc.iter(doc, path=True):
            if not is_multicode(elt) or not path:
                continue
            holder, index = path[-1]
            if isinstance(holder, list):
                found.append((elt, holder, index))
        return found

    def apply(self, doc: Pandoc) -> Pandoc:
        """Transform ``doc`` in place and return it."""
        if not isinstance(doc, Pandoc):
            raise TypeError(f"Expected a pandoc document, got {type(doc).__name__}")
        config = self.build_config(doc[0])
        changed, total = self._splice(doc, config)
        logging.info(
            "Transformed %d of %d multicode containers (format: %s)",
            changed,
            total,
            self.host.output_format,
        )
        return doc

    def describe(self, doc: Pandoc) -> list[dict]:
        """
        One ``describe_div`` record per container, in document order.

        Runs the transform on a copy so that an outer container is described
        with its inner containers already replaced, as ``apply`` sees it.
        """
        if not isinstance(doc, Pandoc):
            raise TypeError(f"Expected a pandoc document, got {type(doc).__name__}")
        doc = copy.deepcopy(doc)
        config = self.build_config(doc[0])
        records = []
        self._splice(
            doc,
            config,
            lambda div: records.append(describe_div(div, config, self.host)),
        )
        records.reverse()
        return records

    def _splice(
        self,
        doc: Pandoc,
        config: TargetConfig,
        on_container: Callable[[Any], None] | None = None,
    ) -> tuple[int, int]:
        containers = self.find_containers(doc)
        # Innermost and last first: splicing never shifts a pending index
        # and outer Divs see their already transformed children.
        changed = 0
        for div, holder, index in reversed(containers):
            if on_container is not None:
                on_container(div)
            replacement = transform_div(div, config, self.host)
            if replacement is None:
                continue
            if not isinstance(replacement, list):
                replacement = [replacement]
            holder[index : index + 1] = replacement
            changed += 1
        return changed, len(containers)
