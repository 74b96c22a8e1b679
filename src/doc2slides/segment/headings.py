from __future__ import annotations

import logging
from collections.abc import Sequence

from doc2slides.feature_logger import log_stage_decision
from doc2slides.model.blocks import BlockRecord, Section, heading_level_of

logger = logging.getLogger(__name__)


def _has_content(group: Sequence[BlockRecord]) -> bool:
    return any(not block.is_heading and not block.is_empty for block in group)


def detect_nested_headings(section: Sequence[BlockRecord]) -> bool:
    """True when H2s read as sub-sections of H1s.

    That is the case when an H1 comes before the first H2 and at least one H2
    follows it.
    """
    first_h1: int | None = None
    for index, block in enumerate(section):
        level = heading_level_of(block)
        if level == 1 and first_h1 is None:
            first_h1 = index
        elif level == 2:
            return first_h1 is not None
    return False


def split_by_headings(section: Sequence[BlockRecord]) -> list[Section]:
    """Split a section at top-level heading boundaries.

    - split level is 1 when any H1 exists, else 2; H3 and deeper never split
    - nested mode: each H1 opens a group, the first H2 after it stays attached as
      a subtitle, every later H2 opens its own group
    - the first block never splits on its own heading
    - a split is suppressed while the current group holds only headings, which
      folds a bare heading forward into the next group
    """
    levels = [heading_level_of(block) for block in section]
    has_h1 = 1 in levels
    has_h2 = 2 in levels
    if not has_h1 and not has_h2:
        return [list(section)]

    split_level = 1 if has_h1 else 2
    nested = detect_nested_headings(section)
    if nested:
        log_stage_decision("headings", "nested", {"blocks": len(section)})

    groups: list[Section] = []
    current: Section = []
    subtitle_pending = False

    for index, block in enumerate(section):
        level = levels[index]
        starts_group = False
        if nested:
            if level == 1:
                starts_group = True
                subtitle_pending = True
            elif level == 2:
                if subtitle_pending:
                    subtitle_pending = False
                else:
                    starts_group = True
        else:
            starts_group = level == split_level

        if starts_group and index > 0 and current and _has_content(current):
            groups.append(current)
            current = [block]
        else:
            if starts_group and current and not _has_content(current):
                logger.debug("Folding heading-only group into next heading at block %d", index)
            current.append(block)

    if current:
        groups.append(current)
    return groups


__all__ = [
    "detect_nested_headings",
    "split_by_headings",
]
