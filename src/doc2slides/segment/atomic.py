from __future__ import annotations

from collections.abc import Sequence

from doc2slides.model.blocks import BlockRecord, Section


def isolate_atomic_blocks(section: Sequence[BlockRecord]) -> list[Section]:
    """Give every atomic media block (whiteboard, spreadsheet, diagram) its own section.

    Runs of other blocks between them are kept together, in order.
    """
    sections: list[Section] = []
    current: Section = []
    for block in section:
        if block.is_atomic:
            if current:
                sections.append(current)
                current = []
            sections.append([block])
        else:
            current.append(block)
    if current:
        sections.append(current)
    return sections


__all__ = ["isolate_atomic_blocks"]
