from __future__ import annotations

import hashlib
from collections.abc import Sequence


def compute_slide_id(
    deck_id: str,
    slide_index: int,
    block_ids: Sequence[str | None] = (),
) -> str:
    """Compute a deterministic 16-hex id for a slide.

    _id = sha1(<deck-id>|<slide-index>|<block-id>,<block-id>...)[:16]
    Missing block ids are skipped; with none left the trailing part is omitted.
    """

    parts = [deck_id, str(slide_index)]
    known = [b for b in block_ids if b]
    if known:
        parts.append(",".join(known))
    seed = "|".join(parts)
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()
    return digest[:16]
