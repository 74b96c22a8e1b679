"""JSON loading of editor documents and serialization of generated slides.

Key features:
- Tolerant document loading (bare block list, ``{"blocks": [...]}`` or
  ``{"document": [...]}`` wrappers)
- Deterministic slide JSON with sorted keys
- Atomic file writing to prevent partially written decks
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile

from doc2slides.model.content import SlideContent
from doc2slides.types import DocumentLike


class DocumentLoadError(ValueError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document {path}: {reason}")


def document_from_json(text: str) -> DocumentLike:
    """Parse editor document JSON.

    Raises:
        ValueError: If the text is not valid JSON or has no block list
    """
    data = json.loads(text)
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and (
        isinstance(data.get("blocks"), list) or isinstance(data.get("document"), list)
    ):
        return data
    raise ValueError("expected a list of blocks or an object with a 'blocks' list")


def load_document(path: Path, *, encoding: str = "utf-8") -> DocumentLike:
    """Read and parse an editor document from disk.

    Raises:
        DocumentLoadError: If the file cannot be read or parsed
    """
    try:
        text = path.read_text(encoding=encoding)
    except OSError as exc:
        raise DocumentLoadError(path, str(exc)) from exc
    try:
        return document_from_json(text)
    except ValueError as exc:
        raise DocumentLoadError(path, str(exc)) from exc


def slides_to_json(slides: Sequence[SlideContent], *, pretty: bool = True) -> str:
    """Serialize slides to deterministic JSON."""
    return json.dumps(
        [slide.to_dict() for slide in slides],
        ensure_ascii=False,
        sort_keys=True,
        indent=2 if pretty else None,
    )


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Atomically write text to a file by writing to a temp file then replacing.

    Ensures parent directories exist and minimizes risk of partial writes.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", encoding=encoding, dir=str(path.parent), delete=False) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = Path(tmp.name)
    os.replace(tmp_path, path)


__all__ = [
    "DocumentLoadError",
    "atomic_write_text",
    "document_from_json",
    "load_document",
    "slides_to_json",
]
