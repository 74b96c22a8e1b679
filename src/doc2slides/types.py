from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypedDict


class HostBlockLike(Protocol):
    """Minimal protocol for an editor block node exposed as attributes."""

    type: str
    props: dict[str, Any]
    content: Any
    children: Sequence[Any]


class EditorLike(Protocol):
    """Editor object exposing its top-level block list."""

    @property
    def document(self) -> Sequence[Any]:  # pragma: no cover - typing
        ...


class TextStylesDict(TypedDict, total=False):
    bold: bool
    italic: bool
    underline: bool
    strike: bool
    code: bool
    textColor: str
    backgroundColor: str


class StyledTextDict(TypedDict, total=False):
    type: str  # "text"
    text: str
    styles: TextStylesDict


class LinkDict(TypedDict, total=False):
    type: str  # "link"
    href: str
    content: list[StyledTextDict]


class TableRowDict(TypedDict, total=False):
    cells: list[Any]


class TableContentDict(TypedDict, total=False):
    # BlockNote table blocks carry rows of cells instead of inline content
    type: str  # "tableContent"
    rows: list[TableRowDict]


class BlockDict(TypedDict, total=False):
    id: str
    type: str
    props: dict[str, Any]
    content: list[StyledTextDict | LinkDict | str] | TableContentDict
    children: list[BlockDict]


# One host block node, as a JSON mapping or an attribute-style object
HostNode = BlockDict | HostBlockLike

# Anything the collector accepts as a document
DocumentLike = Sequence[BlockDict] | Mapping[str, Any] | EditorLike
