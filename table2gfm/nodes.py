"""
Document tree nodes for a converted document.

Only the pandoc elements the table filter needs to look at get their own
class. Everything else is carried as a generic Block so it survives the
round trip untouched.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


# Pandoc attributes: [identifier, [classes], [[key, value], ...]]
EMPTY_ATTR = ["", [], []]


@dataclass
class Block:
    """
    Any pandoc element without a dedicated class, block or inline.

    `content` holds the element's "c" payload with nested elements already
    decoded into nodes. Nullary elements (Space, SoftBreak, ...) have no
    payload and keep `content` as None.
    """
    tag: str
    content: Any = None


@dataclass
class RawBlock:
    """Pre-rendered output text, passed through verbatim by the writer."""
    format: str  # e.g. "markdown", "html"
    text: str


@dataclass
class Cell:
    """A table cell with its nested block content."""
    content: Optional[list] = None
    attr: list = field(default_factory=lambda: list(EMPTY_ATTR))
    alignment: str = "AlignDefault"
    row_span: int = 1
    col_span: int = 1


@dataclass
class Row:
    cells: list[Cell] = field(default_factory=list)
    attr: list = field(default_factory=lambda: list(EMPTY_ATTR))


@dataclass
class TableHead:
    rows: list[Row] = field(default_factory=list)
    attr: list = field(default_factory=lambda: list(EMPTY_ATTR))


@dataclass
class Table:
    """
    A table node.

    Only the head is modelled in detail. Caption, column specs, bodies and
    foot are kept as decoded pandoc payloads so the table can be written
    back exactly as it was read.
    """
    head: Optional[TableHead] = None
    attr: list = field(default_factory=lambda: list(EMPTY_ATTR))
    caption: Any = field(default_factory=lambda: [None, []])
    colspecs: list = field(default_factory=list)
    bodies: list = field(default_factory=list)
    foot: Any = field(default_factory=lambda: [list(EMPTY_ATTR), []])


@dataclass
class Document:
    """Root of one converted document."""
    blocks: list = field(default_factory=list)
    meta: dict = field(default_factory=dict)
    api_version: list[int] = field(default_factory=lambda: [1, 23, 1])
