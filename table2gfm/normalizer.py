"""
Table normalizer.

When a Word document goes through pandoc, some code blocks come out as a
table whose head holds a single row with a single cell. This module spots
that shape and rewrites the table as a plain GFM "Code" table in a raw
markdown block. Any other table is returned as is.
"""

from typing import Callable, Union

from .nodes import RawBlock, Table
from .stringify import stringify as default_stringify


CODE_TABLE_HEADER = "| Code |"
CODE_TABLE_SEPARATOR = "|------|"
LINE_BREAK = " <br> "
TARGET_FORMAT = "markdown"


def is_code_table(table: Table) -> bool:
    """True when the table head is exactly one row of exactly one cell."""
    if table.head is None:
        return False
    rows = table.head.rows
    return len(rows) == 1 and len(rows[0].cells) == 1


def render_code_table(text: str) -> str:
    """Render cell text as a one-column GFM table headed "Code"."""
    # A GFM table row cannot span lines
    row = "| " + text.replace("\n", LINE_BREAK) + " |"
    return "\n".join([CODE_TABLE_HEADER, CODE_TABLE_SEPARATOR, row])


def normalize_table(
    table: Table,
    stringify: Callable = default_stringify,
) -> Union[Table, RawBlock]:
    """
    Replace a single-cell-head table with a raw markdown code table.

    Args:
        table: The table node handed over by the filter pipeline.
        stringify: Flattens the cell content to text.

    Returns:
        A RawBlock for the target markdown dialect, or `table` itself when
        its shape does not match.
    """
    if not is_code_table(table):
        return table

    cell = table.head.rows[0].cells[0]
    text = ""
    if cell.content is not None:
        text = stringify(cell.content) or ""

    return RawBlock(TARGET_FORMAT, render_code_table(text))


# Callback mapping for FilterPipeline
TABLE_FILTER = {Table: normalize_table}
