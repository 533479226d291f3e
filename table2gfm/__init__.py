"""
table2gfm - Code Table Filter for Document-to-GFM Conversion

Word documents converted with pandoc sometimes carry code blocks as a
table with a single header cell. table2gfm rewrites those tables as clean
one-column GFM tables, either as a pandoc JSON filter or through its own
conversion driver.
"""

from .nodes import Block, Cell, Document, RawBlock, Row, Table, TableHead
from .normalizer import normalize_table, is_code_table, render_code_table
from .pipeline import FilterPipeline
from .stringify import stringify

__version__ = "1.0.0"

__all__ = [
    "Block",
    "Cell",
    "Document",
    "RawBlock",
    "Row",
    "Table",
    "TableHead",
    "normalize_table",
    "is_code_table",
    "render_code_table",
    "FilterPipeline",
    "stringify",
]
