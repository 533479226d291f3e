"""
Flatten nested document content to plain text.

Mirrors what pandoc offers its own filters as `stringify`, except that hard
line breaks and the lines of code blocks keep their newlines. The table
filter depends on those newlines to know where the original lines ended.
"""

from typing import Any

from .nodes import Block, Cell, RawBlock, Row, Table, TableHead


# Elements whose payload is [attr?, text] and contribute the text verbatim
_TEXT_PAYLOAD = {"Code", "Math", "RawInline", "CodeBlock"}

_BLOCK_TAGS = {
    "Plain", "Para", "LineBlock", "CodeBlock", "RawBlock", "BlockQuote",
    "OrderedList", "BulletList", "DefinitionList", "Header", "HorizontalRule",
    "Table", "Figure", "Div",
}

_QUOTES = {
    "DoubleQuote": ("\u201c", "\u201d"),
    "SingleQuote": ("\u2018", "\u2019"),
}


def stringify(content: Any) -> str:
    """
    Return the plain text of `content`.

    Accepts a single node or a list of nodes. Sibling blocks are separated
    by a newline; inlines are concatenated. None gives "".
    """
    if content is None:
        return ""

    if isinstance(content, list):
        parts = [stringify(item) for item in content]
        if any(_is_block(item) for item in content):
            return "\n".join(parts)
        return "".join(parts)

    if isinstance(content, str):
        return content

    if isinstance(content, RawBlock):
        return content.text

    if isinstance(content, Table):
        rows = list(content.head.rows) if content.head else []
        rows.extend(_body_rows(content.bodies))
        return "\n".join(stringify(r) for r in rows)

    if isinstance(content, TableHead):
        return stringify(content.rows)

    if isinstance(content, Row):
        return " ".join(stringify(c) for c in content.cells)

    if isinstance(content, Cell):
        return stringify(content.content)

    if isinstance(content, Block):
        return _stringify_element(content)

    return ""


def _stringify_element(el: Block) -> str:
    tag = el.tag

    if tag == "Str":
        return el.content
    if tag in ("Space", "SoftBreak"):
        return " "
    if tag == "LineBreak":
        return "\n"
    if tag == "Note":
        return ""
    if tag in _TEXT_PAYLOAD:
        return el.content[-1]
    if tag == "Quoted":
        open_quote, close_quote = _QUOTES.get(el.content[0].tag, ("", ""))
        return open_quote + stringify(el.content[1]) + close_quote
    if tag in ("Header", "Link", "Image", "Span", "Div", "Cite"):
        # Attr, targets and other non-content fields come first; skip them
        return stringify(el.content[-1] if tag not in ("Link", "Image") else el.content[1])
    if tag == "OrderedList":
        return "\n".join(stringify(item) for item in el.content[1])
    if tag in ("BulletList", "LineBlock"):
        return "\n".join(stringify(item) for item in el.content)

    groups = _child_groups(el.content)
    separator = "\n" if any(_is_block(n) for group in groups for n in group) else ""
    return separator.join(stringify(group) for group in groups)


def _child_groups(content: Any) -> list[list]:
    """
    Collect the node lists in an arbitrary payload, skipping plain data.

    Each inline run or block list stays its own group, so a term and its
    definition are not merged into one list.
    """
    if _is_node(content):
        return [[content]]
    if not isinstance(content, list):
        return []
    if any(_is_node(item) for item in content):
        return [[item for item in content if _is_node(item)]]
    groups = []
    for item in content:
        groups.extend(_child_groups(item))
    return groups


def _is_node(item: Any) -> bool:
    return isinstance(item, (Block, RawBlock, Table))


def _is_block(item: Any) -> bool:
    if isinstance(item, (RawBlock, Table)):
        return True
    return isinstance(item, Block) and item.tag in _BLOCK_TAGS


def _body_rows(bodies: list) -> list[Row]:
    # Body payload: [attr, row_head_columns, [head rows], [body rows]]
    rows = []
    for body in bodies:
        for attr, cells in body[2] + body[3]:
            rows.append(Row(cells=[Cell(content=c[4]) for c in cells], attr=attr))
    return rows
