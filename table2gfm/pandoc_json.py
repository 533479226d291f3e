"""
Reader and writer for pandoc's JSON document format.

This is the format pandoc emits with `-t json` and exchanges with JSON
filters over stdin/stdout. Elements look like {"t": "Tag", "c": payload};
nullary elements omit "c".
"""

import json
from typing import Any

from .nodes import Block, Cell, Document, RawBlock, Row, Table, TableHead


# Tables use the [attr, caption, colspecs, head, bodies, foot] layout
# introduced in pandoc-types 1.21 (pandoc 2.10).
MIN_API_VERSION = [1, 21]


class PandocJSONError(ValueError):
    """Raised when input is not a pandoc JSON document we can read."""
    pass


def loads(text: str) -> Document:
    """Parse a pandoc JSON string into a Document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PandocJSONError(f"Invalid JSON: {e}")
    return decode_document(data)


def load(fp) -> Document:
    return loads(fp.read())


def dumps(doc: Document) -> str:
    """Serialize a Document back to pandoc JSON."""
    return json.dumps(encode_document(doc), ensure_ascii=False, separators=(",", ":"))


def dump(doc: Document, fp) -> None:
    fp.write(dumps(doc))


def decode_document(data: Any) -> Document:
    if not isinstance(data, dict) or "blocks" not in data:
        raise PandocJSONError(
            "Expected a pandoc document object with 'pandoc-api-version', 'meta' and 'blocks'"
        )

    api_version = data.get("pandoc-api-version", [])
    if (
        not isinstance(api_version, list)
        or not all(isinstance(n, int) for n in api_version)
        or api_version[:2] < MIN_API_VERSION
    ):
        raise PandocJSONError(
            f"Unsupported pandoc API version {api_version}; "
            f"need {'.'.join(str(n) for n in MIN_API_VERSION)} or newer"
        )

    blocks = data["blocks"]
    if not isinstance(blocks, list):
        raise PandocJSONError("'blocks' must be a list")

    return Document(
        blocks=decode(blocks),
        meta=decode(data.get("meta", {})),
        api_version=list(api_version),
    )


def encode_document(doc: Document) -> dict:
    return {
        "pandoc-api-version": list(doc.api_version),
        "meta": encode(doc.meta),
        "blocks": encode(doc.blocks),
    }


def decode(value: Any) -> Any:
    """Decode any piece of pandoc JSON, turning elements into nodes."""
    if isinstance(value, list):
        return [decode(item) for item in value]

    if isinstance(value, dict):
        tag = value.get("t")
        if isinstance(tag, str):
            return _decode_element(tag, value)
        return {key: decode(item) for key, item in value.items()}

    return value


def encode(value: Any) -> Any:
    """Inverse of decode()."""
    if isinstance(value, Block):
        if value.content is None:
            return {"t": value.tag}
        return {"t": value.tag, "c": encode(value.content)}

    if isinstance(value, RawBlock):
        return {"t": "RawBlock", "c": [value.format, value.text]}

    if isinstance(value, Table):
        return {"t": "Table", "c": _encode_table(value)}

    if isinstance(value, list):
        return [encode(item) for item in value]

    if isinstance(value, dict):
        return {key: encode(item) for key, item in value.items()}

    return value


def _decode_element(tag: str, value: dict):
    if "c" not in value:
        return Block(tag)

    content = value["c"]

    if tag == "Table":
        return _decode_table(content)

    if tag == "RawBlock":
        if not (isinstance(content, list) and len(content) == 2):
            raise PandocJSONError(f"Malformed RawBlock: {content!r}")
        fmt, text = content
        return RawBlock(format=fmt, text=text)

    return Block(tag, decode(content))


def _decode_table(content) -> Table:
    if not (isinstance(content, list) and len(content) == 6):
        raise PandocJSONError(
            "Malformed Table: expected [attr, caption, colspecs, head, bodies, foot]"
        )

    attr, caption, colspecs, head, bodies, foot = content

    if not (isinstance(head, list) and len(head) == 2):
        raise PandocJSONError(f"Malformed TableHead: {head!r}")
    head_attr, head_rows = head
    if not isinstance(head_rows, list):
        raise PandocJSONError(f"Malformed TableHead rows: {head_rows!r}")
    if not (isinstance(bodies, list) and all(_is_table_body(b) for b in bodies)):
        raise PandocJSONError(f"Malformed TableBody list: {bodies!r}")

    return Table(
        head=TableHead(rows=[_decode_row(r) for r in head_rows], attr=head_attr),
        attr=attr,
        caption=decode(caption),
        colspecs=decode(colspecs),
        bodies=decode(bodies),
        foot=decode(foot),
    )


def _decode_row(row) -> Row:
    if not (isinstance(row, list) and len(row) == 2):
        raise PandocJSONError(f"Malformed Row: {row!r}")
    attr, cells = row
    if not isinstance(cells, list):
        raise PandocJSONError(f"Malformed Row cells: {cells!r}")
    return Row(cells=[_decode_cell(c) for c in cells], attr=attr)


def _is_table_body(body) -> bool:
    # [attr, row_head_columns, [head rows], [body rows]]
    return (
        isinstance(body, list)
        and len(body) == 4
        and isinstance(body[2], list)
        and isinstance(body[3], list)
    )


def _decode_cell(cell) -> Cell:
    if not (isinstance(cell, list) and len(cell) == 5):
        raise PandocJSONError(f"Malformed Cell: {cell!r}")
    attr, alignment, row_span, col_span, blocks = cell
    return Cell(
        content=decode(blocks),
        attr=attr,
        alignment=alignment.get("t", "AlignDefault") if isinstance(alignment, dict) else "AlignDefault",
        row_span=row_span,
        col_span=col_span,
    )


def _encode_table(table: Table) -> list:
    if table.head is None:
        head = [["", [], []], []]
    else:
        head = [table.head.attr, [_encode_row(r) for r in table.head.rows]]

    return [
        table.attr,
        encode(table.caption),
        encode(table.colspecs),
        head,
        encode(table.bodies),
        encode(table.foot),
    ]


def _encode_row(row: Row) -> list:
    return [row.attr, [_encode_cell(c) for c in row.cells]]


def _encode_cell(cell: Cell) -> list:
    return [
        cell.attr,
        {"t": cell.alignment},
        cell.row_span,
        cell.col_span,
        encode(cell.content or []),
    ]
