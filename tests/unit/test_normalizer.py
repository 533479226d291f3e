"""
Unit tests for the table normalizer.
"""

import pytest

from table2gfm.nodes import Cell, RawBlock, Row, Table, TableHead
from table2gfm.normalizer import (
    TABLE_FILTER,
    is_code_table,
    normalize_table,
    render_code_table,
)


def single_cell_table(content):
    """Table with a one-row, one-cell head holding `content` verbatim."""
    return Table(head=TableHead(rows=[Row(cells=[Cell(content=content)])]))


class TestIsCodeTable:
    """Tests for the shape check."""

    def test_single_row_single_cell(self, code_table):
        assert is_code_table(code_table) is True

    def test_no_head(self, make_table):
        assert is_code_table(make_table(no_head=True, body=[["x"]])) is False

    def test_empty_head(self, make_table):
        assert is_code_table(make_table(head=[])) is False

    def test_two_head_rows(self, make_table):
        assert is_code_table(make_table(head=[["a"], ["b"]])) is False

    def test_two_cells(self, make_table):
        assert is_code_table(make_table(head=[["a", "b"]])) is False

    def test_row_without_cells(self):
        table = Table(head=TableHead(rows=[Row(cells=[])]))
        assert is_code_table(table) is False

    def test_body_rows_do_not_matter(self, make_table):
        table = make_table(head=[["a"]], body=[["b", "c"], ["d", "e"]])
        assert is_code_table(table) is True


class TestRenderCodeTable:
    """Tests for the GFM rendering."""

    def test_single_line(self):
        assert render_code_table("ls -la") == "| Code |\n|------|\n| ls -la |"

    def test_newlines_become_br(self):
        assert render_code_table("a\nb") == "| Code |\n|------|\n| a <br> b |"

    def test_no_newline_remains_in_row(self):
        rendered = render_code_table("one\ntwo\n\nthree\n")
        row = rendered.split("\n")[2]
        assert rendered.count("\n") == 2
        assert row == "| one <br> two <br>  <br> three <br>  |"

    def test_no_trailing_newline(self):
        assert not render_code_table("x").endswith("\n")


class TestNormalizeTable:
    """Tests for normalize_table."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("print('hi')", "| Code |\n|------|\n| print('hi') |"),
            ("line1\nline2", "| Code |\n|------|\n| line1 <br> line2 |"),
            ("", "| Code |\n|------|\n|  |"),
            ("a\nb\nc", "| Code |\n|------|\n| a <br> b <br> c |"),
        ],
    )
    def test_code_table_scenarios(self, text, expected, fake_stringify):
        """Qualifying tables become a raw markdown block."""
        result = normalize_table(single_cell_table([text]), stringify=fake_stringify)

        assert isinstance(result, RawBlock)
        assert result.format == "markdown"
        assert result.text == expected

    def test_default_stringify(self, code_table):
        result = normalize_table(code_table)
        assert result == RawBlock("markdown", "| Code |\n|------|\n| print('hi') |")

    def test_default_stringify_multiline(self, make_table):
        result = normalize_table(make_table(head=[["line1\nline2"]]))
        assert result.text == "| Code |\n|------|\n| line1 <br> line2 |"

    def test_two_cells_pass_through(self, make_table):
        table = make_table(head=[["a", "b"]])
        assert normalize_table(table) is table

    def test_no_head_pass_through(self, make_table):
        table = make_table(no_head=True, body=[["only body"]])
        assert normalize_table(table) is table

    def test_multiple_head_rows_pass_through(self, make_table):
        table = make_table(head=[["a"], ["b"]])
        assert normalize_table(table) is table

    def test_pass_through_leaves_table_untouched(self, make_table):
        table = make_table(head=[["a", "b"]], body=[["c", "d"]])
        before = repr(table)
        normalize_table(table)
        assert repr(table) == before

    def test_missing_content_is_empty(self):
        result = normalize_table(single_cell_table(None))
        assert result.text == "| Code |\n|------|\n|  |"

    def test_stringify_not_called_without_content(self):
        def exploding(content):
            raise AssertionError("stringify should not be called")

        result = normalize_table(single_cell_table(None), stringify=exploding)
        assert result.text.endswith("|  |")

    def test_stringify_returning_none(self):
        result = normalize_table(single_cell_table([]), stringify=lambda content: None)
        assert result.text == "| Code |\n|------|\n|  |"

    def test_stringify_receives_cell_content(self):
        seen = []
        content = ["sentinel"]

        def recording(value):
            seen.append(value)
            return "x"

        normalize_table(single_cell_table(content), stringify=recording)
        assert seen == [content]

    def test_table_filter_mapping(self):
        assert TABLE_FILTER == {Table: normalize_table}
