"""
Pytest configuration and shared fixtures.
"""

import shutil
import sys
from pathlib import Path

import pytest

# Make the package and the fixtures importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from table2gfm.nodes import Block, Cell, Row, Table, TableHead


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")
    config.addinivalue_line("markers", "pandoc: mark as requiring the pandoc executable")


def pytest_collection_modifyitems(config, items):
    """Skip pandoc-marked tests when pandoc is not installed."""
    if shutil.which("pandoc"):
        return
    skip = pytest.mark.skip(reason="pandoc executable not found on PATH")
    for item in items:
        if "pandoc" in item.keywords:
            item.add_marker(skip)


# ============================================================================
# Node Fixtures
# ============================================================================


def text_blocks(text):
    """One Plain block of Str/Space inlines per line of text."""
    blocks = []
    for line in text.split("\n"):
        words = []
        for i, word in enumerate(line.split(" ")):
            if i:
                words.append(Block("Space"))
            if word:
                words.append(Block("Str", word))
        blocks.append(Block("Plain", words))
    return blocks


@pytest.fixture
def make_table():
    """
    Factory for Table nodes.

    Pass a list of head rows, each a list of cell texts. Use head=None for a
    table without a head section.
    """
    def _make(head=(), body=(), no_head=False):
        table_head = None
        if not no_head:
            table_head = TableHead(
                rows=[Row(cells=[Cell(content=text_blocks(t)) for t in r]) for r in head]
            )
        bodies = []
        if body:
            bodies = [[["", [], []], 0, [], [
                [["", [], []], [[["", [], []], Block("AlignDefault"), 1, 1, text_blocks(t)] for t in r]]
                for r in body
            ]]]
        return Table(head=table_head, bodies=bodies)

    return _make


@pytest.fixture
def code_table(make_table):
    """A table whose head is one row of one cell."""
    return make_table(head=[["print('hi')"]])


@pytest.fixture
def fake_stringify():
    """Stringify stub that returns whatever text was stashed on the cell content."""
    def _stringify(content):
        return content[0]
    return _stringify
