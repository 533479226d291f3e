# Test fixtures
from .sample_documents import (
    API_VERSION,
    SETUP_GUIDE_DOC,
    SETUP_GUIDE_JSON,
    EXPECTED_SETUP_CODE_TABLE,
    PIPE_CODE_TABLE_MD,
    attr,
    inlines,
    plain,
    para,
    code_block,
    table,
    document,
)

__all__ = [
    "API_VERSION",
    "SETUP_GUIDE_DOC",
    "SETUP_GUIDE_JSON",
    "EXPECTED_SETUP_CODE_TABLE",
    "PIPE_CODE_TABLE_MD",
    "attr",
    "inlines",
    "plain",
    "para",
    "code_block",
    "table",
    "document",
]
