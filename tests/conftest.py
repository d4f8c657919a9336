"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


HEADER_BLOCK_DUMP = """\
Apache Commons IO (45)
----------------------
Bundle-Name = Apache Commons IO
Bundle-Version = 2.4.0
Export-Package = org.apache.commons.io;version="2.4.0",org.apache.commons.io.input;version="2.4.0"

Fragments attached: none
Cytoscape API (51)
------------------
Bundle-Name = Cytoscape API
Export-Package = org.cytoscape.model;version="3.6.0",com.example.shared;version="1.0.0"

Example Legacy (60)
-------------------
Bundle-Name = Example Legacy
Export-Package = com.example.legacy;version="1.2.0",com.example.internal;version="0.0.0"
"""

TABULAR_DUMP = """\
Package                   │ Version │ Optional │ Bundle
──────────────────────────┼─────────┼──────────┼────────────────────────
org.apache.commons.io     │ 2.6.0   │          │ Apache Commons IO (45)
org.apache.commons.io.input │ 3.0.0 │          │ Apache Commons IO (45)
com.example.shared        │ 1.0.0   │          │ Cytoscape API (51)
truncated row | 1.0.0
"""


@pytest.fixture
async def client():
    """Async test client fixture."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def header_block_dump() -> str:
    """Header-block dump with three bundles."""
    return HEADER_BLOCK_DUMP


@pytest.fixture
def tabular_dump() -> str:
    """Tabular dump with one short row."""
    return TABULAR_DUMP
