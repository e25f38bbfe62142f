"""
tests/api/conftest.py

Shared fixtures and payload builders for API route tests.

The `client` fixture yields a TestClient inside a context manager so the
app lifespan runs for the full duration of each test, and clears any
dependency_overrides on exit so a test that injects its own GraphBuilder
through get_builder never leaks it into the next one.
"""
from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from graphmapper.main import app


@pytest.fixture()
def client() -> TestClient:  # type: ignore[return]
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c

    app.dependency_overrides.clear()


def dataset_payload(
    nodes: list[str],
    edges: list[tuple[str, str]],
    node_type: str = "node",
) -> dict[str, Any]:
    """JSON body fragment for a dataset with ``"<s>-><t>"`` edge ids."""
    return {
        "entities": [
            {"id": n, "type": node_type, "label": n.upper(), "metadata": {}}
            for n in nodes
        ],
        "relationships": [
            {"id": f"{s}->{t}", "source": s, "target": t, "type": "link", "metadata": {}}
            for s, t in edges
        ],
    }
