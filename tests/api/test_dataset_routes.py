"""
tests/api/test_dataset_routes.py

HTTP-level tests for the dataset construction routes.

POST /datasets/build
POST /datasets/unique-values
GET  /health

Coverage
--------
  GET  /health                  → 200 with app name and version
  POST /datasets/build          → 200 with entities, relationships, report
  POST /datasets/build          → duplicate rows deduplicated (first wins)
  POST /datasets/build          → dangling relationship dropped, counted
  POST /datasets/build          → type_colors for every class
  POST /datasets/build          → 422 when mapping is missing
  POST /datasets/build          → 422 when a class has no id
  POST /datasets/unique-values  → distinct values in order
  POST /datasets/unique-values  → numeric values rendered like entity ids
  get_builder override          → injected palette supplies type colors
"""
from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

from graphmapper.api.routes import get_builder
from graphmapper.graph.builder import GraphBuilder
from graphmapper.graph.palette import ColorPalette
from graphmapper.main import app


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raw(rows: list[dict[str, Any]]) -> dict[str, Any]:
    columns = sorted({key for row in rows for key in row})
    return {"columns": columns, "rows": rows}


def _class(
    class_id: str,
    source_column: str,
    label_column: str,
    color: str | None = None,
) -> dict[str, Any]:
    return {
        "id": class_id,
        "name": class_id.title(),
        "source_column": source_column,
        "label_column": label_column,
        "metadata_columns": [],
        "color": color,
    }


def _table_rows() -> list[dict[str, Any]]:
    return [
        {"table_id": "orders", "table": "Orders", "column_id": "order_id", "column": "Order ID"},
        {"table_id": "orders", "table": "Orders", "column_id": "amount", "column": "Amount"},
        {"table_id": "users", "table": "Users", "column_id": "user_id", "column": "User ID"},
    ]


def _table_mapping() -> dict[str, Any]:
    return {
        "classes": [
            _class("table", "table_id", "table", color="#2ECC71"),
            _class("column", "column_id", "column"),
        ],
        "relationships": [
            {
                "id": "has_column",
                "name": "Has Column",
                "source_class": "table",
                "target_class": "column",
                "source_column": "table_id",
                "target_column": "column_id",
                "metadata_columns": [],
            }
        ],
    }


# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------

class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["app"] == "GraphMapper"
        assert "version" in data


# ---------------------------------------------------------------------------
# POST /datasets/build
# ---------------------------------------------------------------------------

class TestBuildRoute:
    def test_build_returns_dataset(self, client: TestClient) -> None:
        response = client.post(
            "/datasets/build",
            json={"raw_data": _raw(_table_rows()), "mapping": _table_mapping()},
        )

        assert response.status_code == 200
        data = response.json()
        entity_ids = [e["id"] for e in data["dataset"]["entities"]]
        assert entity_ids == [
            "table:orders",
            "table:users",
            "column:order_id",
            "column:amount",
            "column:user_id",
        ]
        rel_ids = [r["id"] for r in data["dataset"]["relationships"]]
        assert rel_ids == [
            "has_column:orders-order_id",
            "has_column:orders-amount",
            "has_column:users-user_id",
        ]
        assert data["report"]["entities_created"] == 5
        assert data["report"]["relationships_created"] == 3

    def test_duplicate_rows_first_wins(self, client: TestClient) -> None:
        rows = [{"id": "e1", "name": "Alice"}, {"id": "e1", "name": "Alice2"}]
        mapping = {"classes": [_class("class", "id", "name")], "relationships": []}

        response = client.post("/datasets/build", json={"raw_data": _raw(rows), "mapping": mapping})

        assert response.status_code == 200
        entities = response.json()["dataset"]["entities"]
        assert len(entities) == 1
        assert entities[0]["id"] == "class:e1"
        assert entities[0]["label"] == "Alice"
        assert response.json()["report"]["skipped"] == {"duplicate_entity": 1}

    def test_dangling_relationship_dropped(self, client: TestClient) -> None:
        rows = _table_rows() + [{"table_id": "orders", "column_id": None, "ref": "ghost"}]
        mapping = _table_mapping()
        mapping["relationships"].append({
            "id": "refers",
            "name": "Refers",
            "source_class": "table",
            "target_class": "column",
            "source_column": "table_id",
            "target_column": "ref",
            "metadata_columns": [],
        })

        response = client.post("/datasets/build", json={"raw_data": _raw(rows), "mapping": mapping})

        assert response.status_code == 200
        data = response.json()
        assert all(not r["id"].startswith("refers:") for r in data["dataset"]["relationships"])
        assert data["report"]["skipped"]["unknown_entity"] == 1

    def test_type_colors(self, client: TestClient) -> None:
        response = client.post(
            "/datasets/build",
            json={"raw_data": _raw(_table_rows()), "mapping": _table_mapping()},
        )
        colors = response.json()["type_colors"]
        assert colors["table"] == "#2ECC71"
        assert colors["column"] == "#E74C3C"

    def test_missing_mapping_returns_422(self, client: TestClient) -> None:
        response = client.post("/datasets/build", json={"raw_data": _raw(_table_rows())})
        assert response.status_code == 422

    def test_class_without_id_returns_422(self, client: TestClient) -> None:
        mapping = {"classes": [_class("", "id", "name")], "relationships": []}
        response = client.post(
            "/datasets/build",
            json={"raw_data": _raw([{"id": "x"}]), "mapping": mapping},
        )
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# POST /datasets/unique-values
# ---------------------------------------------------------------------------

class TestUniqueValuesRoute:
    def test_unique_values(self, client: TestClient) -> None:
        response = client.post(
            "/datasets/unique-values",
            json={"raw_data": _raw(_table_rows()), "column": "table_id"},
        )
        assert response.status_code == 200
        assert response.json() == {"column": "table_id", "values": ["orders", "users"]}

    def test_numeric_values_match_entity_ids(self, client: TestClient) -> None:
        rows = [{"id": 1.0}, {"id": True}, {"id": 1}]
        mapping = {"classes": [_class("n", "id", "id")], "relationships": []}

        values = client.post(
            "/datasets/unique-values", json={"raw_data": _raw(rows), "column": "id"}
        ).json()["values"]
        built = client.post(
            "/datasets/build", json={"raw_data": _raw(rows), "mapping": mapping}
        ).json()["dataset"]["entities"]

        assert values == ["1", "true"]
        assert [e["id"] for e in built] == ["n:1", "n:true"]


# ---------------------------------------------------------------------------
# Builder dependency
# ---------------------------------------------------------------------------

class TestBuilderDependency:
    def test_injected_palette_colors_used(self, client: TestClient) -> None:
        palette = ColorPalette(seed={"column": "#0A0B0C"})
        app.dependency_overrides[get_builder] = lambda: GraphBuilder(palette)

        response = client.post(
            "/datasets/build",
            json={"raw_data": _raw(_table_rows()), "mapping": _table_mapping()},
        )

        assert response.status_code == 200
        colors = response.json()["type_colors"]
        assert colors["column"] == "#0A0B0C"
        assert colors["table"] == "#2ECC71"
        assert palette.as_dict()["table"] == "#2ECC71"
