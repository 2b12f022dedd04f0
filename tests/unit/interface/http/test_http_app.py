from __future__ import annotations

"""
Unit tests for the HTTP Exposure Layer.

Drives the Flask application through its test client: structure endpoint,
static file mount, error mapping and CORS headers.
"""

from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

import pytest
from flask.testing import FlaskClient

from brdatakit.interface.http.app import create_app


@pytest.fixture
def client(app_config: Dict[str, Any]) -> FlaskClient:
    app = create_app(app_config)
    app.testing = True
    return app.test_client()


def test_structure_endpoint_returns_legacy_format(client: FlaskClient) -> None:
    response = client.get("/api/br-data-structure")

    assert response.status_code == 200
    body = response.get_json()
    assert sorted(body["files"]) == ["battle_1.json", "battle_2.json"]
    assert body["season_2"]["files"] == ["round_1.json"]
    assert body["season_2"]["empty"] == {}


def test_structure_endpoint_tagged_format(client: FlaskClient) -> None:
    response = client.get("/api/br-data-structure?format=tagged")

    body = response.get_json()
    assert body["kind"] == "directory"
    assert body["children"]["season_2"]["files"] == ["round_1.json"]


def test_structure_endpoint_reflects_changes_between_requests(
        client: FlaskClient, data_dir: Path) -> None:
    client.get("/api/br-data-structure")
    (data_dir / "battle_3.json").write_text("{}", encoding="utf-8")

    body = client.get("/api/br-data-structure").get_json()

    assert "battle_3.json" in body["files"]


def test_missing_data_dir_returns_empty_object(app_config: Dict[str, Any], tmp_path: Path) -> None:
    app = create_app(dict(app_config, data_dir=str(tmp_path / "missing")))

    response = app.test_client().get("/api/br-data-structure")

    assert response.status_code == 200
    assert response.get_json() == {}


def test_reader_failure_maps_to_500(client: FlaskClient) -> None:
    with patch("brdatakit.interface.http.app.read_data_structure",
               side_effect=PermissionError("denied")):
        response = client.get("/api/br-data-structure")

    assert response.status_code == 500
    assert response.get_json() == {"error": "denied"}


def test_static_mount_serves_json(client: FlaskClient) -> None:
    response = client.get("/BR_Data/season_2/round_1.json")

    assert response.status_code == 200
    assert response.mimetype == "application/json"
    assert response.get_json() == [1, 2, 3]
    response.close()


def test_static_mount_missing_file_is_404(client: FlaskClient) -> None:
    assert client.get("/BR_Data/nope.json").status_code == 404


def test_static_mount_refuses_traversal(client: FlaskClient) -> None:
    response = client.get("/BR_Data/../public/secret.json")

    assert response.status_code == 404


def test_custom_routes(app_config: Dict[str, Any]) -> None:
    app = create_app(dict(app_config, structure_endpoint="toc", data_mount="data"))
    c = app.test_client()

    assert c.get("/api/toc").status_code == 200
    assert c.get("/data/battle_1.json").status_code == 200
    assert c.get("/api/br-data-structure").status_code == 404


def test_cors_header_present(client: FlaskClient) -> None:
    response = client.get("/api/br-data-structure", headers={"Origin": "http://localhost:5173"})

    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:5173")


def test_health(client: FlaskClient) -> None:
    assert client.get("/api/health").get_json() == {"ok": True}
