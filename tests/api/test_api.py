import json

import pytest
from fastapi.testclient import TestClient

from tickerboard.api.main import create_app
from tickerboard.utils.config import AppConfig, PathsConfig


@pytest.fixture
def client(tmp_path):
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()
    (config_dir / "symbols.json").write_text(
        json.dumps([{"symbol": "ABC", "name": "Abc Corp", "domain": "abc.com"}]), encoding="utf-8"
    )
    (data_dir / "summary.json").write_text(
        json.dumps({"lastUpdated": "2024-03-01T00:00:00.000Z", "symbols": {}}), encoding="utf-8"
    )
    (data_dir / "abc.json").write_text(
        json.dumps({"symbol": "abc", "updatedAt": None, "series": []}), encoding="utf-8"
    )

    config = AppConfig(
        paths=PathsConfig(symbols_file=str(config_dir / "symbols.json"), data_dir=str(data_dir))
    )
    return TestClient(create_app(config))


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_serves_symbol_list(client):
    response = client.get("/config/symbols.json")
    assert response.status_code == 200
    assert response.json()[0]["symbol"] == "ABC"


def test_serves_summary_and_series(client):
    assert client.get("/data/summary.json").json()["lastUpdated"] == "2024-03-01T00:00:00.000Z"
    assert client.get("/data/abc.json").json()["symbol"] == "abc"


def test_missing_series_is_404(client):
    assert client.get("/data/missing.json").status_code == 404
