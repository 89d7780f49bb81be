from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reference_values_api.app.core.config import Settings  # noqa: E402
from reference_values_api.app.main import create_app  # noqa: E402

TOKEN = "25111769"
OTHER_TOKEN = "second-token"

GOLD = {
    "id": "g1",
    "name": "Gold",
    "reference": 1900.5,
    "description": "Troy ounce",
    "image_url": "https://example.com/gold.png",
}
SILVER = {
    "id": "s1",
    "name": "Silver",
    "reference": 24.1,
    "description": "Troy ounce",
    "image_url": "https://example.com/silver.png",
}


@pytest.fixture()
def data_file(tmp_path):
    """A backing file holding two reference values."""
    path = tmp_path / "reference_values.json"
    path.write_text(json.dumps([GOLD, SILVER]), encoding="utf-8")
    return path


@pytest.fixture()
def settings(data_file):
    return Settings(data_file=str(data_file), api_tokens=f"{TOKEN}, {OTHER_TOKEN}")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    """Authorized client; entering the context loads the data file."""
    with TestClient(app) as c:
        c.headers["Authorization"] = TOKEN
        yield c
