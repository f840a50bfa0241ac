"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.tarokka import get_reader
from src.core.tarokka import TarokkaReader
from src.main import app

TAROKKA_DATA_DIR = Path("src/data/tarokka")
DECK_PATH = TAROKKA_DATA_DIR / "tarokka_deck.json"
CONFIG_PATH = TAROKKA_DATA_DIR / "reading_config.json"


def _read_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture()
def deck_data() -> dict:
    """Raw deck data (fresh copy per test, safe to mutate)."""
    return _read_json(DECK_PATH)


@pytest.fixture()
def config_data() -> dict:
    """Raw reading config data (fresh copy per test, safe to mutate)."""
    return _read_json(CONFIG_PATH)


@pytest.fixture()
def reader() -> TarokkaReader:
    """TarokkaReader backed by the bundled data files."""
    return TarokkaReader(TAROKKA_DATA_DIR)


@pytest.fixture()
def client(reader: TarokkaReader) -> TestClient:
    """FastAPI TestClient wired to the bundled-data reader."""
    app.dependency_overrides[get_reader] = lambda: reader
    yield TestClient(app)
    app.dependency_overrides.clear()
