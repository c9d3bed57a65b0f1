import os
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
SRC_DIR = TESTS_DIR.parent / "src"

for path in (SRC_DIR, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import fakes  # noqa: E402
from sqlbridge.constants import ENV_PREFIX  # noqa: E402
from sqlbridge.logging import clear_logging_context  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CDATA_* variables of the host out of every test."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    yield
    clear_logging_context()


@pytest.fixture
def engine(monkeypatch):
    """A fresh fake engine shared by every FakeConnector connection."""
    fake_engine = fakes.FakeEngine()
    monkeypatch.setattr(fakes, "ENGINE", fake_engine)
    return fake_engine
