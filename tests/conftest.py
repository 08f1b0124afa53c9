import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from undercroft.dungeon import Level  # noqa: E402
from undercroft.models import CreatureRoster  # noqa: E402
from undercroft.rng import UniformSource  # noqa: E402

from dungeon_test_utils import encode_mask  # noqa: E402

_ENV_KEYS = (
    "UNDERCROFT_LEVEL_COUNT",
    "UNDERCROFT_STATIC_LEVEL",
    "UNDERCROFT_SEED",
    "UNDERCROFT_PLACEMENT_ATTEMPTS",
    "UNDERCROFT_LOG_LEVEL",
    "UNDERCROFT_LOG_JSON",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def rng():
    return UniformSource(1234)


@pytest.fixture()
def roster():
    return CreatureRoster()


@pytest.fixture()
def open_level():
    """Full-size level with every tile EMPTY."""
    return Level()


@pytest.fixture()
def mask_file(tmp_path):
    """Write a static level file from text rows and return its path."""

    def _write(rows=(), name="level1"):
        path = tmp_path / name
        path.write_bytes(encode_mask(list(rows)))
        return path

    return _write
