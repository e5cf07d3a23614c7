import os
from typing import Callable

import pytest

# tests/conftest.py

# Keep test runs from writing log files and pin the codec unless a test overrides it
os.environ.setdefault("SCHEMACOMPAT_LOG_DIR", "")
os.environ.setdefault("SCHEMACOMPAT_CODEC", "json")

from schemacompat.codec import DefaultingJsonCodec, JsonCodec, encode
from schemacompat.config import reset_settings
from schemacompat.store import SchemalessStore


@pytest.fixture
def strict_codec() -> JsonCodec:
    return JsonCodec()


@pytest.fixture
def defaulting_codec() -> DefaultingJsonCodec:
    return DefaultingJsonCodec()


@pytest.fixture
def store(strict_codec) -> SchemalessStore:
    """Empty store using the strict codec."""
    return SchemalessStore(codec=strict_codec)


@pytest.fixture
def encoded(strict_codec) -> Callable:
    """Return a helper that encodes a value with the strict codec."""
    def _encode(value) -> bytes:
        return encode(value, strict_codec)
    return _encode


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    """
    Make every test start from the environment defaults above. Tests that
    monkeypatch SCHEMACOMPAT_* get a fresh Settings object on next access.
    """
    monkeypatch.setenv("SCHEMACOMPAT_CODEC", os.environ.get("SCHEMACOMPAT_CODEC", "json"))
    reset_settings()
    yield
    reset_settings()
