"""Fixture schemas, one module per revision.

Every revision module defines the same record names; the field sets differ
by exactly one structural change per record (see ``v1``).
"""
from __future__ import annotations

from types import ModuleType
from typing import Dict, List, Type

from . import v0, v1
from .base import Record, SAMPLE_VALUES, sample

REVISIONS: Dict[str, ModuleType] = {"v0": v0, "v1": v1}

# record families present in every revision, in report order
RECORD_NAMES: List[str] = ["GreetingRequest", "Greeting", "Profile", "HelloRequest", "Hello"]


def revision_of(schema: type) -> str:
    for rev, mod in REVISIONS.items():
        if getattr(mod, schema.__name__, None) is schema:
            return rev
    raise ValueError(f"{schema.__name__} is not a fixture schema")


def schema_for(record: str, revision: str) -> Type[Record]:
    try:
        mod = REVISIONS[revision]
    except KeyError:
        raise ValueError(f"Unknown revision: {revision}") from None
    try:
        return getattr(mod, record)
    except AttributeError:
        raise ValueError(f"Unknown record {record!r} in revision {revision}") from None


__all__ = ["REVISIONS", "RECORD_NAMES", "Record", "SAMPLE_VALUES", "revision_of", "sample", "schema_for", "v0", "v1"]
