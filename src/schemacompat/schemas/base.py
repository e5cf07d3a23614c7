from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict

R = TypeVar("R", bound="Record")


class Record(BaseModel):
    """Base for every fixture schema revision.

    Fixtures are immutable for the duration of a scenario. ``extra="ignore"``
    is pydantic's default but is spelled out: the compatibility rules depend
    on unknown fields being dropped on decode.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


# deterministic fill values for sample(); unknown field names get "<field>-value"
SAMPLE_VALUES: Dict[str, str] = {
    "name": "Greg",
    "greeting": "Hi greg",
    "favorite_thing": "Rust",
    "favorite_song": "Never gonna give you up",
    "favorite_band": "Rick Astley",
    "locale": "en",
    "served_by": "greeter-v1",
}


def sample(schema: Type[R], **overrides: Any) -> R:
    values = {}
    for name in schema.model_fields:
        values[name] = overrides.pop(name, SAMPLE_VALUES.get(name, f"{name}-value"))
    if overrides:
        raise ValueError(f"{schema.__name__} has no fields {sorted(overrides)}")
    return schema(**values)
