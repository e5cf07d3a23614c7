"""The updated revision of the record schemas.

Each record differs from v0 by one structural change:

- GreetingRequest adds a required field (backward compatible only)
- Greeting removes a required field (forward compatible only)
- Profile renames favorite_thing by removing it and adding favorite_band
- HelloRequest adds a field with a default
- Hello adds a required field that old clients ignore
"""
from __future__ import annotations

from pydantic import Field

from .base import Record

REVISION = "v1"


class GreetingRequest(Record):
    name: str
    favorite_song: str


class Greeting(Record):
    greeting: str


class Profile(Record):
    name: str
    favorite_band: str


class HelloRequest(Record):
    name: str
    locale: str = "en"


class Hello(Record):
    greeting: str = Field(..., description="Text shown to the caller")
    served_by: str
