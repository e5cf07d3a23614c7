"""The first revision of the record schemas."""
from __future__ import annotations

from pydantic import Field

from .base import Record

REVISION = "v0"


class GreetingRequest(Record):
    name: str


class Greeting(Record):
    name: str
    greeting: str


class Profile(Record):
    name: str
    favorite_thing: str


class HelloRequest(Record):
    name: str


class Hello(Record):
    greeting: str = Field(..., description="Text shown to the caller")
