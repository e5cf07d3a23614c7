from __future__ import annotations

from typing import List, Optional, Sequence


class DecodeError(Exception):
    """Bytes could not be read as the requested schema.

    ``index`` is filled in by callers that decode sequences (the store) so the
    failing entry can be reported.
    """

    kind = "decode"

    def __init__(self, message: str, schema: str | None = None, index: int | None = None):
        super().__init__(message)
        self.message = message
        self.schema = schema
        self.index = index

    def __eq__(self, other):
        if not isinstance(other, DecodeError):
            return NotImplemented
        return (type(self), self.message, self.schema, self.index) == (type(other), other.message, other.schema, other.index)

    def __hash__(self):
        return hash((type(self), self.message, self.schema, self.index))

    def at(self, index: int) -> "DecodeError":
        self.index = index
        return self

    def to_dict(self) -> dict:
        return {"kind": self.kind, "field": None, "schema": self.schema, "detail": self.message}


class MalformedError(DecodeError):
    """The bytes are not an encoded record at all."""

    kind = "malformed"


class MissingFieldError(DecodeError):
    """The bytes are a valid record but lack a field the schema requires."""

    kind = "missing_field"

    def __init__(self, field_name: str, schema: str | None = None, index: int | None = None, missing: Optional[Sequence[str]] = None):
        super().__init__(f"missing required field '{field_name}'" + (f" for {schema}" if schema else ""), schema=schema, index=index)
        self.field_name = field_name
        self.missing: List[str] = list(missing or [field_name])

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["field"] = self.field_name
        return out


class EncodeError(RuntimeError):
    """Serializing a well-formed value failed: a codec contract violation."""


def error_from_dict(data: dict) -> DecodeError:
    """Rebuild a DecodeError from its ``to_dict()`` form (used by the HTTP transport)."""
    kind = data.get("kind")
    schema = data.get("schema")
    if kind == MissingFieldError.kind and data.get("field"):
        return MissingFieldError(data["field"], schema=schema)
    if kind == MalformedError.kind:
        return MalformedError(data.get("detail") or "malformed payload", schema=schema)
    return DecodeError(data.get("detail") or "decode failed", schema=schema)
