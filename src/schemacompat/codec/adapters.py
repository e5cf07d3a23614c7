from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from schemacompat.codec.errors import DecodeError, EncodeError, MalformedError, MissingFieldError
from schemacompat.config import get_settings
from schemacompat.utils.logger_util import get_logger
logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class CodecPolicy(str, Enum):
    """How a codec treats fields that differ between writer and reader.

    Both policies ignore unknown fields. They differ on absent fields:
    STRICT fails, DEFAULTING fills in the schema default (or a zero value).
    """

    STRICT = "strict"
    DEFAULTING = "defaulting"


class Codec(Protocol):
    """Pluggable encode/decode pair.

    Implementations turn a pydantic model into bytes and back, raising
    DecodeError subclasses (never ValidationError) on the way in.
    """

    name: str
    policy: CodecPolicy

    def encode(self, value: BaseModel) -> bytes:
        ...

    def decode(self, schema: Type[M], data: bytes) -> M:
        ...


@dataclass
class DecodeResult(Generic[M]):
    value: Optional[M] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def schema_label(schema: type) -> str:
    """Revision-qualified name of a schema class, e.g. ``v1.GreetingRequest``."""
    return f"{schema.__module__.rsplit('.', 1)[-1]}.{schema.__name__}"


def _translate(exc: ValidationError, schema: Type[BaseModel]) -> DecodeError:
    """Map a pydantic ValidationError onto the two decode error kinds.

    Only a payload whose every problem is an absent top-level field is a
    MissingFieldError; anything else wrong with it makes it malformed.
    """
    errors = exc.errors()
    missing = [e["loc"][0] for e in errors if e.get("type") == "missing" and len(e.get("loc") or ()) == 1]
    name = schema_label(schema)
    if missing and len(missing) == len(errors):
        order = list(schema.model_fields)
        missing.sort(key=lambda f: order.index(f) if f in order else len(order))
        return MissingFieldError(str(missing[0]), schema=name, missing=[str(m) for m in missing])
    # describe the first problem that is not a mere absence
    first = next((e for e in errors if e.get("type") != "missing"), errors[0] if errors else {})
    return MalformedError(f"{first.get('type', 'invalid')}: {first.get('msg', str(exc))}", schema=name)


def _encode_json(value: BaseModel) -> bytes:
    if not isinstance(value, BaseModel):
        raise EncodeError(f"cannot encode {type(value).__name__}: not a schema model")
    try:
        return value.model_dump_json().encode("utf-8")
    except PydanticSerializationError as exc:
        raise EncodeError(f"failed to encode {type(value).__name__}: {exc}") from exc


class JsonCodec:
    """JSON codec backed by pydantic's own parser.

    Models keep pydantic's default ``extra="ignore"`` so unknown keys are
    dropped, and required fields that are absent raise a ``missing`` error,
    which becomes MissingFieldError.
    """

    name = "json"
    policy = CodecPolicy.STRICT

    def encode(self, value: BaseModel) -> bytes:
        data = _encode_json(value)
        logger.debug("%s encoded %s -> %d bytes", self.name, type(value).__name__, len(data))
        return data

    def decode(self, schema: Type[M], data: bytes) -> M:
        try:
            return schema.model_validate_json(data)
        except ValidationError as exc:
            err = _translate(exc, schema)
            logger.debug("%s failed to decode %s: %s", self.name, schema.__name__, err)
            raise err from exc


_ZERO_VALUES: Dict[Any, Any] = {str: "", int: 0, float: 0.0, bool: False}


def _zero_value(annotation: Any) -> Any:
    if annotation in _ZERO_VALUES:
        return _ZERO_VALUES[annotation]
    origin = getattr(annotation, "__origin__", None)
    if annotation is list or origin is list:
        return []
    if annotation is dict or origin is dict:
        return {}
    return None


class DefaultingJsonCodec(JsonCodec):
    """Same wire format as JsonCodec, but absent fields are filled in.

    A missing field takes its declared default, or the zero value of its type
    when it has none. MissingFieldError is therefore never raised.
    """

    name = "defaulting"
    policy = CodecPolicy.DEFAULTING

    def decode(self, schema: Type[M], data: bytes) -> M:
        try:
            payload = json.loads(data)
        except (ValueError, TypeError) as exc:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise MalformedError(f"json_invalid: {exc}", schema=schema_label(schema)) from exc
        if not isinstance(payload, dict):
            raise MalformedError(f"expected an object, got {type(payload).__name__}", schema=schema_label(schema))

        filled: List[str] = []
        for field_name, info in schema.model_fields.items():
            if field_name in payload or not info.is_required():
                continue
            payload[field_name] = _zero_value(info.annotation)
            filled.append(field_name)
        if filled:
            logger.debug("%s defaulted %s for %s", self.name, filled, schema.__name__)
        try:
            return schema.model_validate(payload)
        except ValidationError as exc:
            raise _translate(exc, schema) from exc


def create_codec(name: str | None = None, **kwargs) -> Codec:
    n = (name or "json").strip().lower()
    if n in ("json", "strict"):
        return JsonCodec(**kwargs)
    if n in ("defaulting", "lenient"):
        return DefaultingJsonCodec(**kwargs)
    raise ValueError(f"Unknown codec name: {name}")


def default_codec() -> Codec:
    return create_codec(get_settings().codec)


def encode(value: BaseModel, codec: Codec | None = None) -> bytes:
    return (codec or default_codec()).encode(value)


def decode(schema: Type[M], data: bytes, codec: Codec | None = None) -> M:
    return (codec or default_codec()).decode(schema, data)


def try_decode(schema: Type[M], data: bytes, codec: Codec | None = None) -> DecodeResult[M]:
    """Decode without raising; the DecodeError (if any) is on the result."""
    try:
        return DecodeResult(value=decode(schema, data, codec))
    except DecodeError as err:
        return DecodeResult(error=err)
