from .errors import DecodeError, EncodeError, MalformedError, MissingFieldError, error_from_dict
from .adapters import (
    Codec,
    CodecPolicy,
    DecodeResult,
    DefaultingJsonCodec,
    JsonCodec,
    create_codec,
    schema_label,
    decode,
    default_codec,
    encode,
    try_decode,
)

__all__ = [
    "Codec",
    "CodecPolicy",
    "DecodeError",
    "DecodeResult",
    "DefaultingJsonCodec",
    "EncodeError",
    "JsonCodec",
    "MalformedError",
    "MissingFieldError",
    "create_codec",
    "decode",
    "default_codec",
    "encode",
    "error_from_dict",
    "schema_label",
    "try_decode",
]
