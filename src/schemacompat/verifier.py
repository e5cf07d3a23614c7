from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Type

from pydantic import BaseModel

from schemacompat.codec import Codec, CodecPolicy, DecodeError, default_codec, schema_label
from schemacompat.utils.logger_util import get_logger
logger = get_logger(__name__)


class CompatibilityMode(str, Enum):
    """Summary of a two-direction audit between an old and a new revision."""

    BACKWARD = "BACKWARD"
    FORWARD = "FORWARD"
    FULL = "FULL"
    NONE = "NONE"


@dataclass(frozen=True)
class SchemaDiff:
    """Fields added and removed going from revision A to revision B."""

    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    # subsets of the above that a reader cannot do without
    added_required: List[str] = field(default_factory=list)
    removed_required: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def structural_diff(a: Type[BaseModel], b: Type[BaseModel]) -> SchemaDiff:
    a_fields = a.model_fields
    b_fields = b.model_fields
    added = [f for f in b_fields if f not in a_fields]
    removed = [f for f in a_fields if f not in b_fields]
    return SchemaDiff(
        added=added,
        removed=removed,
        added_required=[f for f in added if b_fields[f].is_required()],
        removed_required=[f for f in removed if a_fields[f].is_required()],
    )


def expected_compatibility(diff: SchemaDiff, policy: CodecPolicy = CodecPolicy.STRICT) -> Tuple[bool, bool]:
    """Return (backward, forward) predicted for ``diff`` under a codec policy.

    Writers always emit every field they know about, so under STRICT the only
    way a read fails is a reader requiring a field the writer never had.
    """
    if CodecPolicy(policy) is CodecPolicy.DEFAULTING:
        return True, True
    return not diff.added_required, not diff.removed_required


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of encoding under one revision and decoding under another."""

    writer: str
    reader: str
    compatible: bool
    error: Optional[DecodeError] = None
    decoded: Optional[BaseModel] = None

    def __bool__(self) -> bool:
        return self.compatible


@dataclass(frozen=True)
class CompatibilityReport:
    old: str
    new: str
    diff: SchemaDiff
    backward: CompatibilityResult
    forward: CompatibilityResult

    @property
    def mode(self) -> CompatibilityMode:
        if self.backward.compatible and self.forward.compatible:
            return CompatibilityMode.FULL
        if self.backward.compatible:
            return CompatibilityMode.BACKWARD
        if self.forward.compatible:
            return CompatibilityMode.FORWARD
        return CompatibilityMode.NONE


class CompatibilityAssertionError(AssertionError):
    def __init__(self, result: CompatibilityResult, expected: bool):
        outcome = "compatible" if result.compatible else f"incompatible ({result.error})"
        super().__init__(f"{result.writer} -> {result.reader}: expected {'compatible' if expected else 'incompatible'}, got {outcome}")
        self.result = result
        self.expected = expected


def check_compatibility(value: BaseModel, decode_as: Type[BaseModel], codec: Codec | None = None) -> CompatibilityResult:
    """Encode ``value`` under its own revision and try to decode it as ``decode_as``.

    Directional: the result says nothing about decode_as -> type(value).
    """
    codec = codec or default_codec()
    writer, reader = schema_label(type(value)), schema_label(decode_as)
    data = codec.encode(value)
    try:
        decoded = codec.decode(decode_as, data)
    except DecodeError as err:
        logger.debug("%s -> %s incompatible under %s: %s", writer, reader, codec.name, err)
        return CompatibilityResult(writer=writer, reader=reader, compatible=False, error=err)
    logger.debug("%s -> %s compatible under %s", writer, reader, codec.name)
    return CompatibilityResult(writer=writer, reader=reader, compatible=True, decoded=decoded)


def audit(old_value: BaseModel, new_value: BaseModel, codec: Codec | None = None) -> CompatibilityReport:
    """Check both directions between two revisions of one record.

    backward: new code reads old data (old_value decoded as the new schema).
    forward:  old code reads new data (new_value decoded as the old schema).
    """
    codec = codec or default_codec()
    old_schema, new_schema = type(old_value), type(new_value)
    report = CompatibilityReport(
        old=schema_label(old_schema),
        new=schema_label(new_schema),
        diff=structural_diff(old_schema, new_schema),
        backward=check_compatibility(old_value, new_schema, codec),
        forward=check_compatibility(new_value, old_schema, codec),
    )
    logger.info("audit %s -> %s under %s: %s", report.old, report.new, codec.name, report.mode.value)
    return report


def assert_compatibility(value: BaseModel, decode_as: Type[BaseModel], expected: bool, codec: Codec | None = None) -> CompatibilityResult:
    result = check_compatibility(value, decode_as, codec)
    if result.compatible != bool(expected):
        raise CompatibilityAssertionError(result, bool(expected))
    return result
