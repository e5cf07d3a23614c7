from __future__ import annotations

import threading
from typing import List, Tuple, Type, TypeVar

from pydantic import BaseModel

from schemacompat.codec import Codec, DecodeError, default_codec
from schemacompat.utils.logger_util import get_logger
logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class SchemalessStore:
    """In-memory stand-in for a persistent store that takes any record.

    Entries are encoded bytes with no schema tag; they are never mutated or
    removed. The schema is only chosen at read time, so a store holding data
    from several revisions fails to read as soon as it reaches an entry the
    reader's revision cannot decode.
    """

    def __init__(self, codec: Codec | None = None):
        self.codec = codec or default_codec()
        self._entries: List[bytes] = []
        # single writer, many readers; readers work on a snapshot
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[bytes, ...]:
        with self._lock:
            return tuple(self._entries)

    def insert(self, value: BaseModel) -> None:
        data = self.codec.encode(value)
        self.insert_raw(data)

    def insert_raw(self, data: bytes) -> None:
        """Append bytes written by some other producer (possibly not a record at all)."""
        with self._lock:
            self._entries.append(bytes(data))
            idx = len(self._entries) - 1
        logger.debug("store insert #%d (%d bytes)", idx, len(data))

    def read_all(self, schema: Type[M]) -> List[M]:
        """Decode every entry as ``schema`` in insertion order.

        Raises the first entry's DecodeError, with ``index`` set, and does not
        look at anything after it.
        """
        out: List[M] = []
        for idx, data in enumerate(self.entries):
            try:
                out.append(self.codec.decode(schema, data))
            except DecodeError as err:
                logger.info("store read as %s failed at entry %d: %s", schema.__name__, idx, err)
                raise err.at(idx)
        logger.debug("store read %d entries as %s", len(out), schema.__name__)
        return out
