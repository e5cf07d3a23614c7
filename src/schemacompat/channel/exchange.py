from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Protocol, Type

from pydantic import BaseModel, Field

from schemacompat.codec import Codec, DecodeError, default_codec
from schemacompat.utils.logger_util import get_logger
logger = get_logger(__name__)

Hop = Literal["request", "response"]


class ClientResult(BaseModel):
    """What a client hands back to its user after a successful round trip."""

    client_revision: str
    server_revision: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
    display: str


class Server(Protocol):
    """Turns request bytes into response bytes; raises DecodeError on bad requests."""

    revision: str

    def handle_request(self, body: bytes) -> bytes:
        ...


class Client(Protocol):
    """Holds a request encoded at construction time and reads the reply."""

    revision: str
    request: bytes

    def handle_response(self, body: bytes) -> ClientResult:
        ...


class TypedServer:
    """Server bound to one revision's request and response schemas.

    Subclasses set the schema classes and implement respond().
    """

    revision: str = "unknown"
    request_schema: Type[BaseModel]
    response_schema: Type[BaseModel]

    def __init__(self, codec: Codec | None = None):
        self.codec = codec or default_codec()

    def handle_request(self, body: bytes) -> bytes:
        request = self.codec.decode(self.request_schema, body)
        response = self.respond(request)
        if not isinstance(response, self.response_schema):
            raise TypeError(f"{type(self).__name__}.respond returned {type(response).__name__}, expected {self.response_schema.__name__}")
        return self.codec.encode(response)

    def respond(self, request: BaseModel) -> BaseModel:
        raise NotImplementedError


class TypedClient:
    """Client bound to one revision's request and response schemas."""

    revision: str = "unknown"
    request_schema: Type[BaseModel]
    response_schema: Type[BaseModel]

    def __init__(self, request_value: BaseModel, codec: Codec | None = None):
        if not isinstance(request_value, self.request_schema):
            raise TypeError(f"{type(self).__name__} sends {self.request_schema.__name__}, got {type(request_value).__name__}")
        self.codec = codec or default_codec()
        self.request: bytes = self.codec.encode(request_value)

    def handle_response(self, body: bytes) -> ClientResult:
        response = self.codec.decode(self.response_schema, body)
        return self.present(response)

    def present(self, response: BaseModel) -> ClientResult:
        return ClientResult(client_revision=self.revision, payload=response.model_dump(), display=f"Response: {response!r}")


@dataclass
class ExchangeOutcome:
    result: Optional[ClientResult] = None
    error: Optional[DecodeError] = None
    failed_hop: Optional[Hop] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_exchange(client: Client, server: Server) -> ExchangeOutcome:
    """One request/response round trip; failures are reported, not raised."""
    logger.debug("exchange client=%s server=%s request=%d bytes", client.revision, server.revision, len(client.request))
    try:
        response = server.handle_request(client.request)
    except DecodeError as err:
        # the client never sees a response, so its handler does not run
        logger.info("exchange %s -> %s failed on request: %s", client.revision, server.revision, err)
        return ExchangeOutcome(error=err, failed_hop="request")
    try:
        result = client.handle_response(response)
    except DecodeError as err:
        logger.info("exchange %s -> %s failed on response: %s", client.revision, server.revision, err)
        return ExchangeOutcome(error=err, failed_hop="response")
    logger.debug("exchange %s -> %s ok: %s", client.revision, server.revision, result.display)
    return ExchangeOutcome(result=result)


def run_exchange(client: Client, server: Server) -> ClientResult:
    """Deliver the client's request, then the server's reply.

    Raises the DecodeError from whichever hop failed first.
    """
    outcome = try_exchange(client, server)
    if outcome.error is not None:
        raise outcome.error
    return outcome.result
