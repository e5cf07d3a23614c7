"""Greeter client/server pairs, one implementation per schema revision."""
from __future__ import annotations

from typing import Dict, Type

from schemacompat.codec import Codec
from schemacompat.schemas import v0, v1

from .exchange import ClientResult, TypedClient, TypedServer

SALUTATIONS: Dict[str, str] = {"en": "Hello", "fr": "Bonjour", "es": "Hola", "de": "Hallo"}


class GreeterServerV0(TypedServer):
    revision = "v0"
    request_schema = v0.HelloRequest
    response_schema = v0.Hello

    def respond(self, request: v0.HelloRequest) -> v0.Hello:
        return v0.Hello(greeting=f"Hello, {request.name}!")


class GreeterServerV1(TypedServer):
    revision = "v1"
    request_schema = v1.HelloRequest
    response_schema = v1.Hello

    def __init__(self, codec: Codec | None = None, instance: str = "greeter-v1"):
        super().__init__(codec)
        self.instance = instance

    def respond(self, request: v1.HelloRequest) -> v1.Hello:
        # unknown locales fall back to English
        salutation = SALUTATIONS.get(request.locale, SALUTATIONS["en"])
        return v1.Hello(greeting=f"{salutation}, {request.name}!", served_by=self.instance)


class GreeterClientV0(TypedClient):
    revision = "v0"
    request_schema = v0.HelloRequest
    response_schema = v0.Hello

    def __init__(self, name: str = "Greg", codec: Codec | None = None):
        super().__init__(v0.HelloRequest(name=name), codec)

    def present(self, response: v0.Hello) -> ClientResult:
        return ClientResult(client_revision=self.revision, payload=response.model_dump(), display=f"Response: {response.greeting}")


class GreeterClientV1(TypedClient):
    revision = "v1"
    request_schema = v1.HelloRequest
    response_schema = v1.Hello

    def __init__(self, name: str = "Greg", locale: str = "en", codec: Codec | None = None):
        super().__init__(v1.HelloRequest(name=name, locale=locale), codec)

    def present(self, response: v1.Hello) -> ClientResult:
        return ClientResult(
            client_revision=self.revision,
            server_revision=response.served_by,
            payload=response.model_dump(),
            display=f"Response: {response.greeting} (from {response.served_by})",
        )


SERVERS: Dict[str, Type[TypedServer]] = {"v0": GreeterServerV0, "v1": GreeterServerV1}
CLIENTS: Dict[str, Type[TypedClient]] = {"v0": GreeterClientV0, "v1": GreeterClientV1}


def create_server(revision: str | None = None, **kwargs) -> TypedServer:
    rev = (revision or "v0").strip().lower()
    if rev not in SERVERS:
        raise ValueError(f"Unknown greeter server revision: {revision}")
    return SERVERS[rev](**kwargs)


def create_client(revision: str | None = None, **kwargs) -> TypedClient:
    rev = (revision or "v0").strip().lower()
    if rev not in CLIENTS:
        raise ValueError(f"Unknown greeter client revision: {revision}")
    return CLIENTS[rev](**kwargs)
