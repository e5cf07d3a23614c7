from .exchange import (
    Client,
    ClientResult,
    ExchangeOutcome,
    Server,
    TypedClient,
    TypedServer,
    run_exchange,
    try_exchange,
)
from .greeter import (
    GreeterClientV0,
    GreeterClientV1,
    GreeterServerV0,
    GreeterServerV1,
    create_client,
    create_server,
)

__all__ = [
    "Client",
    "ClientResult",
    "ExchangeOutcome",
    "GreeterClientV0",
    "GreeterClientV1",
    "GreeterServerV0",
    "GreeterServerV1",
    "Server",
    "TypedClient",
    "TypedServer",
    "create_client",
    "create_server",
    "run_exchange",
    "try_exchange",
]
