"""Run any Server behind FastAPI so an exchange crosses a real HTTP stack.

Request decode failures come back as 422 with the error's to_dict() body and
are turned back into the matching DecodeError on the client side.
"""
from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.testclient import TestClient
from starlette.concurrency import run_in_threadpool

from schemacompat import __version__
from schemacompat.codec import DecodeError, error_from_dict
from schemacompat.utils.logger_util import get_logger

from .exchange import Server

logger = get_logger(__name__)

EXCHANGE_PATH = "/exchange"
REVISION_HEADER = "X-Server-Revision"


def build_app(server: Server) -> FastAPI:
    app = FastAPI(title=f"schemacompat-{server.revision}", version=__version__)

    @app.get("/health")
    def health():
        # sync: an HttpServer looks its revision up over HTTP
        return {"status": "ok", "revision": server.revision}

    @app.post(EXCHANGE_PATH)
    async def exchange(request: Request):
        body = await request.body()
        try:
            # handle_request is synchronous (and may itself do HTTP); keep it off the event loop
            out = await run_in_threadpool(server.handle_request, body)
        except DecodeError as err:
            logger.info("http %s rejected request: %s", server.revision, err)
            return JSONResponse(status_code=422, content=err.to_dict(), headers={REVISION_HEADER: server.revision})
        return Response(content=out, media_type="application/json", headers={REVISION_HEADER: server.revision})

    return app


class HttpServer:
    """A Server that forwards request bytes over HTTP to an app from build_app().

    ``target`` is either a FastAPI app, reached in-process through a
    TestClient, or any httpx.Client (for example one with a base_url pointing
    at scripts/serve_greeter.py), used as given.
    """

    def __init__(self, target: FastAPI | httpx.Client, path: str = EXCHANGE_PATH):
        if isinstance(target, httpx.Client):
            self.client = target
        elif isinstance(target, FastAPI):
            self.client = TestClient(target)
        else:
            raise TypeError(f"HttpServer needs a FastAPI app or an httpx.Client, got {type(target).__name__}")
        self.path = path
        self._revision: str | None = None

    @property
    def revision(self) -> str:
        if self._revision is None:
            r = self.client.get("/health")
            r.raise_for_status()
            self._revision = r.json().get("revision", "unknown")
        return self._revision

    def handle_request(self, body: bytes) -> bytes:
        r = self.client.post(self.path, content=body, headers={"content-type": "application/json"})
        if r.status_code == 422:
            raise error_from_dict(r.json())
        r.raise_for_status()
        return r.content
