"""Serve one greeter revision over HTTP for manual client testing.

Run: python scripts/serve_greeter.py --revision v1 --port 8000
then POST a JSON HelloRequest body to http://127.0.0.1:8000/exchange
"""
from __future__ import annotations

import argparse

import uvicorn

from schemacompat.channel import create_server
from schemacompat.channel.transport import build_app
from schemacompat.codec import create_codec


def main(argv=None):
    parser = argparse.ArgumentParser(description="Serve a greeter revision")
    parser.add_argument("--revision", default="v1")
    parser.add_argument("--codec", default="json")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    app = build_app(create_server(args.revision, codec=create_codec(args.codec)))
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
