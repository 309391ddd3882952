"""Command that serves a greeting on the root path."""

from __future__ import annotations

import argparse

from .http import HttpStatus, Request, Response
from .router import Router
from .server import ServerInstance

__all__ = ["hello", "build_server", "main"]


def hello(request: Request, response: Response) -> None:
    """Answer with a plain greeting."""
    response.status_code = HttpStatus.OK
    response.body = "Hello, World!"
    response.set_header("Content-Length", "text/plain")


def build_server(addr: str = "127.0.0.1", port: int = 8080) -> ServerInstance:
    """Create a server with the greeting registered on ``/``."""
    server = ServerInstance(addr, port)
    server.include_router(Router())
    server.get("/", hello)
    return server


def main(argv: list[str] | None = None) -> int:
    """Run the greeting server until interrupted."""
    parser = argparse.ArgumentParser(prog="tinyserve", description="Serve a greeting over HTTP.")
    parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)

    with build_server(args.host, args.port) as server:
        print(f"Server is running at {args.host}:{server.port}")
        try:
            server.start()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())