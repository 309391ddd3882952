"""A blocking TCP server that answers HTTP requests through a router."""

from __future__ import annotations

import functools
import socket
import sys

from .http import HttpMethod, Request, Response, deserialize_request, serialize_response
from .router import Handler, Router
from .tpool import CLIENTS_MAX_CAPACITY, ThreadPool

__all__ = ["ServerInstance"]

_HEADER_END = b"\r\n\r\n"
_ACCEPT_POLL = 0.2
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ServerInstance:
    """Listens on ``addr``:``port`` and serves requests via its router.

    The socket is bound on construction; ``port`` holds the bound port, which
    differs from the requested one when 0 was asked for.
    """

    def __init__(self, addr: str, port: int, router: Router | None = None) -> None:
        self.router = router if router is not None else Router()
        self.addr = addr
        family = socket.AF_INET6 if ":" in addr else socket.AF_INET
        self._listener = socket.create_server((addr, port), family=family)
        self._listener.settimeout(_ACCEPT_POLL)
        self.port: int = self._listener.getsockname()[1]
        self._pool = ThreadPool(CLIENTS_MAX_CAPACITY)
        self._closed = False

    def include_router(self, router: Router) -> None:
        """Replace the server's router."""
        self.router = router

    def get(self, path: str, handler: Handler) -> None:
        """Register ``handler`` for GET requests on ``path``."""
        self.router.register_handler(path, HttpMethod.GET, handler)

    def post(self, path: str, handler: Handler) -> None:
        """Register ``handler`` for POST requests on ``path``."""
        self.router.register_handler(path, HttpMethod.POST, handler)

    def start(self) -> None:
        """Accept connections until the server is closed."""
        if self._closed:
            raise RuntimeError("server is closed")
        while not self._closed:
            try:
                conn, _ = self._listener.accept()
            except TimeoutError:
                continue
            except OSError:
                if self._closed:
                    break
                raise
            conn.settimeout(None)

            if self._pool.active_tasks_count() + 1 >= CLIENTS_MAX_CAPACITY:
                conn.close()
                continue

            try:
                self._pool.add_task(functools.partial(self._process_connection, conn))
            except RuntimeError:
                conn.close()
                break

    def close(self) -> None:
        """Stop accepting, finish queued connections and release the socket."""
        if self._closed:
            return
        self._closed = True
        self._listener.close()
        self._pool.shutdown()

    def __enter__(self) -> ServerInstance:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _process_connection(self, conn: socket.socket) -> None:
        with conn:
            try:
                request = self._read_request(conn)
                response = Response()
                handler = self.router.get_handler(request.path, request.method)
                handler(request, response)
                payload = serialize_response(response).encode(_ENCODING, _ERRORS)
                conn.sendall(payload)
                try:
                    conn.shutdown(socket.SHUT_RDWR)
                except OSError:
                    pass
            except Exception as exc:
                print(exc, file=sys.stderr)

    @staticmethod
    def _read_request(conn: socket.socket) -> Request:
        buffer = b""
        while _HEADER_END not in buffer:
            chunk = conn.recv(4096)
            if not chunk:
                raise ConnectionError("connection closed before end of headers")
            buffer += chunk

        head, _, body = buffer.partition(_HEADER_END)
        request = deserialize_request((head + _HEADER_END).decode(_ENCODING, _ERRORS))

        length_text = request.headers.get("Content-Length")
        content_length = int(length_text) if length_text is not None else 0

        while len(body) < content_length:
            chunk = conn.recv(content_length - len(body))
            if not chunk:
                raise ConnectionError("connection closed before end of body")
            body += chunk

        request.body = body.decode(_ENCODING, _ERRORS)
        return request