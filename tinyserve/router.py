"""Routing of requests to handlers by path and method."""

from __future__ import annotations

from typing import Callable, Dict

from .http import HttpMethod, HttpStatus, Request, Response

__all__ = ["Router", "Handler"]

Handler = Callable[[Request, Response], None]


def _not_found(request: Request, response: Response) -> None:
    response.status_code = HttpStatus.NOT_FOUND
    response.body = "404 Not Found"


def _not_allowed(request: Request, response: Response) -> None:
    response.status_code = HttpStatus.METHOD_NOT_ALLOWED
    response.body = "405 Not Allowed"


class Router:
    """Maps (path, method) pairs to handlers, with 404 and 405 fallbacks."""

    def __init__(self) -> None:
        self._callbacks: Dict[str, Dict[HttpMethod, Handler]] = {}
        self.not_found_handler: Handler = _not_found
        self.not_allowed_handler: Handler = _not_allowed

    def register_handler(self, path: str, method: HttpMethod, callback: Handler) -> None:
        """Register ``callback`` for ``method`` on ``path``, replacing any earlier one."""
        self._callbacks.setdefault(path, {})[method] = callback

    def remove_handler(self, path: str, method: HttpMethod) -> None:
        """Remove the handler for ``method`` on ``path``; unknown routes are ignored."""
        methods = self._callbacks.get(path)
        if methods is None:
            return
        methods.pop(method, None)
        if not methods:
            del self._callbacks[path]

    def get_handler(self, path: str, method: HttpMethod) -> Handler:
        """Return the handler for the route, or the 404/405 fallback."""
        methods = self._callbacks.get(path)
        if methods is None:
            return self.not_found_handler
        return methods.get(method, self.not_allowed_handler)

    def dispatch(self, request: Request, response: Response) -> bool:
        """Run the matching handler; return False when a fallback was used."""
        methods = self._callbacks.get(request.path)
        if methods is None:
            self.not_found_handler(request, response)
            response.status_code = HttpStatus.NOT_FOUND
            return False

        handler = methods.get(request.method)
        if handler is None:
            self.not_allowed_handler(request, response)
            response.status_code = HttpStatus.METHOD_NOT_ALLOWED
            return False

        handler(request, response)
        return True