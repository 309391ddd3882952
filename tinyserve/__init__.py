"""A small threaded HTTP/1.1 server with a method-aware router and a demo command."""

__version__ = "0.1.0"
__all__ = ["app", "http", "router", "server", "tpool"]