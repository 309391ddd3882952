# tinyserve

A small HTTP/1.1 server. It accepts TCP connections and queues each one on a
thread pool. A router sends each request to a handler chosen by path and
method.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running the demo server

```
tinyserve
tinyserve --host 127.0.0.1 --port 9000
```

By default the server listens on `127.0.0.1:8080`. It answers `GET /` with
status 200 and the body `Hello, World!`. The command prints the address it
listens on and runs until interrupted with Ctrl-C. Passing `--port 0` lets
the system pick a free port, and the printed address shows that port.

## Using it in code

```python
from tinyserve.http import HttpStatus
from tinyserve.server import ServerInstance


def greet(request, response):
    response.status_code = HttpStatus.OK
    response.body = "hi"
    response.set_header("Content-Type", "text/plain")


def echo(request, response):
    response.status_code = HttpStatus.CREATED
    response.body = request.body


with ServerInstance("127.0.0.1", 8080) as server:
    server.get("/", greet)
    server.post("/echo", echo)
    server.start()
```

`ServerInstance(addr, port, router=None)` binds its socket when it is
created. `server.port` holds the port it bound, which is useful when `0` was
requested. `start()` blocks and accepts connections until `close()` is
called, for example from another thread. Leaving the `with` block also calls
`close()`. `close()` finishes the connections already queued before it
returns. `include_router(router)` replaces the server's router.

`tinyserve.app.build_server(addr, port)` returns a server that has the
greeting handler `hello` registered on `/`.

A handler receives a `Request`, which holds `method`, `path`,
`http_version`, `headers` and `body`. It fills in the `Response` it is given
through `status_code`, `body`, `headers` and `set_header(key, value)`. The
server reads a request body when the request has a `Content-Length` header.

## Routing without the server

```python
from tinyserve.http import HttpMethod, Request, Response
from tinyserve.router import Router

router = Router()
router.register_handler("/", HttpMethod.GET, greet)

response = Response()
handled = router.dispatch(Request(method=HttpMethod.GET, path="/"), response)
```

The router provides these methods:

- `dispatch` returns `False` when a fallback handler was used instead of a
  registered one.
- `get_handler(path, method)` returns the handler that would run for a
  route.
- `remove_handler(path, method)` removes a handler, and ignores a route that
  has no handler.

A path with no handlers gets status 404 and the body `404 Not Found`. A known
path used with a method that has no handler gets status 405 and the body
`405 Not Allowed`. The fallbacks are the router's `not_found_handler` and
`not_allowed_handler` attributes, and you can replace them.

## Parsing and serializing

`tinyserve.http` provides the following:

- `deserialize_request(text)` turns raw request text into a `Request`.
- `serialize_response(response)` turns a `Response` into HTTP/1.1 wire text,
  with the headers in sorted order.
- `convert_method(name)` maps `"GET"` and `"POST"` to `HttpMethod`, and any
  other name to `HttpMethod.UNKNOWN`.
- `status_to_string(status)` returns the reason phrase for a status, or
  `None` if it has none. A status without a phrase is written as `Unknown`.

## The thread pool

`tinyserve.tpool.ThreadPool` runs queued callables in order on a background
worker. `add_task(task)` queues a callable. `active_tasks_count()` returns the
number of tasks still waiting. `shutdown()` runs what is queued, then stops
the worker. The pool can also be used as a context manager.

## What it does not do

- It handles only `GET` and `POST`. Any other method counts as unknown, and
  the request gets the 405 fallback on a known path.
- It serves one request per connection and closes the connection after the
  response. It has no keep-alive and no chunked transfer encoding.
- It does not add `Content-Length` or any other header to responses; a
  response carries only the headers its handler sets. The demo greeting sets
  a header named `Content-Length` with the value `text/plain`.
- Routes match the whole path exactly. There are no patterns, and query
  strings are not parsed (`Request.params` is never filled in).
- Connections are handled one after another by a single worker thread. A new
  connection is closed without an answer when 24 or more are already waiting.
- There is no TLS, no static file serving and no logging beyond printing
  errors to standard error.