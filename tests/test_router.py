from tinyserve.http import HttpMethod, HttpStatus, Request, Response
from tinyserve.router import Router


def _ok(request, response):
    response.status_code = HttpStatus.OK
    response.body = "hit " + request.path


def _created(request, response):
    response.status_code = HttpStatus.CREATED
    response.body = request.body


def test_dispatch_registered_handler():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    response = Response()
    assert router.dispatch(Request(method=HttpMethod.GET, path="/"), response) is True
    assert response.status_code == HttpStatus.OK
    assert response.body == "hit /"


def test_dispatch_unknown_path_gives_404():
    router = Router()
    response = Response()
    assert router.dispatch(Request(method=HttpMethod.GET, path="/none"), response) is False
    assert response.status_code == HttpStatus.NOT_FOUND
    assert response.body == "404 Not Found"


def test_dispatch_wrong_method_gives_405():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    response = Response()
    assert router.dispatch(Request(method=HttpMethod.POST, path="/"), response) is False
    assert response.status_code == HttpStatus.METHOD_NOT_ALLOWED
    assert response.body == "405 Not Allowed"


def test_custom_fallback_status_is_forced():
    router = Router()
    router.not_found_handler = _ok
    response = Response()
    router.dispatch(Request(method=HttpMethod.GET, path="/missing"), response)
    assert response.body == "hit /missing"
    assert response.status_code == HttpStatus.NOT_FOUND


def test_custom_not_allowed_handler():
    router = Router()
    router.register_handler("/x", HttpMethod.GET, _ok)
    router.not_allowed_handler = _created
    response = Response()
    router.dispatch(Request(method=HttpMethod.POST, path="/x", body="payload"), response)
    assert response.body == "payload"
    assert response.status_code == HttpStatus.METHOD_NOT_ALLOWED


def test_register_replaces_handler():
    router = Router()
    router.register_handler("/", HttpMethod.POST, _ok)
    router.register_handler("/", HttpMethod.POST, _created)
    assert router.get_handler("/", HttpMethod.POST) is _created


def test_get_handler_fallbacks():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    assert router.get_handler("/", HttpMethod.GET) is _ok
    assert router.get_handler("/", HttpMethod.POST) is router.not_allowed_handler
    assert router.get_handler("/other", HttpMethod.GET) is router.not_found_handler


def test_remove_last_method_removes_path():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    router.remove_handler("/", HttpMethod.GET)
    assert router.get_handler("/", HttpMethod.GET) is router.not_found_handler


def test_remove_one_method_keeps_others():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    router.register_handler("/", HttpMethod.POST, _created)
    router.remove_handler("/", HttpMethod.GET)
    assert router.get_handler("/", HttpMethod.GET) is router.not_allowed_handler
    assert router.get_handler("/", HttpMethod.POST) is _created


def test_remove_unknown_route_is_ignored():
    router = Router()
    router.register_handler("/", HttpMethod.GET, _ok)
    router.remove_handler("/nothing", HttpMethod.GET)
    router.remove_handler("/", HttpMethod.POST)
    assert router.get_handler("/", HttpMethod.GET) is _ok


def test_default_handler_applied_directly():
    router = Router()
    response = Response()
    router.get_handler("/missing", HttpMethod.GET)(Request(), response)
    assert response.status_code == HttpStatus.NOT_FOUND
    assert response.body == "404 Not Found"