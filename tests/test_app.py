from tempfile import NamedTemporaryFile

import pytest
from werkzeug.test import Client, EnvironBuilder
from werkzeug.wrappers import Response

from condi import App, Condi, Controller, __version__
from condi.context import ctx


class PingController(Controller):
    def index(self):
        assert ctx.request.method == 'GET'
        assert ctx.url_values == {}
        return Response("test data")


@pytest.fixture
def app():
    # Create a fake app with one working route.
    app = App()
    app.route(PingController, "/test")
    return app

@pytest.fixture
def environ():
    builder = EnvironBuilder(path="/test")
    return builder.get_environ()


def test_version():
    assert __version__

def test_context_variables(app, environ):
    with app.build_context(environ):
        assert ctx.app is app
        assert ctx.dispatcher is app
        assert ctx.action == "index"
        assert isinstance(ctx.controller, PingController)
        assert ctx.request.path == "/test"

    assert not hasattr(ctx, 'request')
    assert not hasattr(ctx, 'controller')

def test_request_identity_unique(app, environ):
    identities = set()
    for i in range(50):
        with app.build_context(environ):
            identities.add(ctx.request.identity)
            assert ctx.request.identity == ctx.request.identity

    assert len(identities) == 50

def test_context_error(app, environ):
    @app.context
    def error_func():
        raise ValueError
        yield

    with pytest.raises(ValueError):
        with app.build_context(environ):
            print()

    assert not hasattr(ctx, 'request')

def test_context_error_propagates(app, environ):
    # Errors raised by a request context manager must be propagated all
    # the way to the application error handler.
    class CustomErrorClass(Exception):
        pass

    err = CustomErrorClass()
    tracked = []

    @app.context
    def error_func():
        raise err
        yield

    @app.error_handler.register(CustomErrorClass)
    def track_error(e):
        tracked.append(e)
        return Response("Foo")

    client = Client(app)
    response = client.get("/test")

    assert tracked == [err]
    assert response.get_data(as_text=True) == "Foo"

def test_app_context_management(app, environ):
    @app.context
    def temp_file():
        fobj = NamedTemporaryFile()
        yield fobj
        fobj.close()

    with app.build_context(environ):
        # The first part of the context manager should have been run
        # by here
        temp_fobj = ctx.temp_file
        assert not temp_fobj.file.closed

    # Now that we leave the request context, expect
    # temp_fobj to be closed and for the context information to be
    # deleted.
    assert temp_fobj.file.closed
    assert not hasattr(ctx, 'temp_file')

def test_cleanup_hook(app, environ):
    items = [49, 48, 43, 42]

    @app.cleanup_hook
    def clear_items():
        items.clear()

    c = Client(app)

    assert len(items) == 4

    c.get('/test')
    assert items == []

    # Check that even after a request that throws an error during processing,
    # cleanup hooks still get called
    with pytest.raises(ValueError):
        with app.build_context(environ):
            items.extend([93, 3, 4, 5])
            raise ValueError

    assert items == []

def test_late_cleanup_hook(app, environ):
    # Test that cleanup hooks registered during a request
    # are run
    items = [48, 45, 34, 65]

    with app.build_context(environ):
        app.cleanup_hook(items.clear)

    assert items == []

def test_dispatch(app):
    response = Client(app).get("/test")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "test data"

def test_not_found(app):
    response = Client(app).get("/nowhere")

    assert response.status_code == 404

def test_method_not_allowed(app):
    app.route(PingController, "/get-only", methods=["GET"])
    response = Client(app).post("/get-only")

    assert response.status_code == 405

def test_url_values(app):
    class ItemsController(Controller):
        def show(self, item_id):
            return "item {}".format(item_id + 1)

    app.route(ItemsController, "/items/<int:item_id>", action="show")
    response = Client(app).get("/items/41")

    assert response.get_data(as_text=True) == "item 42"

def test_internal_error_logged(app, caplog):
    class BrokenController(Controller):
        def index(self):
            raise KeyError("oops")

    app.route(BrokenController, "/broken")
    response = Client(app).get("/broken")

    assert response.status_code == 500
    assert "Internal Application Error" in caplog.text
    assert "KeyError" in caplog.text

@pytest.mark.parametrize("reuse", [False, True])
def test_stale_predicate_across_requests(reuse, caplog):
    instances = []

    class CheckoutController(Condi, Controller):
        def __init__(self):
            instances.append(self)

        def define(self):
            self.predicate("always_true", lambda: True)
            return "defined {}".format(self.always_true())

        def check(self):
            return "checked {}".format(self.always_true())

    app = App(reuse_controllers=reuse)
    app.route(CheckoutController, "/define", action="define")
    app.route(CheckoutController, "/check", action="check")
    client = Client(app)

    response = client.get("/define")
    assert response.get_data(as_text=True) == "defined True"

    response = client.get("/check")
    assert response.status_code == 500
    assert "StaleScopeError" in caplog.text
    assert "always_true" in caplog.text

    # Redefining it in the new request makes it usable again
    response = client.get("/define")
    assert response.get_data(as_text=True) == "defined True"

    assert len(instances) == (1 if reuse else 3)

def test_test_context_reuses_created_route():
    app = App()

    for i in range(3):
        with app.test_context(create_route=True, path="/mock"):
            assert ctx.request.path == "/mock"

    assert len(app.routes) == 1
    assert len(list(app.url_map.iter_rules())) == 1
