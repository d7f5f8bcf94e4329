"""
The core Condi namespace defines the :class:`App` class, a WSGI
application that routes requests to controller actions, and re-exports
the :class:`~condi.predicates.Condi` mixin that lets those actions define
request-scoped predicates for their templates.

"""

from contextlib import contextmanager, ExitStack
from os.path import join, dirname

from werkzeug.local import LocalManager
from werkzeug.routing import Map
from werkzeug.utils import cached_property

from condi.context import ctx
from condi.controller import Controller, helper
from condi.dispatcher import Dispatcher
from condi.predicates import Condi, OutsideRequestError, StaleScopeError
from condi.wrappers import Request


with open(join(dirname(__file__), "VERSION")) as fh:
    __version__ = fh.read().strip()


class App(Dispatcher):
    #: The class used to wrap WSGI environments by this App instance.
    request_class = Request
    # This is used internally to track and clean up context variables
    local_manager = LocalManager()

    def __init__(self, renderer=None, error_handler=None,
                 reuse_controllers=False):
        """
        Create a new App instance.

        See :class:`~condi.dispatcher.Dispatcher` for the parameters.
        """
        super(App, self).__init__(renderer, error_handler, reuse_controllers)

        if ctx not in self.local_manager.locals:
            self.local_manager.locals.append(ctx)
        self.context_hooks = []
        self.cleanup_hooks = []

    def context(self, func):
        """
        Register a request context manager for the application.

        A request context manager is a function that yields once, that is
        used to wrap request contexts. It is called at the beginning of a
        request context, during which it yields control to Condi, and
        regains control sometime after Condi processes the request. If
        the function yields a value, it is made available as an
        attribute on :data:`condi.context.ctx` with the same name as the
        function.

        Example::

            >>> from condi.context import ctx
            >>> from condi import App
            >>>
            >>> app = App()
            >>> items = []
            >>> @app.context
            ... def meaning():
            ...     items.extend(["Life", "Universe", "Everything"])
            ...     yield 42
            ...     items.clear()
            ...
            >>> with app.test_context(create_route=True):
            ...     print("The meaning of", end=" ")
            ...     print(*items, sep=", ", end=": ")
            ...     print(ctx.meaning)
            ...
            The meaning of Life, Universe, Everything: 42
            >>> items
            []

        """
        self.context_hooks.append(contextmanager(func))
        return func

    def cleanup_hook(self, func):
        """
        Register a function that should run after each request in the
        application.
        """
        self.cleanup_hooks.append(func)
        return func

    def __cleanup(self):
        self.local_manager.cleanup()
        for hook in self.cleanup_hooks:
            hook()

    def build_context(self, environ):
        """
        Start a request context.

        :param environ: A WSGI environment.
        :return: A context manager for the request. When the context
            manager exits, the request context variables are destroyed and
            all cleanup hooks are run.

        .. note:: This method is intended for internal use; Condi will
            call this method internally on its own. It is *not* re-entrant
            with a single request.

        """
        context = ExitStack()
        context.callback(self.__cleanup)

        with context:
            ctx.app = self
            ctx.url_adapter = adapter = self.url_map.bind_to_environ(environ)
            ctx.request = self.request_class(environ)

            rule, url_values = adapter.match(return_rule=True)
            controller_cls, action = self.get_action(rule)

            # Set up context variables
            ctx.url_values = url_values
            ctx.dispatcher = self
            ctx.action = action
            ctx.controller = self.get_controller(controller_cls)

            # Add all the application's context managers to
            # the exit stack. If any of them return a value,
            # we'll add the value to the application context
            # with the function name.
            for hook in self.context_hooks:
                retval = context.enter_context(hook())
                if retval is not None:
                    setattr(ctx, hook.__name__, retval)

            return context.pop_all()

    def test_context(self, create_route=False, **args):
        """
        Make a mock request context for testing.

        A mock request context is generated using the arguments here.
        In other words, context variables are set up and callbacks are
        registered. The returned object is intended to be used as a
        context manager::

            app = App()
            with app.test_context():
                # This will set up request context variables
                # that are needed by some condi code.
                do_some_stuff_in_the_request_context()

            # After the with statement exits, the request context
            # variables are cleared.

        This method is really just a shortcut for creating a fake
        WSGI environ with :py:class:`werkzeug.test.EnvironBuilder` and
        passing that to :meth:`build_context`. It takes the very same
        keyword parameters as :py:class:`~werkzeug.test.EnvironBuilder`;
        the arguments given here are passed directly in.

        :keyword create_route: Create a URL rule routing to a plain
            :class:`Controller`, which will match the path of the mock
            request, unless a route for that path was already added. This must be set to True if the mock request being
            generated doesn't already have a route registered for the
            request path, otherwise this method will raise a
            :py:class:`werkzeug.exceptions.NotFound` error.

        :return: A context manager for a mock request.
        """
        from werkzeug.test import EnvironBuilder

        if create_route:
            path = args.get('path', '/')
            if not any(rulestr == path for _, rulestr, _, _ in self.routes):
                self.route(Controller, path)

        builder = EnvironBuilder(**args)
        return self.build_context(builder.get_environ())

    def __call__(self, environ, start_response):
        # Set up the request context and run the
        # app inside it.
        try:
            with self.build_context(environ):
                response = ctx.dispatcher.dispatch()
        except Exception as err:
            response = self.error_handler(err)

        return response(environ, start_response)

    @cached_property
    def url_map(self):
        return Map([r for r in self.build_rules()])


__all__ = ['App', 'Condi', 'Controller', 'helper', 'Request',
           'StaleScopeError', 'OutsideRequestError', 'ctx']
