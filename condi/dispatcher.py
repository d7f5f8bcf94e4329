from functools import singledispatch
import logging

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Rule
from werkzeug.wrappers import Response

from condi.content import ErrorHandler
from condi.context import ctx
from condi.controller import Controller


logger = logging.getLogger(__name__)


class Dispatcher:
    """
    A :class:`Dispatcher` routes requests to controller actions.

    :param renderer: An object with a ``render(template, namespace,
        status, headers)`` method, used by controllers to render
        templates. See :class:`condi.view.TemplateRenderer`.
    :param error_handler: A function that converts an exception to a
        :class:`Response <werkzeug.wrappers.Response>`. If not given,
        a generic :class:`condi.content.ErrorHandler` is used.
    :param reuse_controllers: If true, each controller class is only
        instantiated once, and the same instance handles all of the
        requests routed to it. Otherwise a new instance is created for
        every request.

    This class is fairly low-level and shouldn't be instantiated directly in
    application code. It does however serve as a base for :class:`condi.App`.

    """

    #: A class that is used to construct responses.
    response_class = Response

    def __init__(self, renderer=None, error_handler=None,
                 reuse_controllers=False):
        self.route = singledispatch(self.route)
        self.route.register(str, self.route_decorator)

        if error_handler is None:
            error_handler = ErrorHandler()
            error_handler.register(Exception, self._handle_exception)
            error_handler.register(HTTPException, self._handle_http_exception)

        self.renderer = renderer
        self.error_handler = error_handler
        self.reuse_controllers = reuse_controllers

        self.routes = []
        self.endpoints = {}
        self.controllers = {}

    def _handle_exception(self, err):
        logger.exception("Internal Application Error")
        return self.response_class(
            "An internal application error has been logged.", status=500)

    def _handle_http_exception(self, http_err):
        return http_err.get_response()

    def route(self, controller, rulestr, action="index", **ruleargs):
        """
        Add a route to a controller action.

        :param controller: The class of the controller that handles the
                           route.
        :type controller: subclass of :class:`Controller`
        :param rulestr: A URL rule, according to
                        :ref:`werkzeug's specification <werkzeug:routing>`.
        :type rulestr: str
        :param action: The name of the controller's method that handles
                       requests matching the rule.

        See :py:class:`werkzeug.routing.Rule` for valid rule parameters.

        This method can also be used as a decorator factory to assign
        routes to controllers using declarative syntax::

            @route("/store/items/<int:item_id>", action="show")
            @route("/store")
            class StoreController(Condi, Controller):
                def index(self):
                    ...

                def show(self, item_id):
                    ...

        """
        if not (isinstance(controller, type)
                and issubclass(controller, Controller)):
            raise ValueError("Argument 'controller': must be a "
                             "Controller subclass.")

        self.routes.append((controller, rulestr, action, ruleargs))
        # Rules are rebuilt the next time the URL map is needed
        self.__dict__.pop('url_map', None)

        return controller

    def route_decorator(self, rulestr, action="index", **ruleargs):
        # See :meth:`route`.
        def decorator(controller):
            return self.route(controller, rulestr, action, **ruleargs)

        return decorator

    def build_rules(self):
        """
        Return a generator for all of the url rules collected by the
        :class:`Dispatcher`.

        :rtype: Iterable of :class:`werkzeug.routing.Rule`

        """
        self.endpoints.clear()

        for controller, string, action, args in self.routes:
            args = dict(args)
            args.setdefault('endpoint', "{0.__module__}.{0.__qualname__}#{1}"
                            .format(controller, action))
            self.endpoints[args['endpoint']] = controller, action

            yield Rule(string, **args)

    def get_action(self, rule):
        """Return the *(controller class, action name)* a rule points to."""
        return self.endpoints[rule.endpoint]

    def get_controller(self, controller_cls):
        """
        Return a controller instance to handle a request.
        """
        if not self.reuse_controllers:
            return controller_cls()

        if controller_cls not in self.controllers:
            self.controllers[controller_cls] = controller_cls()
        return self.controllers[controller_cls]

    def dispatch(self):
        """
        Dispatch the current request to the controller action that its
        rule points to.

        This function requires an active request context in order to work.
        """
        try:
            return ctx.controller.process(ctx.action, ctx.url_values)
        except Exception as err:
            return self.error_handler(err)
