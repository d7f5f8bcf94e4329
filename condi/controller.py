"""
Controllers group the actions that handle requests. Each routed URL rule
points at a controller class and one of its action methods; the
dispatcher calls the action with the values parsed from the URL, and
turns whatever it returns into a response.

Some of a controller's methods can be made available to the templates
it renders. These are called *helpers*, and are declared either with
:meth:`Controller.helper_method` or the :func:`helper` decorator.
"""

from collections.abc import Mapping

from werkzeug.exceptions import NotFound
from werkzeug.wrappers import Response

from condi.context import ctx, request_identity
from condi.utils import controller_name_for


def helper(func):
    """
    Mark a controller method as a helper, so that it is exposed to the
    controller's templates::

        class StoreController(Controller):
            @helper
            def currency(self, amount):
                return "${:,.2f}".format(amount)

    """
    func.__helper__ = True
    return func


class Controller:
    """
    A base class for controllers.

    Controllers are instantiated by the :class:`~condi.dispatcher.Dispatcher`,
    and must be constructible without arguments.

    """

    #: A class that is used to construct responses from strings returned
    #: by actions.
    response_class = Response

    #: A name for the controller that is used to find its templates. If
    #: not set, it's derived from the class name: ``StoreItemsController``
    #: is named ``store_items``.
    controller_name = None

    _helper_methods = frozenset()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get('controller_name') is None:
            cls.controller_name = controller_name_for(cls)
        cls._helper_methods = frozenset(cls._helper_methods)
        cls.helper_method(*(
            name for name, value in cls.__dict__.items()
            if getattr(value, '__helper__', False)
        ))

    @classmethod
    def helper_method(cls, *names):
        """
        Expose methods of the controller to its templates.

        :param names: Names of methods on the controller.

        Exposures are inherited by subclasses, but exposing a method on a
        subclass does not expose it on the base class.
        """
        cls._helper_methods = cls._helper_methods.union(names)

    @property
    def helper_names(self):
        """The set of names exposed to templates by this controller."""
        return set(self._helper_methods)

    @property
    def helpers(self):
        """
        A dictionary mapping exposed names to bound methods of this
        controller instance.
        """
        return {name: getattr(self, name) for name in self._helper_methods
                if hasattr(self, name)}

    @property
    def request(self):
        """The request currently being handled."""
        return ctx.request

    def current_request_identity(self):
        """
        Return the identity of the request currently being handled, or
        ``None`` if no request is being handled.
        """
        return request_identity()

    def default_template(self, action=None):
        action = getattr(ctx, 'action', 'index') if action is None else action
        return "{}/{}.html".format(self.controller_name, action)

    def render(self, template=None, values=None, status=200, headers=None,
               **context):
        """
        Render a template through the application's renderer.

        :param template: The name of the template. If not given, the
            template for the current action is used (for example,
            ``store/index.html`` for ``StoreController.index``).
        :param values: A mapping of names to add to the template's
            namespace. Its keys are never taken as arguments of this
            method, so a value named ``status`` or ``template`` is passed
            to the template like any other.
        :param status: The HTTP status code of the response.
        :param headers: Additional response headers.

        Extra keyword arguments are also added to the template's namespace,
        along with the controller's helpers, the controller itself (as
        ``controller``) and the request (as ``request``).

        This function requires an active request context in order to work.
        """
        renderer = getattr(ctx.app, 'renderer', None)
        if renderer is None:
            raise LookupError("No renderer has been configured for the "
                              "application; cannot render templates.")

        template = self.default_template() if template is None else template

        namespace = self.helpers
        if values is not None:
            namespace.update(values)
        namespace.update(context)
        namespace.setdefault('controller', self)
        namespace.setdefault('request', ctx.request)

        return renderer.render(template, namespace, status, headers)

    def process(self, action, url_values):
        """
        Call an action and turn its result into a response.

        :param action: The name of the action method.
        :param url_values: Values parsed from the request URL; they are
            passed to the action as keyword arguments.

        An action may return a response object, which is used as is; a
        string, which is sent as HTML; a mapping, which is rendered with
        the action's default template; or ``None``, which renders the
        default template without extra values.
        """
        if action.startswith("_"):
            raise NotFound
        method = getattr(self, action, None)
        if method is None or not callable(method):
            raise NotFound

        result = method(**url_values)

        if isinstance(result, Response):
            return result
        elif isinstance(result, str):
            return self.response_class(result, mimetype="text/html")
        elif isinstance(result, Mapping):
            return self.render(values=result)
        elif result is None:
            return self.render()
        else:
            raise TypeError("Action {}.{} returned an unsupported value: "
                            "{!r}".format(type(self).__qualname__, action,
                                          result))


__all__ = ['Controller', 'helper']
