"""
Include :class:`Condi` in a controller to define predicates or synonyms
within an action, which can then be used in the action's template::

    class StoreController(Condi, Controller):
        def index(self):
            cart = load_cart()

            @self.predicate
            def show_free_shipping():
                return self.customer.is_new and cart.amount > 100

            @self.synonym("css_for_item_status")
            def css_for(item):
                if item.status == "shipped":
                    if "arrived" not in delivery_status(item):
                        return "shipping"
                    return "shipped"
                return "processing"

The template for the action can then call ``show_free_shipping()`` and
``css_for_item_status(item)``.

.. important:: Predicates are attached to the controller *class*, but
   their implementations are kept in the request context, and they
   may only be called during the request they were defined in. Calling
   one in any other request raises :class:`StaleScopeError`, which keeps
   the closure from leaking data from a previous request when a
   controller outlives it.
"""

import logging

from condi.context import ctx


logger = logging.getLogger(__name__)

_missing = object()


class OutsideRequestError(RuntimeError):
    """
    Raised when a predicate is defined while no request is being
    handled, so there is no request for it to be bound to.
    """


class StaleScopeError(RuntimeError):
    """
    Raised when a predicate is called outside of the request that it was
    defined in.

    :ivar method_name: The name of the predicate.
    :ivar defined_in: The identity of the request that defined it.
    :ivar called_in: The identity of the request it was called in, or
        ``None`` if it was called outside of any request.
    """
    def __init__(self, method_name, defined_in, called_in):
        super().__init__(
            "predicate '{}' cannot be called outside of the request scope it "
            "was defined in ({}). please redefine the predicate in this "
            "request scope ({}).".format(method_name, defined_in, called_in)
        )
        self.method_name = method_name
        self.defined_in = defined_in
        self.called_in = called_in


class Condi:
    """
    A controller mixin for defining request-scoped view helpers.

    The class it is mixed into must provide a
    ``current_request_identity()`` method and a ``helper_method()``
    classmethod, as :class:`condi.controller.Controller` does.
    """

    def predicate(self, method_name, func=None):
        """
        Define a method on the controller that is callable from the
        related view, and that is expected to return ``True`` or
        ``False``.

        :param method_name: The name of the method. It must be a valid
            Python identifier. If a function is passed here instead, its
            ``__name__`` is used and the function is defined right away.
        :param func: The function that implements the method. It may
            take any arguments and close over the action's local
            variables. If not given, a decorator is returned.
        :return: *func*, unchanged.

        Defining a method with a name that was defined before replaces
        the earlier definition.

        This method may be used as a decorator, with or without a name::

            @self.predicate
            def is_mary():
                return name == "Mary"

            @self.predicate("shipping")
            def shipping(item):
                return item.status == "shipped"

        :raises OutsideRequestError: If no request is being handled.
        :raises ValueError: If the name isn't a valid identifier, or if
            it is already taken by something that is not a predicate,
            such as an action or a method of the controller.
        """
        if callable(method_name) and func is None:
            func, method_name = method_name, method_name.__name__

        def decorator(func):
            self._define_request_scoped(method_name, func)
            return func

        if func is not None:
            return decorator(func)

        else:
            return decorator

    #: A synonym is the same as a predicate, but it is meant to return
    #: values other than ``True`` or ``False``.
    synonym = predicate

    def _define_request_scoped(self, method_name, func):
        if not isinstance(method_name, str) or not method_name.isidentifier():
            raise ValueError("Argument 'method_name': must be a valid "
                             "identifier, got {!r}.".format(method_name))
        if not callable(func):
            raise ValueError("Argument 'func': must be callable.")

        cls = type(self)

        # Only names that are free, or already taken by a predicate, can
        # be (re)defined.
        existing = getattr(cls, method_name, _missing)
        if (existing is not _missing
                and not hasattr(existing, '_condi_request')) \
                or method_name in getattr(self, '__dict__', {}):
            raise ValueError(
                "predicate '{}' would replace an existing attribute of "
                "{}.".format(method_name, cls.__qualname__))

        # The request identity at the moment the predicate is defined
        defined_in = self.current_request_identity()
        if defined_in is None:
            raise OutsideRequestError(
                "predicate '{}' can only be defined while a request is "
                "being handled.".format(method_name))

        registry = getattr(ctx, 'condi_predicates', None)
        if registry is None:
            ctx.condi_predicates = registry = {}
        registry[cls, method_name] = defined_in, func

        member = cls.__dict__.get(method_name)
        if member is None:
            member = _request_scoped_member(cls, method_name)
            setattr(cls, method_name, member)
        member._condi_request = defined_in
        cls.helper_method(method_name)

        logger.debug("Defined %s.%s for request %s",
                     cls.__qualname__, method_name, defined_in)


def _request_scoped_member(owner, method_name):
    # The implementation lives in the request context, so the class
    # never holds on to a closure over request data.
    def member(self, *args, **kwargs):
        called_in = self.current_request_identity()
        registry = getattr(ctx, 'condi_predicates', {})
        defined_in, func = registry.get((owner, method_name),
                                        (member._condi_request, None))
        if func is None or called_in != defined_in:
            raise StaleScopeError(method_name, defined_in, called_in)
        return func(*args, **kwargs)

    member.__name__ = method_name
    member.__qualname__ = "{}.{}".format(owner.__qualname__, method_name)
    member._condi_request = None
    return member


__all__ = ['Condi', 'StaleScopeError', 'OutsideRequestError']
