"""
Helper implementations of content-handling 'functions'. The module
exposes :class:`ErrorHandler`, which acts like a function that converts
exceptions to responses, but allows handlers to be registered per
exception type.

Condi applications are not required to use it, and may use any callable
in its place.
"""

from collections.abc import Callable


class HandlerAggregator:
    def __init__(self):
        self.handlers = {}

    def register(self, key, handler=None):
        def register_handler(handler):
            self.handlers[key] = handler
            return handler

        if handler is None:
            return register_handler

        else:
            if not isinstance(handler, Callable):
                raise ValueError("Argument handler: must be callable.")

            return register_handler(handler)


class ErrorHandler(HandlerAggregator):
    """
    A generic implementation of an error handler 'function'.

    A :class:`ErrorHandler` collects handler functions for specific
    exception types, so that when it is called, it looks up the
    appropriate handler for the exception that it is called with.
    The handler used is the closest superclass of the exception's type.
    If no handler was registered for the exception, then it is raised
    again.

    """

    def register(self, err_type, handler=None):
        """
        Register a handler function for a particular exception type and
        its subclasses.

        :param err_type: A type of Exception
        :type: BaseException or subclass.
        :handler: A function that will handle errors of the given type.
        :type handler: func(e):Response

        This method is also usable as a decorator factory::

            handler = ErrorHandler()
            @handler.register(ValueError)
            def handle_value_err(e):
                # Handle a value error
                pass

        """
        if not (isinstance(err_type, type)
                and issubclass(err_type, BaseException)):
            raise ValueError("Argument 'err_type': must be an "
                             "exception type.")
        return super().register(err_type, handler)

    def choose_best_handler(self, err):
        # Try to find the most specific error handler for this exception
        best_htype = None

        for htype in self.handlers:
            if isinstance(err, htype):
                if best_htype is None or issubclass(htype, best_htype):
                    best_htype = htype

        if best_htype is not None:
            return self.handlers[best_htype]

        else:
            # Re-raise the exception
            raise err

    def __call__(self, err):
        handler = self.choose_best_handler(err)
        return handler(err)


__all__ = ["ErrorHandler"]
