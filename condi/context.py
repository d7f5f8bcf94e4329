"""
This module stores request context variables. That is, variables whose
values are assigned during the handling of a request and then cleared
immediately after the request is done.

.. important:: With exception of *ctx*, all of the variables documented
   here are proxies to attributes of *ctx*. For example, *app* is a
   proxy to *ctx.app*.
"""

from werkzeug.local import Local


#: A global request context local that can be used by anyone to store
#: data about the current request. Data stored on this object will be
#: cleared automatically at the end of each request and can only be
#: seen in the same thread (or task) that set the data.
ctx = Local()

# A bunch of context local proxies

#: The :py:class:`condi.App` instance that responded to the request.
app = ctx('app')

#: An object representing the current request and a subclass of
#: :py:data:`condi.App.request_class`.
request = ctx('request')

#: An object representing a :py:class:`werkzeug.routing.MapAdapter` for
#: the current request that can be used to build URLs.
url_adapter = ctx('url_adapter')

#: The :py:class:`~condi.dispatcher.Dispatcher` that the matched route
#: belongs to.
dispatcher = ctx('dispatcher')

#: The :py:class:`~condi.controller.Controller` instance handling the
#: current request.
controller = ctx('controller')

#: The name of the controller action the current request is routed to.
action = ctx('action')

#: A dictionary of values that have been extracted from the request path
#: by matching it against a URL rule.
url_values = ctx('url_values')


def request_identity():
    """
    Return the identity token of the request being handled, or ``None``
    if there is no active request context.
    """
    req = getattr(ctx, 'request', None)
    return None if req is None else req.identity


__all__ = ['ctx', 'app', 'request', 'url_adapter', 'dispatcher',
           'controller', 'action', 'url_values', 'request_identity']
