import uuid

from werkzeug.utils import cached_property
from werkzeug.wrappers import Request as Request_


class Request(Request_):
    """A default request class for wrapping WSGI environs."""

    #: The maximum allowed content-length for the requests is set to
    #: 10MB by default.
    max_content_length = 1024 * 1024 * 10

    @cached_property
    def identity(self):
        """
        An opaque token that identifies this request, and no other.

        Predicates compare it to find out whether they are being called
        in the request that defined them. It is generated the first time
        it is read and stays the same for the lifetime of the request.
        """
        return uuid.uuid4().hex


__all__ = ['Request']
