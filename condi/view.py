"""
Renderers turn a template name and a namespace into a response. The
controller hands them its helpers as part of the namespace, so that
predicates defined in an action can be called from the template.

:class:`TemplateRenderer` finds templates on a search path and renders
them with :meth:`str.format`. It's mostly useful as a base for
renderers backed by real template engines, such as
:class:`condi.extras.jinja.JinjaRenderer`.
"""

from fnmatch import fnmatch
from os import listdir
from os.path import dirname, basename, isdir, isfile, join

from werkzeug.wrappers import Response


class TemplateRenderer:
    #: A class that is used to construct responses from rendered pages.
    response_class = Response

    def __init__(self, search_path=None, encoding="utf_8"):
        self.encoding = encoding

        if search_path is None:
            self.search_path = ["."]
        elif isinstance(search_path, str):
            self.search_path = [search_path]
        else:
            self.search_path = list(search_path)

    def render(self, template, namespace, status=200, headers=None):
        """
        Render a template into a response.

        :param template: The template name, relative to a directory on
            the search path (for example, ``store/index.html``).
        :param namespace: A dictionary of names available to the template.
        """
        page = self.render_template(template, namespace)
        return self.response_class(page, status=status, headers=headers,
                                   mimetype="text/html")

    def render_template(self, template, namespace):
        d, fname = self.search_for_template(template)

        with open(join(d, fname), encoding=self.encoding) as fh:
            s = fh.read()

        return s.format(**namespace)

    def search_for_template(self, *search_for):
        """
        Scan the search path for a template matching any of the given
        names, which may be glob patterns (``store/index.*``).

        :return: A tuple *(directory, filename)*, where *filename* is
            relative to *directory*.
        :raises LookupError: If no template matches.
        """
        for d in self.search_path:
            for pattern in search_for:
                subdir, name = dirname(pattern), basename(pattern)
                where = join(d, subdir)

                if not isdir(where):
                    continue

                for fname in sorted(listdir(where)):
                    if isfile(join(where, fname)) and fnmatch(fname, name):
                        return d, join(subdir, fname)
        else:
            raise LookupError("No suitable template could be found for: "
                              "{}".format(", ".join(search_for)))


__all__ = ['TemplateRenderer']
