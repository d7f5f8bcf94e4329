from os.path import join, getmtime

from jinja2 import Environment, BaseLoader, TemplateNotFound

from condi.view import TemplateRenderer


class JinjaRenderer(TemplateRenderer, BaseLoader):
    """
    A renderer that uses Jinja2 templates found on its search path.

    Helpers exposed by the controller (including predicates and synonyms
    defined in the action) are plain callables in the template::

        {% if show_free_shipping() %}
          <p>Free shipping!</p>
        {% endif %}
        {% for item in items %}
          <li class="{{ css_for_item_status(item) }}">{{ item.name }}</li>
        {% endfor %}

    """
    def __init__(self, search_path=None, encoding="utf_8", **env_args):
        super(JinjaRenderer, self).__init__(search_path, encoding=encoding)
        self.env = Environment(loader=self, **env_args)

    def render_template(self, template, namespace):
        return self.env.get_template(template).render(**namespace)

    def get_source(self, environment, template):
        try:
            path = join(*self.search_for_template(template))
        except LookupError:
            msg = "Could not find a template named: {0}".format(template)
            raise TemplateNotFound(msg)
        else:
            with open(path, encoding=self.encoding) as fh:
                source = fh.read()
            mtime = getmtime(path)
            return source, path, lambda: mtime == getmtime(path)


__all__ = 'JinjaRenderer',
