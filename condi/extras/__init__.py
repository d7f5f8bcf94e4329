from warnings import warn

try:
    from .jinja import *  # flake8: noqa
except ImportError:
    warn("Jinja2 templates are not available. "
         "Run `pip install jinja2` to enable.")
