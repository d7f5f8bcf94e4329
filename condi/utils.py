import re


# stackoverflow.com/questions/elegant-python-function-to-convert-camelcase-to-camel-case/1176023#1176023
def to_snake_case(name):
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()


def controller_name_for(cls):
    """
    Derive the conventional name of a controller class: its class name
    in snake case, without a trailing ``Controller``.

    >>> class StoreItemsController: pass
    >>> controller_name_for(StoreItemsController)
    'store_items'

    """
    name = cls.__name__
    if name.endswith("Controller") and name != "Controller":
        name = name[:-len("Controller")]
    return to_snake_case(name)
