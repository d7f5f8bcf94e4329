import pytest

from condi.utils import controller_name_for, to_snake_case


@pytest.mark.parametrize("name,expected", [
    ("Store", "store"),
    ("StoreItems", "store_items"),
    ("HTTPResponse", "http_response"),
    ("already_snake", "already_snake"),
])
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected

def test_controller_name_for():
    class StoreItemsController:
        pass

    class Controller:
        pass

    class Checkout:
        pass

    assert controller_name_for(StoreItemsController) == "store_items"
    assert controller_name_for(Controller) == "controller"
    assert controller_name_for(Checkout) == "checkout"
