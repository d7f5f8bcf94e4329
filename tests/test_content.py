import pytest

from condi.content import ErrorHandler


@pytest.fixture
def handler():
    return ErrorHandler()


def test_most_specific_handler(handler):
    handler.register(Exception, lambda e: "exception")
    handler.register(LookupError, lambda e: "lookup")

    assert handler(KeyError()) == "lookup"
    assert handler(ValueError()) == "exception"

def test_decorator_factory(handler):
    @handler.register(ValueError)
    def on_value_error(e):
        return "value"

    assert on_value_error(None) == "value"
    assert handler(ValueError()) == "value"

def test_unhandled_reraised(handler):
    handler.register(LookupError, lambda e: "lookup")
    err = ValueError("unhandled")

    with pytest.raises(ValueError) as excinfo:
        handler(err)

    assert excinfo.value is err

@pytest.mark.parametrize("err_type", [str, ValueError(), "ValueError"])
def test_register_non_exception(handler, err_type):
    with pytest.raises(ValueError):
        handler.register(err_type, lambda e: None)

def test_register_non_callable(handler):
    with pytest.raises(ValueError):
        handler.register(ValueError, "not callable")
