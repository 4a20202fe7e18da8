import pytest

from histcalc import Calculator


@pytest.fixture
def calc():
    return Calculator()


@pytest.fixture
def press(calc):
    """Feed a sequence of tokens to the calculator fixture."""

    def _press(*tokens):
        for token in tokens:
            calc.handle_token(token)
        return calc

    return _press
