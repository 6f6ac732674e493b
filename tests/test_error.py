from Calc import error as E


def test_error_hierarchy():
    assert issubclass(E.UnbalancedError, E.SyntaxError)
    assert issubclass(E.SyntaxError, E.MathError)
    assert issubclass(E.CalculationError, E.MathError)


def test_error_carries_code_and_equation():
    error = E.CalculationError("Division by zero", code="3003", equation="5/0")
    assert error.message == "Division by zero"
    assert error.code == "3003"
    assert error.equation == "5/0"
    assert str(error) == "Division by zero"


def test_describe():
    error = E.CalculationError("Division by zero", code="3003")
    assert E.describe(error) == "Calculator Error 3003: Division by Zero"
    assert E.describe(E.MathError("boom")) == "Unexpected Error 9999: Unexpected Error:"
