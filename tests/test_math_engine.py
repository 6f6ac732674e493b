import pytest

from Calc import MathEngine
from Calc import error as E
from Calc.MathEngine import EvaluationOutcome


@pytest.mark.parametrize("expression", ["", "(1+2)", "((1)+(2))", "2*(3+(4-1))"])
def test_is_balanced_true(expression):
    assert MathEngine.is_balanced(expression)


@pytest.mark.parametrize("expression", ["(1+2", "1+2)", ")(", "((1)", "())("])
def test_is_balanced_false(expression):
    assert not MathEngine.is_balanced(expression)


def test_is_balanced_deep_nesting():
    depth = 10000
    assert MathEngine.is_balanced("(" * depth + "1" + ")" * depth)
    assert not MathEngine.is_balanced("(" * depth + "1" + ")" * (depth - 1))


@pytest.mark.parametrize("expression, expected", [
    ("2+3*4", "14"),
    ("(2+3)*4", "20"),
    ("10-4-3", "3"),
    ("8/4/2", "1"),
    ("2*3-4/2", "4"),
    ("-3+5", "2"),
    ("-(2+3)", "-5"),
    ("2*-3", "-6"),
    ("+7", "7"),
    ("0.1+0.2", "0.30000000000000004"),
    ("1/3", "0.3333333333333333"),
    ("5.", "5"),
    (".5*2", "1"),
    ("007+1", "8"),
    (" 1 + 1 ", "2"),
    ("1e+21*10", "1e+22"),
    ("2.5e-3*2", "0.005"),
    ("0-0", "0"),
])
def test_evaluate_success(expression, expected):
    outcome = MathEngine.evaluate(expression)
    assert outcome.kind == EvaluationOutcome.SUCCESS
    assert outcome.ok
    assert outcome.display == expected
    assert outcome.error is None


def test_evaluate_normalizes_display_glyphs():
    outcome = MathEngine.evaluate("3×4÷2−1")
    assert outcome.display == "5"
    assert outcome.expression == "3*4/2-1"


@pytest.mark.parametrize("expression, code", [
    ("5/0", "3003"),
    ("0/0", "3003"),
    ("1/(2-2)", "3003"),
    ("1e308*10", "3026"),
    ("", "3031"),
    ("2+", "3027"),
    ("()", "3011"),
    ("2(3)", "3011"),
    ("(1)(2)", "3011"),
    ("2**3", "3011"),
    ("1.2.3", "3008"),
    ("x+1", "3011"),
    ("__import__('os')", "3011"),
    ("1=1", "3011"),
    ("Error", "3011"),
])
def test_evaluate_math_error(expression, code):
    outcome = MathEngine.evaluate(expression)
    assert outcome.kind == EvaluationOutcome.MATH_ERROR
    assert outcome.display == E.MATH_ERROR_TEXT
    assert outcome.value is None
    assert outcome.error.code == code
    assert outcome.error.equation == expression


@pytest.mark.parametrize("expression, code", [
    ("(1+2", "3009"),
    ("1+2)", "3010"),
    (")(", "3010"),
])
def test_evaluate_unbalanced(expression, code):
    outcome = MathEngine.evaluate(expression)
    assert outcome.kind == EvaluationOutcome.UNBALANCED
    assert outcome.display == E.UNBALANCED_TEXT
    assert isinstance(outcome.error, E.UnbalancedError)
    assert outcome.error.code == code


def test_evaluate_never_raises_on_deep_nesting():
    depth = 5000
    outcome = MathEngine.evaluate("(" * depth + "1" + ")" * depth)
    assert outcome.kind == EvaluationOutcome.MATH_ERROR
    assert outcome.display == E.MATH_ERROR_TEXT


def test_calculate_raises_domain_errors():
    with pytest.raises(E.CalculationError) as excinfo:
        MathEngine.calculate("1/0")
    assert excinfo.value.code == "3003"

    with pytest.raises(E.SyntaxError):
        MathEngine.calculate("1+a")


def test_translator_tokens():
    assert MathEngine.translator("12.5*(3-1e2)") == [12.5, "*", "(", 3.0, "-", 100.0, ")"]


def test_translator_exponent_needs_digits():
    # "2e" is not a number with an exponent, the 'e' is left over
    with pytest.raises(E.SyntaxError) as excinfo:
        MathEngine.translator("2e+")
    assert excinfo.value.code == "3011"


def test_ast_precedence_shape():
    tree = MathEngine.ast("1+2*3")
    assert isinstance(tree, MathEngine.BinOp)
    assert tree.operator == "+"
    assert isinstance(tree.right, MathEngine.BinOp)
    assert tree.right.operator == "*"


def test_ast_folds_negative_literal():
    tree = MathEngine.ast("-4")
    assert isinstance(tree, MathEngine.Number)
    assert tree.evaluate() == -4.0
    assert isinstance(MathEngine.ast("-(4)"), MathEngine.Number)
    assert isinstance(MathEngine.ast("-(4+1)"), MathEngine.Negate)


@pytest.mark.parametrize("value, expected", [
    (14.0, "14"),
    (-2.5, "-2.5"),
    (100.0, "100"),
    (0.0, "0"),
    (-0.0, "0"),
    (0.000001, "0.000001"),
    (1e-7, "1e-7"),
    (1.5e-7, "1.5e-7"),
    (1e21, "1e+21"),
    (-1.25e22, "-1.25e+22"),
    (123456789012345680000.0, "123456789012345680000"),
    (9007199254740992.0, "9007199254740992"),
    (1e16, "10000000000000000"),
    (0.1, "0.1"),
])
def test_render_number(value, expected):
    assert MathEngine.render_number(value) == expected


def test_evaluate_long_flat_sum():
    outcome = MathEngine.evaluate("1+" * 1500 + "1")
    assert outcome.ok
    assert outcome.display == "1501"


def test_evaluate_long_mixed_chain():
    assert MathEngine.evaluate("2*3-5+" * 1000 + "0").display == "1000"
    assert MathEngine.evaluate("1*" * 2000 + "7").display == "7"


@pytest.mark.parametrize("expression", ["٣+１", "１", "1+٣", "2e٣", "۱.5"])
def test_evaluate_rejects_non_ascii_digits(expression):
    outcome = MathEngine.evaluate(expression)
    assert outcome.kind == EvaluationOutcome.MATH_ERROR
    assert outcome.error.code == "3011"
