# MathEngine.py
"""""
Core calculation engine for the Keystroke Calculator.

Pipeline
--------
1) Normalizer: maps display glyphs (×, ÷, −) to computable operators.
2) Balance check: rejects unbalanced parentheses before any parsing.
3) Tokenizer: converts the expression string into a flat list of tokens.
4) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
5) Evaluator: walks the tree with float (double precision) arithmetic.
6) Formatter: renders the float the way the platform's number-to-string does.

Only numeric literals, + - * / and parentheses exist in the grammar.
Nothing in the expression text is ever executed.
"""""

import math
from decimal import Decimal

from . import config_manager as config_manager
from . import error as E

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

# Supported operators (kept as simple lists for quick membership checks)
Operations = ["+", "-", "*", "/"]
Brackets = ["(", ")"]
Digits = "0123456789"

# Display glyphs that the keypad may show instead of the computable operator
GLYPHS = {"×": "*", "÷": "/", "−": "-"}


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isInt(zahl):
    """Return True if the given string can be parsed as int; else False."""
    try:
        int(zahl)
        return True
    except ValueError:
        return False


def isDigit(zeichen):
    """Return True for a single ASCII digit; other Unicode digits are not part of a literal."""
    return len(zeichen) == 1 and zeichen in Digits


def isOp(zahl):
    """Return index of a known binary operator or -1 if unknown."""
    try:
        return Operations.index(zahl)
    except ValueError:
        return -1


def normalize_expression(problem):
    """Replace display-only operator glyphs by the operators the engine computes with."""
    for glyph, operator in GLYPHS.items():
        problem = problem.replace(glyph, operator)
    return problem


def is_balanced(expression):
    """Return True if every '(' has a properly nested ')'.

    Uses a plain depth counter, so arbitrarily deep nesting is fine.
    A ')' seen at depth 0 fails immediately.
    """
    depth = 0
    for char in expression:
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                return False
            depth -= 1
    return depth == 0


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for a numeric literal backed by float."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self):
        """Return float value for this literal."""
        return self.value

    def __repr__(self):
        return f"Number({self.value!r})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        """Evaluate the left-deep chain (1+2+3+...) in a loop, right operands recursively.

        Sums and products of any length only recurse as deep as their parentheses.
        """
        kette = []
        knoten = self
        while isinstance(knoten, BinOp):
            kette.append(knoten)
            knoten = knoten.left

        ergebnis = knoten.evaluate()
        for binop in reversed(kette):
            ergebnis = binop.apply(ergebnis, binop.right.evaluate())
        return ergebnis

    def apply(self, left_value, right_value):
        """Apply this node's operator to two already evaluated operands."""
        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '/':
            if right_value == 0:
                raise E.CalculationError("Division by zero", code = "3003")
            return left_value / right_value
        else:
            raise E.CalculationError(f"Unknown operator: {self.operator}", code="3004")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class Negate:
    """AST node for unary minus on a sub-expression."""
    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        return -self.operand.evaluate()

    def __repr__(self):
        return f"Negate({self.operand})"


# -----------------------------
# Tokenizer
# -----------------------------

def translator(problem):
    """Convert an expression string into a token list (floats, operators, parentheses).

    Numeric literals are digits with an optional fraction and an optional
    exponent ("1e+21"), so a rendered result can be edited and evaluated again.
    Whitespace is skipped; any other character is rejected.
    """
    full_problem = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers: digits, decimal separator, exponent ---
        if isDigit(current_char) or current_char == ".":
            str_number = current_char
            hat_schon_komma = current_char == "."  # Only one dot allowed in a numeric literal

            while (b + 1 < len(problem)) and (isDigit(problem[b + 1]) or problem[b + 1] == "."):
                if problem[b + 1] == ".":
                    if hat_schon_komma:
                        raise E.SyntaxError("Double comma sign.", code = "3008")
                    hat_schon_komma = True

                b += 1
                str_number += problem[b]

            # Exponent part: e / E, optional sign, at least one digit
            if b + 1 < len(problem) and problem[b + 1] in "eE":
                c = b + 2
                if c < len(problem) and problem[c] in "+-":
                    c += 1
                if c < len(problem) and isDigit(problem[c]):
                    while c < len(problem) and isDigit(problem[c]):
                        c += 1
                    str_number += problem[b + 1:c]
                    b = c - 1

            try:
                full_problem.append(float(str_number))
            except ValueError:
                raise E.SyntaxError(f"Invalid number: {str_number}", code = "3012")

        # --- Operators ---
        elif isOp(current_char) != -1:
            full_problem.append(current_char)

        # --- Parentheses ---
        elif current_char in Brackets:
            full_problem.append(current_char)

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        # --- Everything else: identifiers, '=', ',', '^', ... ---
        else:
            raise E.SyntaxError(f"Unexpected token: {current_char}", code = "3011")

        b = b + 1

    return full_problem


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def ast(received_string):
    """Parse an expression string into an AST.
    Implements precedence via nested functions: factor → unary → term → sum.
    """
    analysed = translator(received_string)

    if debug == True:
        print(analysed)

    if not analysed:
        raise E.CalculationError("Empty expression.", code = "3031")

    # ---- Parsing functions in precedence order ----

    def parse_factor(tokens):
        """Numbers and sub-expressions in '()'."""
        if len(tokens) > 0:
            token = tokens.pop(0)
        else:
            raise E.CalculationError("Missing Number.", code = "3027")

        # Parenthesized sub-expression
        if token == "(":
            baum_in_der_klammer = parse_sum(tokens)
            if not tokens or tokens.pop(0) != ')':
                raise E.SyntaxError("Missing closing parenthesis ')'", code = "3009")
            return baum_in_der_klammer

        # Literals
        elif isinstance(token, float):
            return Number(token)
        else:
            raise E.SyntaxError(f"Unexpected token: {token}", code = "3011")

    def parse_unary(tokens):
        """Handle leading '+'/'-'."""
        if tokens and tokens[0] in ('+', '-'):
            operator = tokens.pop(0)
            operand = parse_unary(tokens)

            if operator == '-':
                # Optimize for literal: -Number → Number(-value)
                if isinstance(operand, Number):
                    return Number(-operand.evaluate())
                return Negate(operand)
            else:
                return operand
        return parse_factor(tokens)

    def parse_term(tokens):
        """Multiplication and division."""
        aktueller_baum = parse_unary(tokens)
        while tokens and tokens[0] in ("*", "/"):
            operator = tokens.pop(0)
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_sum(tokens):
        """Addition and subtraction."""
        aktueller_baum = parse_term(tokens)
        while tokens and tokens[0] in ("+", "-"):
            operator = tokens.pop(0)
            rechte_seite = parse_term(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechte_seite)
        return aktueller_baum

    # Build the final AST
    finaler_baum = parse_sum(analysed)

    # Leftovers mean juxtaposition like "2(3)" or a stray ')'
    if analysed:
        raise E.SyntaxError(f"Unexpected token: {analysed[0]}", code = "3011")

    if debug == True:
        print("Final AST:")
        print(finaler_baum)

    return finaler_baum


# -----------------------------
# Result formatting
# -----------------------------

def render_number(value):
    """Render a finite float like the platform's native number-to-string conversion.

    Uses the shortest digits that round-trip (Python's repr), then lays them out:
    plain notation for decimal exponents in [-7, 21), scientific otherwise
    ("1e+21", "1.5e-7"). Integral values carry no ".0"; -0 renders as "0".
    """
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # position of the decimal point relative to the digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return sign + body


# -----------------------------
# Evaluation outcome
# -----------------------------

class EvaluationOutcome:
    """Tagged result of evaluate(): Success, UnbalancedError or MathError.

    `display` is the text the buffer shows afterwards, `expression` the
    normalized text that was evaluated. `value` is set on success only,
    `error` (an E.MathError) on failure only.
    """
    SUCCESS = "Success"
    UNBALANCED = "UnbalancedError"
    MATH_ERROR = "MathError"

    def __init__(self, kind, expression, display, value=None, error=None):
        self.kind = kind
        self.expression = expression
        self.display = display
        self.value = value
        self.error = error

    @property
    def ok(self):
        return self.kind == self.SUCCESS

    def __repr__(self):
        return f"EvaluationOutcome({self.kind!r}, expression={self.expression!r}, display={self.display!r})"


# -----------------------------
# Public entry points
# -----------------------------

def calculate(problem):
    """Parse and evaluate a normalized expression; return a finite float or raise E.MathError."""
    finaler_baum = ast(problem)
    try:
        ergebnis = finaler_baum.evaluate()
    except RecursionError:
        raise E.CalculationError("Expression nested too deeply.", code = "3026", equation=problem)

    if not math.isfinite(ergebnis):
        raise E.CalculationError(f"Result is not finite: {ergebnis}", code = "3026")
    return ergebnis


def evaluate(buffer):
    """Main API: normalize → balance check → parse → evaluate → render.

    Never raises: every failure is folded into an EvaluationOutcome.
    """
    expression = normalize_expression(buffer)

    if not is_balanced(expression):
        code = "3010" if expression.count(")") >= expression.count("(") else "3009"
        error = E.UnbalancedError("Unbalanced parentheses", code=code, equation=expression)
        if debug == True:
            print(f"Unbalanced: {expression}")
        return EvaluationOutcome(EvaluationOutcome.UNBALANCED, expression, E.UNBALANCED_TEXT, error=error)

    try:
        ergebnis = calculate(expression)

    # Our domain errors: attach the source equation
    except E.MathError as e:
        e.equation = expression
        if debug == True:
            print(f"Error {e.code}: {e.message}")
        return EvaluationOutcome(EvaluationOutcome.MATH_ERROR, expression, E.MATH_ERROR_TEXT, error=e)

    # Convert unexpected Python exceptions (RecursionError while parsing, ...) to our unified error type
    except Exception as e:
        error = E.MathError(message=str(e).strip(), code="9999", equation=expression)
        if debug == True:
            print(f"Unexpected error: {e!r}")
        return EvaluationOutcome(EvaluationOutcome.MATH_ERROR, expression, E.MATH_ERROR_TEXT, error=error)

    return EvaluationOutcome(EvaluationOutcome.SUCCESS, expression, render_number(ergebnis), value=ergebnis)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    outcome = evaluate(problem)
    print(outcome.display)


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m Calc.MathEngine
    test_main()
