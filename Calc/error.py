


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class SyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass

class UnbalancedError(SyntaxError):
    pass



# Fixed texts that replace the display after a failed evaluation
UNBALANCED_TEXT = "Error: Unbalanced parentheses"
MATH_ERROR_TEXT = "Error"



Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Required file missing: ", # + File name

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3008" : "More than one '.' in one number.",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Invalid number: ", # + Literal
    "3026" : "Result is not a finite number.",
    "3027" : "Missing Number.",
    "3031" : "Empty expression.",

    "4004" : "History entry not found: ", # + Index
    "4005" : "Empty token.",

    "5001" : "Settings could not be saved: ", # + Reason

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return the user facing text for a MathError: category, message and details."""
    category = Error_Dictionary.get(str(error.code)[:1], "Unknown Error")
    text = ERROR_MESSAGES.get(error.code, "Unknown error")
    return f"{category} {error.code}: {text}".strip()
