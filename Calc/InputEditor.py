# InputEditor.py
"""""
Expression entry state machine.

The InputEditor owns the expression under construction (`buffer`) and the
result-shown flag. Every keystroke maps to exactly one method here; each
method is a complete state transition without I/O.

Rules kept by the editor
------------------------
- The buffer is never empty; it falls back to "0".
- A binary operator typed after a binary operator replaces it.
- Only one '.' per numeric segment (text between operators/parentheses).
- After a result (or error) is shown, the next edit starts from it, see the
  individual methods.
"""""

import re

from . import error as E

DEFAULT_BUFFER = "0"
BINARY_OPERATORS = "+-*/"
OPERATORS = BINARY_OPERATORS + "()"

# Splits the buffer into numeric segments
SEGMENT_SPLIT = re.compile(r"[+\-*/()]")


class InputEditor:

    def __init__(self):
        self.buffer = DEFAULT_BUFFER
        self.result_shown = False
        # Text that failed evaluation while an error message is displayed
        self.failed_expression = None

    def __repr__(self):
        return f"InputEditor(buffer={self.buffer!r}, result_shown={self.result_shown})"

    def _leave_result(self):
        self.result_shown = False
        self.failed_expression = None

    def append_digit_or_group(self, token):
        """Append a digit (or any self-contained display unit); replaces a shown result or the lone "0"."""
        if not token:
            raise E.CalculationError("Empty token.", code="4005")

        if self.result_shown:
            self.buffer = token
            self._leave_result()
        elif self.buffer == DEFAULT_BUFFER:
            self.buffer = token
        else:
            self.buffer += token

    def append_operator(self, op):
        """Append one of + - * / ( ).

        A binary operator following a binary operator substitutes it instead of
        stacking up. Parentheses always append. A shown result is continued,
        a shown error continues from the expression that failed.
        """
        if op not in OPERATORS or len(op) != 1:
            raise E.CalculationError(f"Invalid operator: {op}", code="3004")

        if self.result_shown:
            if self.failed_expression is not None:
                self.buffer = self.failed_expression
            self._leave_result()

        if op in BINARY_OPERATORS and self.buffer[-1] in BINARY_OPERATORS:
            self.buffer = self.buffer[:-1] + op
            return

        self.buffer += op

    def append_decimal(self):
        """Append '.' unless the current numeric segment already has one."""
        if self.result_shown:
            self.buffer = "0."
            self._leave_result()
            return

        last_segment = SEGMENT_SPLIT.split(self.buffer)[-1]
        if "." not in last_segment:
            self.buffer += "."

    def clear(self):
        self.buffer = DEFAULT_BUFFER
        self._leave_result()

    def backspace(self):
        """Remove the last character; a shown result is cleared as a whole."""
        if self.result_shown:
            self.clear()
            return

        self.buffer = self.buffer[:-1] or DEFAULT_BUFFER

    def show_result(self, text):
        """Display a finished value (evaluation result or reused history entry)."""
        self.buffer = text
        self.result_shown = True
        self.failed_expression = None

    def show_error(self, text, expression):
        """Display an error message, remembering the expression that caused it."""
        self.buffer = text
        self.result_shown = True
        self.failed_expression = expression
