# Controller.py
"""""
Calculator controller: the one object that owns all calculator state.

Responsibilities
----------------
- Own the InputEditor (buffer + result-shown flag) and the HistoryLog
- Route every inbound event (key, button, paste, history click) to exactly
  one editor operation, or to the evaluator for "evaluate"
- Push successful evaluations into the history
- Expose read-only state for the presentation layer: buffer, history, status

All operations run to completion on the caller's thread; a GUI must call
them from its event loop only.
"""""

from . import config_manager as config_manager
from . import error as E
from . import MathEngine as MathEngine
from .History import HistoryEntry, HistoryLog, DEFAULT_CAPACITY
from .InputEditor import InputEditor

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

DIGITS = "0123456789"
OPERATOR_KEYS = "+-*/)"
# An opening parenthesis starts a new group like a digit starts a new number
GROUP_KEYS = "("
EVALUATE_KEYS = ("Enter", "=")
KEY_ALIASES = {"×": "*", "÷": "/", "−": "-", "Return": "Enter"}


def history_capacity():
    """Read the history size setting, falling back to the default on nonsense values."""
    value = config_manager.load_setting_value("history_size")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_CAPACITY
    return value


class Calculator:

    def __init__(self, history_size=None):
        self.editor = InputEditor()
        self._history = HistoryLog(history_size if history_size is not None else history_capacity())
        self.last_outcome = None

    # --- Outbound state ---

    @property
    def buffer(self):
        return self.editor.buffer

    @property
    def result_shown(self):
        return self.editor.result_shown

    @property
    def history(self):
        """Newest first, as an immutable snapshot."""
        return self._history.entries()

    @property
    def history_size(self):
        return self._history.capacity

    @property
    def status(self):
        """Kind of the failure currently on display, or None."""
        if self.editor.failed_expression is None or self.last_outcome is None:
            return None
        return self.last_outcome.kind

    # --- Inbound events ---

    def digit(self, token):
        self.editor.append_digit_or_group(token)

    def operator(self, op):
        self.editor.append_operator(op)

    def decimal(self):
        self.editor.append_decimal()

    def clear(self):
        self.editor.clear()

    def backspace(self):
        self.editor.backspace()

    def evaluate(self):
        """Evaluate the buffer, show the outcome and record successes in the history."""
        outcome = MathEngine.evaluate(self.editor.buffer)
        self.last_outcome = outcome

        if outcome.ok:
            self.editor.show_result(outcome.display)
            self._history.push(HistoryEntry(outcome.expression, outcome.display))
        else:
            self.editor.show_error(outcome.display, outcome.expression)

        if debug == True:
            print(f"{outcome!r} history={len(self._history)}")
        return outcome

    def select_history(self, index):
        """Put a history result back on the display; the history itself stays as is."""
        if not 0 <= index < len(self._history):
            raise E.MathError(f"No history entry at index {index}", code="4004")
        self.editor.show_result(self._history[index].result)

    def resize_history(self, capacity):
        self._history.set_capacity(capacity)

    def reload_history_size(self):
        """Follow the history_size setting after it was edited; nonsense values fall back to the default."""
        capacity = history_capacity()
        if capacity != self._history.capacity:
            self.resize_history(capacity)

    # --- Keyboard / clipboard translation ---

    def handle_key(self, key):
        """Translate one key name into an event. Returns False for keys without meaning."""
        key = KEY_ALIASES.get(key, key)

        if len(key) == 1 and (key in DIGITS or key in GROUP_KEYS):
            self.digit(key)
        elif len(key) == 1 and key in OPERATOR_KEYS:
            self.operator(key)
        elif key in EVALUATE_KEYS:
            self.evaluate()
        elif key == "Backspace":
            self.backspace()
        elif key == ".":
            self.decimal()
        elif key in ("c", "C"):
            self.clear()
        else:
            return False
        return True

    def paste(self, text, evaluate=False):
        """Type the given text key by key; returns how many keys were accepted.

        With evaluate=True the buffer is evaluated afterwards, unless the pasted
        text already left a result on the display (it ended in "=").
        """
        accepted = 0
        for char in text:
            if self.handle_key(char):
                accepted += 1
        if evaluate and accepted and not self.editor.result_shown:
            self.evaluate()
        if debug == True:
            print(f"Pasted {accepted} of {len(text)} characters")
        return accepted


def console_main():
    """Line based front end: every line is typed in as keystrokes, the display is printed after it."""
    calculator = Calculator()
    print("Type keys (digits, + - * / ( ) . = c), 'q' to quit.")
    print(calculator.buffer)
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if line.strip().lower() == "q":
            break
        calculator.paste(line)
        print(calculator.buffer)
