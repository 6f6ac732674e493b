# UI.py
""""PySide6 user interface for the Keystroke Calculator.

Structure
---------
- Calculator UI: main window with display, button grid and history panel
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Translate button clicks and key presses into Controller events
- Render the Controller's buffer and history after every event
- Show evaluation errors as dialogs (optional, "error_dialog" setting)
- Keep the display readable (auto-resizing font, dark/light mode)
- Clipboard integration and optional auto-evaluate after paste


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (e.g. minimum history size)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation is cheap and runs directly in the Qt event handler. The Controller
is only ever touched from the UI thread.
"""""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt
import sys
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module
from .Controller import Calculator


# Keypad glyphs that differ from the key the Controller understands
BUTTON_KEYS = {"×": "*", "÷": "/", "⌫": "Backspace", "=": "Enter"}

# Qt keys without a printable text
QT_KEYS = {
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
    Qt.Key.Key_Backspace: "Backspace",
}

DARK_BUTTON = "background-color: #121212; color: white; font-weight: bold;"
EQUALS_BUTTON = "background-color: #007bff; color: white; font-weight: bold;"


def shift_pressed():
    """Small check, whether shift is held while a widget was clicked."""
    return bool(QtWidgets.QApplication.keyboardModifiers() & Qt.KeyboardModifier.ShiftModifier)


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window and saving the new settings.

    All of the Settings can be seperated into two categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as an Integer, e.g. the history size)

    """""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Dictionary, in which all of the Widgets (Setting options) are saved and stored.

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + " (min. 1):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            # --- Handle Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- Handle Input Fields (like 'history_size') ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                text = widget.text().strip()
                if text == "":
                    continue  # Keep the old value
                if not MathEngine.isInt(text) or int(text) < 1:
                    self.show_error(E.MathError(f"{key_value} needs a whole number >= 1, got '{text}'", code="5001"))
                    return
                setting_value_list[key_value] = int(text)

        if not config_manager.save_setting(setting_value_list):
            self.show_error(E.MathError("config.json is not writable", code="5001"))
            return
        self.accept()

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Warning)
        error_box.setWindowTitle("Settings error")
        error_box.setText(E.describe(error_obj))
        error_box.setInformativeText(error_obj.message)
        error_box.exec()

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")  # Revert to default stylesheet


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self, calculator=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Core State ---
        # All calculator state lives in the Controller; the window only renders it
        self.calculator = calculator or Calculator()
        self.first_run = True  # For font resizing logic

        # --- 3. Window Setup ---
        self.button_objects = {}  # Dictionary to store button widgets
        self.setWindowTitle("Calculator")
        self.resize(320, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Toolbar: settings, copy, history, theme ---
        toolbar = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(toolbar)
        self.settings_button = QtWidgets.QPushButton("⚙")
        self.settings_button.clicked.connect(self.open_settings)
        self.copy_button = QtWidgets.QPushButton("📋")
        self.copy_button.setToolTip("Copy display (Shift: paste)")
        self.copy_button.clicked.connect(self.handle_clipboard)
        self.history_button = QtWidgets.QPushButton("Show History")
        self.history_button.clicked.connect(self.toggle_history)
        self.theme_button = QtWidgets.QPushButton()
        self.theme_button.clicked.connect(self.toggle_theme)
        for tool in (self.settings_button, self.copy_button, self.history_button, self.theme_button):
            toolbar.addWidget(tool)

        # --- 5. Display Setup ---
        self.display = QtWidgets.QLineEdit(self.calculator.buffer)
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(36)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 6. History Panel ---
        self.history_list = QtWidgets.QListWidget()
        self.history_list.setToolTip("Click to reuse")
        self.history_list.itemClicked.connect(self.handle_history_clicked)
        self.history_list.setVisible(self.setting_value_list["show_history"] == True)
        if self.setting_value_list["show_history"] == True:
            self.history_button.setText("Hide History")
        main_v_layout.addWidget(self.history_list, 2)

        # --- 7. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for i in range(5):
            button_grid.setRowStretch(i, 1)
        for j in range(4):
            button_grid.setColumnStretch(j, 1)

        # (text, row, column)
        self.buttons = [
            ('C', 0, 0), ('(', 0, 1), (')', 0, 2), ('⌫', 0, 3),
            ('7', 1, 0), ('8', 1, 1), ('9', 1, 2), ('÷', 1, 3),
            ('4', 2, 0), ('5', 2, 1), ('6', 2, 2), ('×', 2, 3),
            ('1', 3, 0), ('2', 3, 1), ('3', 3, 2), ('-', 3, 3),
            ('0', 4, 0), ('.', 4, 1), ('=', 4, 2), ('+', 4, 3)
        ]

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)  # Keys go to the window, not to the last clicked button
            button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()
        self.refresh()

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)

        for button_instance in self.button_objects.values():
            # Font size follows the button height, but never below 12pt
            size = 12 if self.first_run else max(12, int(button_instance.height() / 4))
            font = button_instance.font()
            font.setPointSize(size)
            button_instance.setFont(font)
        self.first_run = False

        self.update_font_size_display()

    def keyPressEvent(self, event):
        if event.matches(QtGui.QKeySequence.StandardKey.Paste):
            self.paste_clipboard()
            return
        if event.matches(QtGui.QKeySequence.StandardKey.Copy):
            pyperclip.copy(self.calculator.buffer)
            return

        key = QT_KEYS.get(event.key(), event.text())
        if key and self.calculator.handle_key(key):
            self.after_event(key)
            return
        super().keyPressEvent(event)

    def handle_button_press(self, value):
        key = BUTTON_KEYS.get(value, value)
        self.calculator.handle_key(key)
        self.after_event(key)

    def after_event(self, key):
        self.refresh()
        if key == "Enter" or key == "=":
            self.report_error()

    # --- Rendering ---
    def refresh(self):
        """Render buffer and history from the Controller."""
        self.display.setText(self.calculator.buffer)
        self.history_list.clear()
        for entry in self.calculator.history:
            self.history_list.addItem(str(entry))
        self.update_font_size_display()

    def report_error(self):
        outcome = self.calculator.last_outcome
        if outcome is None or outcome.ok or self.setting_value_list["error_dialog"] != True:
            return

        error_obj = outcome.error
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(E.describe(error_obj))
        error_box.setInformativeText(f"Details: {error_obj.message}\nEquation: {error_obj.equation}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def update_font_size_display(self):
        # --- Dynamic Font Resizing for Display ---
        MAX_FONT_SIZE = 48
        MIN_FONT_SIZE = 10
        current_text = self.display.text()

        font = self.display.font()
        available_width = self.display.width() - 10
        size = MAX_FONT_SIZE

        # Shrink until the text fits
        while size > MIN_FONT_SIZE:
            font.setPointSize(size)
            if QtGui.QFontMetrics(font).horizontalAdvance(current_text) <= available_width:
                break
            size -= 1

        font.setPointSize(size)
        self.display.setFont(font)

    # --- History ---
    def toggle_history(self):
        visible = self.history_list.isHidden()
        self.history_list.setVisible(visible)
        self.history_button.setText("Hide History" if visible else "Show History")

    def handle_history_clicked(self, item):
        index = self.history_list.row(item)
        if shift_pressed() and self.setting_value_list["shift_to_copy"] == True:
            pyperclip.copy(self.calculator.history[index].result)
            return

        self.calculator.select_history(index)
        self.history_list.setVisible(False)
        self.history_button.setText("Show History")
        self.refresh()

    # --- Clipboard ---
    def handle_clipboard(self):
        # Shift held → paste, otherwise copy the display
        if shift_pressed():
            self.paste_clipboard()
        else:
            pyperclip.copy(self.calculator.buffer)

    def paste_clipboard(self):
        clipboard_text = pyperclip.paste()
        if not clipboard_text:
            return

        auto_enter = self.setting_value_list["after_paste_enter"] == True
        self.calculator.paste(clipboard_text, evaluate=auto_enter)
        self.after_event("Enter" if self.calculator.result_shown else "")

    # --- Settings / Theme ---
    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # --- Reload settings after dialog closes ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.calculator.reload_history_size()
        self.update_darkmode()
        self.refresh()

    def toggle_theme(self):
        self.setting_value_list["darkmode"] = not self.setting_value_list["darkmode"]
        config_manager.save_setting(self.setting_value_list)
        self.update_darkmode()

    def update_darkmode(self):
        # --- Apply Dark/Light Mode to all buttons ---
        darkmode = self.setting_value_list["darkmode"] == True
        for text, button in self.button_objects.items():
            if text == '=':
                button.setStyleSheet(EQUALS_BUTTON)
            else:
                button.setStyleSheet(DARK_BUTTON if darkmode else "font-weight: normal;")

        if darkmode:
            self.setStyleSheet("background-color: #121212; color: white;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.theme_button.setText("Light Mode")
        else:
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.theme_button.setText("Dark Mode")

    def get_message_box_stylesheet(self):
        # Provides a matching stylesheet for error boxes in dark mode
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""  # Use default stylesheet in light mode


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
