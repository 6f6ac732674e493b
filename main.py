# Main.py
""""" Entry point for the Keystroke Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI (or the console front end with --console)

"""""
import sys
from pathlib import Path
from Calc import config_manager as config_manager, Controller as Controller
from Calc import error as E


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler, so the check is skipped.
    """

    modules_dir = PROJECT_ROOT / "Calc"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "MathEngine.py",
        modules_dir / "InputEditor.py",
        modules_dir / "History.py",
        modules_dir / "Controller.py",
        modules_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print(f"Error 1000: {E.ERROR_MESSAGES['1000']}")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main(argv=None):

    """
    Load configuration and start the front end.
    - Keep this thin: no business logic here.
    """
    argv = sys.argv[1:] if argv is None else argv

    all_settings = config_manager.load_setting_value("all")
    print("Config loaded:", all_settings)

    if "--console" in argv:
        Controller.console_main()
        return

    # Imported late so the console mode works without a display server
    from Calc import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
