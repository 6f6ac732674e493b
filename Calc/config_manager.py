# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


# Used when config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "darkmode": True,
    "show_history": False,
    "history_size": 20,
    "shift_to_copy": True,
    "after_paste_enter": False,
    "error_dialog": False,
    "debug": False
}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict.update(json.load(f))

    except (FileNotFoundError, json.JSONDecodeError):
        pass


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)




def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (FileNotFoundError, PermissionError):
        return{}





if __name__ == "__main__":
    print(load_setting_value("all"))

    all_settings = load_setting_value("all")
    all_settings["darkmode"] = not all_settings["darkmode"]
    save_setting(all_settings)
    print(load_setting_value("darkmode"))
