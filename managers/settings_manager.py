# MiniPixelAnimator/managers/settings_manager.py
import json
import os
import sys

from appdirs import user_config_dir

APP_NAME = "MiniPixelAnimator"
APP_AUTHOR = "MiniPixel"
CONFIG_FILE_NAME = "pixel_animator_config.json"
CONFIG_KEY_FRAME_DURATION = "frame_duration_ms"


def get_user_config_file_path(filename: str) -> str:
    config_dir_to_use = ""
    try:
        is_packaged = getattr(
            sys, 'frozen', False) and hasattr(sys, '_MEIPASS')
        if is_packaged:
            config_dir_to_use = user_config_dir(
                APP_NAME, APP_AUTHOR, roaming=True)
        else:
            try:
                current_file_dir = os.path.dirname(os.path.abspath(__file__))
                project_root = os.path.dirname(current_file_dir)
            except NameError:
                project_root = os.getcwd()
            config_dir_to_use = os.path.join(project_root, "user_settings")
        os.makedirs(config_dir_to_use, exist_ok=True)
        return os.path.join(config_dir_to_use, filename)
    except OSError as e:
        print(
            f"SETTINGS WARNING: Config path error for '{filename}' (CWD fallback): {e}")
        fallback_dir = os.path.join(os.getcwd(), "user_settings_fallback")
        os.makedirs(fallback_dir, exist_ok=True)
        return os.path.join(fallback_dir, filename)


def load_config(filepath: str | None = None) -> dict:
    """Reads the JSON config; a missing or unreadable file gives an empty dict."""
    if filepath is None:
        filepath = get_user_config_file_path(CONFIG_FILE_NAME)
    if not os.path.exists(filepath):
        return {}
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        print(f"SETTINGS WARNING: Error decoding config '{filepath}': {e}. Using defaults.")
        return {}
    except OSError as e:
        print(f"SETTINGS WARNING: Could not read config '{filepath}': {e}. Using defaults.")
        return {}
    if not isinstance(config, dict):
        print(f"SETTINGS WARNING: Config '{filepath}' is not a JSON object. Using defaults.")
        return {}
    return config


def read_configured_frame_duration(filepath: str | None = None):
    """
    Raw frame duration from the config file, unvalidated (None if absent).
    Validation and the 500ms fallback happen in animator.playback.
    """
    return load_config(filepath).get(CONFIG_KEY_FRAME_DURATION)
