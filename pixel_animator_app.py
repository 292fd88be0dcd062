# MiniPixelAnimator/pixel_animator_app.py
import sys
import os
import time
import traceback

# --- Ensure project root is in sys.path ---
project_root_for_path = os.path.dirname(os.path.abspath(__file__))
if project_root_for_path not in sys.path:
    sys.path.insert(0, project_root_for_path)

from PyQt6.QtWidgets import QApplication

CRASH_LOG_FILENAME = "app_crash_log.txt"


def main():
    app = QApplication(sys.argv)
    try:
        from gui.main_window import MainWindow
    except ImportError as e:
        print(f"FATAL: Failed to import core application modules: {e}")
        sys.exit(1)
    print("APP INFO: Attempting to initialize MainWindow...")
    main_window = MainWindow()
    main_window.show()
    print("APP INFO: MainWindow shown. Starting application event loop.")
    sys.exit(app.exec())


def write_crash_log(error: Exception, log_file_path: str):
    error_message = f"Timestamp: {time.strftime('%Y-%m-%d %H:%M:%S')}\n"
    error_message += f"Error Type: {type(error).__name__}\n"
    error_message += f"Error Message: {str(error)}\n"
    error_message += "Traceback:\n"
    error_message += traceback.format_exc()
    try:
        with open(log_file_path, "w", encoding="utf-8") as f_log:
            f_log.write(error_message)
        print(f"APP_CRASH: Detailed error information written to: {log_file_path}")
    except OSError as e_log:
        print(f"APP_CRASH_LOGGING_ERROR: Could not write crash log to file: {e_log}")


if __name__ == '__main__':
    log_file_path = os.path.join(os.path.abspath("."), CRASH_LOG_FILENAME)
    try:
        if os.path.exists(log_file_path):
            os.remove(log_file_path)
        main()
    except Exception as e_top:
        print(f"APP_CRASH: A fatal error occurred in top-level main execution: {e_top}")
        write_crash_log(e_top, log_file_path)
        traceback.print_exc()
        sys.exit(1)
