"""
flixrec - Logging Module
Provides centralized logging functionality for the engine and the command shell.
"""
import sys
from datetime import datetime

from flix_utils import conf

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG = True  # Set to False to disable logging
LOG_TO_STDERR = False  # Keep command output clean unless --verbose is given
first_line = True

# =============================================================================
# LOGGING
# =============================================================================

def flix_log(message: str) -> None:
    """Append log message to flixrec.log if LOG is enabled."""
    global first_line
    if not LOG:
        return
    if first_line:
        first_line = False
        conf.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        flix_log("--- New flixrec Session ---")
        flix_log("Arguments: " + " ".join(sys.argv[1:]))
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_line = f"[{timestamp}] {message}\n"
    if LOG_TO_STDERR:
        sys.stderr.write(log_line)
    with open(conf.LOG_FILE, "a", encoding="utf-8") as f:
        f.write(log_line)


def flix_log_print() -> None:
    """Print the contents of the log file to stdout."""
    if conf.LOG_FILE.exists():
        log_contents = conf.LOG_FILE.read_text(encoding="utf-8")
        if log_contents:
            print(log_contents, end="")
        else:
            print("[flixrec log is empty]")
    else:
        print("[flixrec log file does not exist]")


def flix_log_clear() -> None:
    """Delete the log file."""
    if conf.LOG_FILE.exists():
        conf.LOG_FILE.unlink()
