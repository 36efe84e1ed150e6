"""
beadroute - Logging Module
Provides centralized logging functionality for routing and bd invocations.
"""
import os
import sys
from datetime import datetime

from conf import BEADROUTE_HOME, LOG_FILE

# =============================================================================
# CONFIGURATION
# =============================================================================

LOG = os.environ.get("BEADROUTE_LOG", "1") != "0"
LOG_TO_STDERR = True  # stdout is reserved for command output (JSON)
first_line = True

# =============================================================================
# LOGGING
# =============================================================================

def route_log(message: str) -> None:
    """Append log message to route.log if LOG is enabled."""
    global first_line
    if not LOG:
        return
    if first_line:
        first_line = False
        BEADROUTE_HOME.mkdir(parents=True, exist_ok=True)
        route_log("--- New beadroute Session ---")
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_line = f"[{timestamp}] {message}\n"
    if LOG_TO_STDERR:
        sys.stderr.write(log_line)
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(log_line)


def route_log_print() -> None:
    """Print the contents of the log file to stdout."""
    if LOG_FILE.exists():
        log_contents = LOG_FILE.read_text(encoding="utf-8")
        if log_contents:
            print(log_contents, end="")
        else:
            print("[beadroute log is empty]")
    else:
        print("[beadroute log file does not exist]")


def route_log_clear() -> None:
    """Delete the log file."""
    if LOG_FILE.exists():
        LOG_FILE.unlink()
