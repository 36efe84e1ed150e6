"""beadroute - Central path and command configuration."""

import os
import shlex
from pathlib import Path

USER_HOME = Path.home()
FLOW_HOME = USER_HOME / ".flow"
BEADROUTE_HOME = FLOW_HOME / "beadroute"

LOG_FILE = BEADROUTE_HOME / "route.log"

# =============================================================================
# TOWN LAYOUT
# =============================================================================

BEADS_DIR_NAME = ".beads"
ROUTES_FILE_NAME = "routes.jsonl"

# Present only at the town root; rigs carry their own mayor/ dirs without it.
TOWN_MARKER = Path("mayor") / "town.json"

TOWN_ROUTE_PATH = "."

# =============================================================================
# STORE EXECUTABLE
# =============================================================================


def _bd_command() -> list[str]:
    raw = os.environ.get("BEADROUTE_BD", "").strip()
    return shlex.split(raw) if raw else ["bd"]


def bd_timeout() -> float | None:
    """Seconds a single bd call may run, from BEADROUTE_BD_TIMEOUT; None waits forever."""
    raw = os.environ.get("BEADROUTE_BD_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"BEADROUTE_BD_TIMEOUT must be a number of seconds, got {raw!r}") from None


BD_COMMAND = _bd_command()

# Would let bd pick a database without consulting routes.jsonl.
STRIPPED_ENV_VARS = ("BEADS_DIR", "BEADS_DB")
