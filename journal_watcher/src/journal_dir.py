"""Default location of the game's journal directory."""

import os
import sys

WINDOWS_SUBDIR = os.path.join("Saved Games", "Frontier Developments", "Elite Dangerous")
FALLBACK_PATH = "Journal.log"


def default_journal_dir(platform: str | None = None, home: str | None = None) -> str:
    """Return the save-data directory on Windows, a relative path elsewhere."""
    if platform is None:
        platform = sys.platform
    if platform.startswith("win"):
        if home is None:
            home = os.path.expanduser("~")
        return os.path.join(home, WINDOWS_SUBDIR)
    return FALLBACK_PATH
