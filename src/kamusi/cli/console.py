"""Rich console singleton."""

import os
import sys

from rich.console import Console

# Force UTF-8 encoding on Windows to avoid cp1252 issues with Unicode chars
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

# Use force_terminal=False to avoid legacy Windows renderer issues with Unicode
console = Console(force_terminal=False, legacy_windows=False)
