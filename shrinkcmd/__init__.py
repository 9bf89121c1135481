"""shrinkcmd: shorten shell command lines by binding repeated paths to variables.

The pipeline is tokenizer -> savings -> names -> engine; cli wires it to
stdin and stdout.
"""

import os

__version__ = "0.3.0"


def data_dir() -> str:
    """Return the shrinkcmd data directory (for config and debug log).

    Uses %APPDATA%/shrinkcmd on Windows, ~/.shrinkcmd on Unix.
    """
    if os.name == "nt":
        appdata = os.environ.get(
            "APPDATA", os.path.join(os.path.expanduser("~"), "AppData", "Roaming")
        )
        return os.path.join(appdata, "shrinkcmd")
    return os.path.join(os.path.expanduser("~"), ".shrinkcmd")
