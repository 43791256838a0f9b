"""Static configuration for chatsieve.

Pattern settings come from flags or a config file. Everything else here is
read from the environment (optionally via a .env file) so it can be tweaked
without touching Python.
"""

import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Filtered copies are named <prefix><input name> unless an explicit output is given.
OUTPUT_PREFIX = "filtered_"

# Directory inputs only pick up files with these suffixes.
INPUT_SUFFIXES = (".html", ".htm")

# Config file used when neither --config nor any pattern flag is passed.
DEFAULT_CONFIG_PATH = os.getenv("CHATSIEVE_CONFIG")

# Logging configuration:
# - enabled/level/console for the stream handler
# - file.* for an optional rotating log file
_log_file = os.getenv("CHATSIEVE_LOG_FILE")
LOGGING = {
    "enabled": _env_bool("CHATSIEVE_LOG_ENABLED", True),
    "level": os.getenv("CHATSIEVE_LOG_LEVEL", "WARNING"),
    "console": _env_bool("CHATSIEVE_LOG_CONSOLE", True),
    "file": {
        "enabled": bool(_log_file),
        "path": _log_file or "logs/chatsieve.log",
        "max_bytes": int(os.getenv("CHATSIEVE_LOG_MAX_BYTES", 5 * 1024 * 1024)),
        "backup_count": int(os.getenv("CHATSIEVE_LOG_BACKUP_COUNT", 5)),
    },
}
