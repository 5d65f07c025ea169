"""Logging helpers.

Every tool prints straight to the terminal. log() adds a level emoji and
mirrors the line into a dated file under logs/ so patch runs leave a trail.
"""

import os
from datetime import datetime

from util.paths import LOGS_FOLDER

RESET  = "\033[0m"
BOLD   = "\033[1m"
DIM    = "\033[2m"

# Colors
RED    = "\033[31m"
GREEN  = "\033[32m"
YELLOW = "\033[33m"
BLUE   = "\033[34m"
CYAN   = "\033[36m"
WHITE  = "\033[37m"

LEVEL_PREFIX = {
    "info": "",
    "ok": "✅ ",
    "warn": "⚠ ",
    "error": "❌ ",
    "debug": "🔍 ",
    "save": "💾 ",
}

# Set to False by tests or callers that do not want a file trail
WRITE_LOG_FILE = True


def _log_file_path() -> str:
    return os.path.join(LOGS_FOLDER, f"maintenance_{datetime.now():%Y%m%d}.log")


def _append_to_file(line: str):
    try:
        with open(_log_file_path(), "a", encoding="utf-8") as f:
            f.write(f"{datetime.now():%Y-%m-%d %H:%M:%S} {line}\n")
    except OSError as e:
        print(f"{YELLOW}[logger] Could not write log file ({e}).{RESET}")


def log(msg: str, level: str = "info"):
    line = f"{LEVEL_PREFIX.get(level, '')}{msg}"
    print(line)
    if WRITE_LOG_FILE:
        _append_to_file(line)


def banner(title: str, width: int = 50):
    print(f"\n{BOLD}{CYAN}{title}{RESET}")
    print(f"{BLUE}{'=' * width}{RESET}")
