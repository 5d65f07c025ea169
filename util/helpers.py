import os
import json
import re
from typing import Any

from util.paths import BASE_DIR

# ------------------------------------------------------------
# GENERIC JSON LOADER
# ------------------------------------------------------------
def load_json(name: str, default: Any = None) -> Any:
    """Read a JSON file (absolute or relative to the project root)."""
    path = name if os.path.isabs(name) else os.path.join(BASE_DIR, name)
    if not os.path.exists(path):
        return {} if default is None else default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except Exception as e:
        print(f"⚠ Failed to read {os.path.basename(path)}: {e}")
        return {} if default is None else default


def save_json_atomic(data: Any, path: str):
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True)
    os.replace(tmp, path)


def collapse_spaces(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def mask_secret(value: str, keep: int = 10) -> str:
    """First few characters of a token followed by an ellipsis."""
    if not value:
        return "(missing)"
    if len(value) <= keep:
        return value[:2] + "..."
    return value[:keep] + "..."
