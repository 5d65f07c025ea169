import os
import json
from typing import Any, Dict

from dotenv import load_dotenv

from util.paths import CONFIG_PATH

# ================= ENV =================
load_dotenv()

# ================= CONFIG SYSTEM =================

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,

    "site_base_url": "https://www.mancavesportscardsllc.com",
    "admin_base_url": "https://web-production-9efa.up.railway.app",
    "admin_timeout_sec": 30,
    "admin_delay_sec": 2.0,

    "cache_default_ttl": 3600,
    "cache_search_ttl": 1800,
    "cache_live_ttl": 300,
    "cache_analysis_ttl": 7200,

    "oauth_port": 3001,
    "oauth_callback_path": "/auth/callback",

    "patch_batch_size": 500,
}


def _ensure_dir(path: str):
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder)


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load maintenance_config.json with fallback to DEFAULT_CONFIG."""
    cfg = DEFAULT_CONFIG.copy()
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if isinstance(user_cfg, dict):
                cfg.update(user_cfg)
        except Exception as e:
            print(f"[Config] Could not load config file ({e}). Using defaults.")
    else:
        try:
            _ensure_dir(path)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(cfg, f, indent=2)
            print(f"[Config] Created default config at {os.path.basename(path)}")
        except Exception as e:
            print(f"[Config] Could not write default config file ({e}).")
    return cfg


def env_str(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def env_flag(name: str) -> bool:
    return env_str(name).lower() in ("1", "true", "yes", "on")
